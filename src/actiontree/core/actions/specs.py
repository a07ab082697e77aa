"""Wire-form models and builders for the built-in action types.

Each built-in node type gets a pydantic model describing its JSON shape and a
builder that turns a validated node into a runtime `Action`, asking the
registry to build child nodes first. Unknown extra keys on a node are ignored.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt

from actiontree.core.actions.base import Action
from actiontree.core.actions.condition import ConditionAction
from actiontree.core.actions.notify import SendEmailAction, SendSmsAction
from actiontree.core.actions.repeat import RepeatAction
from actiontree.core.actions.sequence import SequenceAction

if TYPE_CHECKING:
    from actiontree.core.registry import ActionRegistry

# ---------------------------------------------------------------------------
# Pydantic specs
# ---------------------------------------------------------------------------


class _BaseSpec(BaseModel):
    """Base settings shared by all spec models."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class ActionNode(_BaseSpec):
    """Fields every wire node has."""

    type: str
    params: Optional[Dict[str, Any]] = None


class SmsParams(_BaseSpec):
    phone: str


class EmailParams(_BaseSpec):
    sender: str
    receiver: str


class ConditionParams(_BaseSpec):
    expression: str


class LoopParams(_BaseSpec):
    iterations: StrictInt = Field(ge=0)


class SendSmsNode(ActionNode):
    params: SmsParams


class SendEmailNode(ActionNode):
    params: EmailParams


class ConditionNode(ActionNode):
    params: ConditionParams
    true_action: Any = Field(alias="trueAction")
    false_action: Any = Field(default=None, alias="falseAction")


class LoopNode(ActionNode):
    params: LoopParams
    action: Any


class SequenceNode(ActionNode):
    actions: List[Any]


# ---------------------------------------------------------------------------
# Runtime builders
# ---------------------------------------------------------------------------


def build_send_sms(node: Dict[str, Any], registry: "ActionRegistry") -> Action:
    spec = SendSmsNode.model_validate(node)
    return SendSmsAction(phone=spec.params.phone)


def build_send_email(node: Dict[str, Any], registry: "ActionRegistry") -> Action:
    spec = SendEmailNode.model_validate(node)
    return SendEmailAction(sender=spec.params.sender, receiver=spec.params.receiver)


def build_condition(node: Dict[str, Any], registry: "ActionRegistry") -> Action:
    spec = ConditionNode.model_validate(node)
    when_true = registry.create(spec.true_action)
    when_false = registry.create(spec.false_action) if spec.false_action is not None else None
    return ConditionAction(expression=spec.params.expression, when_true=when_true, when_false=when_false)


def build_loop(node: Dict[str, Any], registry: "ActionRegistry") -> Action:
    spec = LoopNode.model_validate(node)
    return RepeatAction(count=spec.params.iterations, body=registry.create(spec.action))


def build_sequence(node: Dict[str, Any], registry: "ActionRegistry") -> Action:
    spec = SequenceNode.model_validate(node)
    return SequenceAction(steps=tuple(registry.create(item) for item in spec.actions))


BUILTIN_BUILDERS = {
    SendSmsAction.type_tag: build_send_sms,
    SendEmailAction.type_tag: build_send_email,
    ConditionAction.type_tag: build_condition,
    RepeatAction.type_tag: build_loop,
    SequenceAction.type_tag: build_sequence,
}


__all__ = [
    "ActionNode",
    "BUILTIN_BUILDERS",
    "ConditionNode",
    "LoopNode",
    "SendEmailNode",
    "SendSmsNode",
    "SequenceNode",
    "build_condition",
    "build_loop",
    "build_send_email",
    "build_send_sms",
    "build_sequence",
]
