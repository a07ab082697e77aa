"""
Action tree node types.

Components:
- Action: base class (execute against a context, serialize to a wire node)
- SendSmsAction / SendEmailAction: notification leaves
- ConditionAction: branch on an expression
- RepeatAction: fixed-count loop (wire type "loop")
- SequenceAction: ordered steps

Example:
    from actiontree.core.registry import get_action_registry

    action = get_action_registry().create(
        {"type": "send_sms", "params": {"phone": "555"}}
    )
    assert action.to_node() == {"type": "send_sms", "params": {"phone": "555"}}
"""

from .base import Action
from .condition import ConditionAction
from .notify import NotifyAction, SendEmailAction, SendSmsAction
from .repeat import RepeatAction
from .sequence import SequenceAction

__all__ = [
    "Action",
    "ConditionAction",
    "NotifyAction",
    "RepeatAction",
    "SendEmailAction",
    "SendSmsAction",
    "SequenceAction",
]
