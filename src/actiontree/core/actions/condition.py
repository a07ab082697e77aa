from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, ClassVar, Dict, Optional, Tuple

from actiontree.core.actions.base import Action
from actiontree.core.errors import ExpressionEvaluationError
from actiontree.core.expression import evaluate_condition

if TYPE_CHECKING:
    from actiontree.core.context import ExecutionContext

logger = logging.getLogger(__name__)


class ConditionAction(Action):
    """Branch on a boolean expression evaluated against the context variables.

    The expression is kept as text and only evaluated when the node runs. An
    expression that cannot be evaluated counts as false: the failure is logged
    and recorded on the context, and the false branch (if any) runs instead.

    Example JSON:
        {
          "type": "condition",
          "params": {"expression": "date === '1.1.2025'"},
          "trueAction": {"type": "send_sms", "params": {"phone": "1234567890"}},
          "falseAction": {"type": "sequence", "actions": []}
        }
    """

    type_tag: ClassVar[str] = "condition"

    expression: str
    when_true: Action
    when_false: Optional[Action] = None

    def evaluate(self, context: "ExecutionContext") -> bool:
        try:
            return evaluate_condition(self.expression, context.variables)
        except ExpressionEvaluationError as exc:
            logger.warning("Error evaluating condition: %s", exc)
            context.record("expression", self.describe(), exc)
            return False

    def execute(self, context: "ExecutionContext") -> None:
        result = self.evaluate(context)
        logger.info("Condition %r evaluated to %s", self.expression, result)
        if result:
            self.when_true.execute(context)
        elif self.when_false is not None:
            self.when_false.execute(context)

    def children(self) -> Tuple[Action, ...]:
        if self.when_false is None:
            return (self.when_true,)
        return (self.when_true, self.when_false)

    def to_node(self) -> Dict[str, Any]:
        node: Dict[str, Any] = {
            "type": self.type_tag,
            "params": {"expression": self.expression},
            "trueAction": self.when_true.to_node(),
        }
        if self.when_false is not None:
            node["falseAction"] = self.when_false.to_node()
        return node

    def describe(self) -> str:
        return f"condition({self.expression})"


__all__ = ["ConditionAction"]
