from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, ClassVar, Dict, Tuple

from actiontree.config import StepErrorPolicy
from actiontree.core.actions.base import Action
from actiontree.core.errors import StepExecutionError

if TYPE_CHECKING:
    from actiontree.core.context import ExecutionContext

logger = logging.getLogger(__name__)


class SequenceAction(Action):
    """Run steps in order.

    A failing step does not stop the ones after it: the error is wrapped in a
    StepExecutionError, logged and recorded on the context. With the
    ``fail_fast`` policy the wrapped error is raised instead.
    """

    type_tag: ClassVar[str] = "sequence"

    steps: Tuple[Action, ...] = ()

    def execute(self, context: "ExecutionContext") -> None:
        logger.info("Executing %d actions in sequence", len(self.steps))
        for index, step in enumerate(self.steps):
            try:
                step.execute(context)
            except Exception as exc:
                if isinstance(exc, StepExecutionError):
                    error = exc
                else:
                    error = StepExecutionError(index, step.describe(), exc)
                if context.step_error_policy == StepErrorPolicy.FAIL_FAST:
                    if error is exc:
                        raise
                    raise error from exc
                logger.warning("Sequence step failed, continuing: %s", error)
                context.record("step", step.describe(), error)

    def children(self) -> Tuple[Action, ...]:
        return self.steps

    def to_node(self) -> Dict[str, Any]:
        return {"type": self.type_tag, "actions": [step.to_node() for step in self.steps]}

    def describe(self) -> str:
        return f"sequence({len(self.steps)} steps)"


__all__ = ["SequenceAction"]
