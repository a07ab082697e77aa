from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, ClassVar, Dict, Tuple

from pydantic import Field, StrictInt

from actiontree.core.actions.base import Action

if TYPE_CHECKING:
    from actiontree.core.context import ExecutionContext

logger = logging.getLogger(__name__)


class RepeatAction(Action):
    """Run the body a fixed number of times with the same context.

    There is no loop counter visible to the body and no way to break out early.
    """

    type_tag: ClassVar[str] = "loop"

    count: StrictInt = Field(ge=0)
    body: Action

    def execute(self, context: "ExecutionContext") -> None:
        logger.info("Starting loop for %d iterations", self.count)
        for i in range(self.count):
            logger.debug("Loop iteration %d", i + 1)
            self.body.execute(context)

    def children(self) -> Tuple[Action, ...]:
        return (self.body,)

    def to_node(self) -> Dict[str, Any]:
        return {
            "type": self.type_tag,
            "params": {"iterations": self.count},
            "action": self.body.to_node(),
        }

    def describe(self) -> str:
        return f"loop(x{self.count})"


__all__ = ["RepeatAction"]
