from __future__ import annotations

import json
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, ClassVar, Dict, Iterator, Tuple

from pydantic import BaseModel, ConfigDict

if TYPE_CHECKING:
    from actiontree.core.context import ExecutionContext


class Action(BaseModel, ABC):
    """Base class for all tree nodes.

    Actions are frozen once built; a tree is rebuilt from its wire form for
    every run.
    """

    model_config = ConfigDict(frozen=True)

    type_tag: ClassVar[str] = ""

    @abstractmethod
    def execute(self, context: "ExecutionContext") -> None:
        raise NotImplementedError

    @abstractmethod
    def to_node(self) -> Dict[str, Any]:
        """Return the wire form that deserializes back into an equal action."""
        raise NotImplementedError

    def to_json(self, **kwargs: Any) -> str:
        return json.dumps(self.to_node(), **kwargs)

    def children(self) -> Tuple["Action", ...]:
        return ()

    def walk(self) -> Iterator["Action"]:
        """Yield this action and every descendant, depth-first in wire order."""
        yield self
        for child in self.children():
            yield from child.walk()

    def describe(self) -> str:
        return self.__class__.__name__
