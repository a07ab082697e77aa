from __future__ import annotations

from typing import Any, Dict, List, Literal

from pydantic import BaseModel, Field

from actiontree.config import StepErrorPolicy
from actiontree.core.channels import LoggingNotifier, Notifier


class RecoveredError(BaseModel):
    """An error absorbed by a node instead of aborting the run."""

    kind: Literal["expression", "step"]
    action: str
    message: str


class ExecutionContext(BaseModel):
    """Everything a node sees while executing: caller variables plus run plumbing.

    One context is created per run and the same instance is handed to every
    node. Nodes only read it, apart from appending to `recovered_errors`.
    """

    variables: Dict[str, Any] = Field(default_factory=dict)
    notifier: Notifier = Field(default_factory=LoggingNotifier)
    step_error_policy: StepErrorPolicy = StepErrorPolicy.CONTINUE
    recovered_errors: List[RecoveredError] = Field(default_factory=list)

    model_config = {"arbitrary_types_allowed": True}

    def lookup(self, name: str) -> Any:
        return self.variables.get(name)

    def record(self, kind: str, action: str, error: Exception) -> RecoveredError:
        entry = RecoveredError(kind=kind, action=action, message=str(error))  # type: ignore[arg-type]
        self.recovered_errors.append(entry)
        return entry


__all__ = ["ExecutionContext", "RecoveredError"]
