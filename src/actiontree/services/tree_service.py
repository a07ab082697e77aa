"""Tree Execution Service: deserialize a wire tree and run it behind one error boundary."""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Literal, Mapping, Optional

from pydantic import BaseModel

from actiontree.config import TreeServiceConfig
from actiontree.core.actions.base import Action
from actiontree.core.channels import LoggingNotifier, Notifier
from actiontree.core.context import ExecutionContext
from actiontree.core.errors import MalformedNodeError
from actiontree.core.registry import ActionRegistry, get_action_registry

logger = logging.getLogger(__name__)


class RunResult(BaseModel):
    """Outcome of one run: success, or a single failure message."""

    status: Literal["success", "error"]
    message: Optional[str] = None
    error_type: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == "success"

    @classmethod
    def success(cls) -> "RunResult":
        return cls(status="success")

    @classmethod
    def failure(cls, error: Exception) -> "RunResult":
        return cls(status="error", message=str(error), error_type=type(error).__name__)


class DecisionTreeService:
    """
    Entry point for callers (CLI, transports): build a tree, then execute it.

    Structural errors and any execution error that no node absorbed end the
    run and come back as a failure `RunResult`; nothing is raised to the
    caller.
    """

    def __init__(
        self,
        registry: ActionRegistry | None = None,
        notifier: Notifier | None = None,
        config: TreeServiceConfig | None = None,
    ):
        """
        Initialize the service.

        Args:
            registry: Registry used to build trees (global registry if None)
            notifier: Delivery channel for notify actions (logging stub if None)
            config: Runtime settings (defaults if None)
        """
        self.registry = registry or get_action_registry()
        self.notifier = notifier or LoggingNotifier()
        self.config = config or TreeServiceConfig()

    def build(self, node: Any) -> Action:
        """
        Deserialize a wire tree without running it.

        Raises:
            MalformedNodeError: If the node structure is invalid
            UnknownActionTypeError: If a node type is not registered
        """
        return self.registry.create(node)

    def new_context(self, variables: Mapping[str, Any] | None = None) -> ExecutionContext:
        return ExecutionContext(
            variables=dict(variables or {}),
            notifier=self.notifier,
            step_error_policy=self.config.step_error_policy,
        )

    def run(self, node: Any, context: Mapping[str, Any] | None = None) -> RunResult:
        """
        Build the tree from `node` and execute it against `context`.

        Args:
            node: Wire-form root node
            context: Variables visible to condition expressions

        Returns:
            RunResult with status "success", or "error" plus message and error type
        """
        try:
            action = self.build(node)
            run_context = self.new_context(context)
            action.execute(run_context)
        except Exception as exc:
            logger.error("Error processing decision tree: %s", exc)
            return RunResult.failure(exc)

        if run_context.recovered_errors:
            logger.info("Run completed with %d recovered error(s)", len(run_context.recovered_errors))
        return RunResult.success()

    def run_json(self, text: str, context: Mapping[str, Any] | None = None) -> RunResult:
        """Parse a JSON document and run it; invalid JSON is a malformed-node failure."""
        try:
            node: Dict[str, Any] = json.loads(text)
        except json.JSONDecodeError as exc:
            error = MalformedNodeError("Invalid JSON", cause=exc)
            logger.error("Error processing decision tree: %s", error)
            return RunResult.failure(error)
        return self.run(node, context)


__all__ = ["DecisionTreeService", "RunResult"]
