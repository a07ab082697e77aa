"""Error taxonomy for building and running action trees."""

from __future__ import annotations

from typing import Iterable

from pydantic import ValidationError


class ActionTreeError(Exception):
    """Base class for all action tree failures."""


class MalformedNodeError(ActionTreeError):
    """A wire node is missing required structure for its type."""

    def __init__(self, message: str, *, node_type: str | None = None, cause: Exception | None = None):
        self.message = message
        self.node_type = node_type
        self.cause = cause
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        base = self.message if self.node_type is None else f"{self.message} (type '{self.node_type}')"
        if isinstance(self.cause, ValidationError):
            return f"{base}: {format_validation_errors(self.cause.errors())}"
        if self.cause:
            return f"{base}: {self.cause}"
        return base


class UnknownActionTypeError(ActionTreeError):
    """No builder is registered for a node's type tag."""

    def __init__(self, type_tag: str, known: Iterable[str] = ()):
        self.type_tag = type_tag
        self.known = sorted(known)
        super().__init__(f"Unknown action type: {type_tag} (known: {', '.join(self.known)})")


class ExpressionEvaluationError(ActionTreeError):
    """A condition expression could not be parsed or evaluated."""

    def __init__(self, expression: str, reason: str):
        self.expression = expression
        self.reason = reason
        super().__init__(f"Cannot evaluate expression {expression!r}: {reason}")


class StepExecutionError(ActionTreeError):
    """A step inside a sequence raised while executing."""

    def __init__(self, index: int, step: str, cause: Exception):
        self.index = index
        self.step = step
        self.cause = cause
        super().__init__(f"Step {index} ({step}) failed: {cause}")


def format_validation_errors(errors: Iterable[dict]) -> str:
    """Condense pydantic error dicts into a single line, at most three entries."""
    error_list = list(errors)
    snippets = []
    for err in error_list:
        loc = ".".join(str(entry) for entry in err.get("loc", [])) or "<root>"
        msg = err.get("msg") or err.get("type") or "validation error"
        snippets.append(f"{loc}: {msg}")
        if len(snippets) >= 3:
            break
    remaining = len(error_list) - len(snippets)
    if remaining > 0:
        snippets.append(f"... ({remaining} more)")
    return "; ".join(snippets)


__all__ = [
    "ActionTreeError",
    "ExpressionEvaluationError",
    "MalformedNodeError",
    "StepExecutionError",
    "UnknownActionTypeError",
    "format_validation_errors",
]
