"""Service Layer: entry points for callers of the action tree core."""

from __future__ import annotations

from .tree_service import DecisionTreeService, RunResult

__all__ = [
    "DecisionTreeService",
    "RunResult",
]
