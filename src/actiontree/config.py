"""Runtime configuration for the tree execution service."""

from __future__ import annotations

import os
from enum import Enum

from pydantic import BaseModel, field_validator


class StepErrorPolicy(str, Enum):
    """What a sequence does when one of its steps raises."""

    CONTINUE = "continue"
    FAIL_FAST = "fail_fast"


LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class TreeServiceConfig(BaseModel):
    step_error_policy: StepErrorPolicy = StepErrorPolicy.CONTINUE
    log_level: str = "WARNING"

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        level = str(value).strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {value!r}. Available: {', '.join(LOG_LEVELS)}")
        return level

    @classmethod
    def from_env(cls) -> "TreeServiceConfig":
        """Build a config from ACTIONTREE_* environment variables, falling back to defaults."""
        data = {}
        policy = os.environ.get("ACTIONTREE_STEP_POLICY")
        if policy:
            data["step_error_policy"] = policy.strip().lower().replace("-", "_")
        level = os.environ.get("ACTIONTREE_LOG_LEVEL")
        if level:
            data["log_level"] = level
        return cls.model_validate(data)


__all__ = ["LOG_LEVELS", "StepErrorPolicy", "TreeServiceConfig"]
