"""
Shared fixtures for action tree tests.
"""

from typing import Iterable

import pytest

from actiontree.core.channels import Notification, Notifier, RecordingNotifier
from actiontree.core.context import ExecutionContext
from actiontree.core.registry import ActionRegistry, register_builtin_actions
from actiontree.services import DecisionTreeService


class FailingNotifier(Notifier):
    """Records deliveries in order, raising for the configured addresses."""

    def __init__(self, failing: Iterable[str] = ()):
        self.failing = set(failing)
        self.attempts: list[str] = []
        self.delivered: list[Notification] = []

    def deliver(self, notification: Notification) -> None:
        self.attempts.append(notification.address_to)
        if notification.address_to in self.failing:
            raise ConnectionError(f"gateway rejected {notification.address_to}")
        self.delivered.append(notification)


@pytest.fixture
def registry() -> ActionRegistry:
    """A fresh registry with the built-in action types."""
    return register_builtin_actions(ActionRegistry())


@pytest.fixture
def recorder() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def make_context(recorder):
    """Build an execution context that delivers into the shared recorder."""

    def _make(variables=None, **kwargs) -> ExecutionContext:
        kwargs.setdefault("notifier", recorder)
        return ExecutionContext(variables=variables or {}, **kwargs)

    return _make


@pytest.fixture
def service(registry, recorder) -> DecisionTreeService:
    return DecisionTreeService(registry=registry, notifier=recorder)



@pytest.fixture
def failing_notifier():
    """Factory for notifiers that raise on specific addresses."""
    return FailingNotifier
