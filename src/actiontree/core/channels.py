"""Notification channels: the delivery side of notify actions.

Actions never talk to a transport directly. They build a `Notification` and
hand it to whichever `Notifier` the execution context carries, so a real SMS
gateway or mail relay can be plugged in without touching the tree code.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Dict, List, Literal

from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)

ChannelName = Literal["sms", "email"]


class Notification(BaseModel):
    """A single message to deliver."""

    model_config = ConfigDict(frozen=True)

    channel: ChannelName
    address_to: str
    sender: str | None = None

    def describe(self) -> str:
        if self.channel == "sms":
            return f"SMS to {self.address_to}"
        if self.sender:
            return f"email from {self.sender} to {self.address_to}"
        return f"email to {self.address_to}"


class Notifier(ABC):
    """Delivers notifications produced by notify actions."""

    @abstractmethod
    def deliver(self, notification: Notification) -> None:
        raise NotImplementedError


class LoggingNotifier(Notifier):
    """Simulated channel: logs what would have been sent."""

    def deliver(self, notification: Notification) -> None:
        if notification.channel == "sms":
            logger.info("Sending SMS to %s", notification.address_to)
        else:
            logger.info("Sending email from %s to %s", notification.sender, notification.address_to)


class RecordingNotifier(Notifier):
    """Keeps an ordered outbox, optionally forwarding to another notifier."""

    def __init__(self, forward_to: Notifier | None = None):
        self.forward_to = forward_to
        self.outbox: List[Notification] = []

    def deliver(self, notification: Notification) -> None:
        if self.forward_to is not None:
            self.forward_to.deliver(notification)
        self.outbox.append(notification)

    def addresses(self, channel: str | None = None) -> List[str]:
        return [n.address_to for n in self.outbox if channel is None or n.channel == channel]


class RoutingNotifier(Notifier):
    """Dispatches each notification to the notifier registered for its channel."""

    def __init__(self, routes: Dict[str, Notifier] | None = None):
        self.routes: Dict[str, Notifier] = dict(routes or {})

    def deliver(self, notification: Notification) -> None:
        if notification.channel not in self.routes:
            available = ", ".join(sorted(self.routes.keys()))
            raise KeyError(f"No notifier for channel: {notification.channel}. Available: {available}")
        self.routes[notification.channel].deliver(notification)


__all__ = [
    "ChannelName",
    "LoggingNotifier",
    "Notification",
    "Notifier",
    "RecordingNotifier",
    "RoutingNotifier",
]
