"""Leaf actions that send a message through the context's notifier."""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, ClassVar, Dict

from actiontree.core.actions.base import Action
from actiontree.core.channels import ChannelName, Notification

if TYPE_CHECKING:
    from actiontree.core.context import ExecutionContext


class NotifyAction(Action):
    """Deliver one notification. Delivery failures belong to the notifier."""

    @property
    @abstractmethod
    def channel(self) -> ChannelName:
        raise NotImplementedError

    @property
    @abstractmethod
    def address_to(self) -> str:
        raise NotImplementedError

    def notification(self) -> Notification:
        return Notification(channel=self.channel, address_to=self.address_to)

    def execute(self, context: "ExecutionContext") -> None:
        context.notifier.deliver(self.notification())


class SendSmsAction(NotifyAction):
    type_tag: ClassVar[str] = "send_sms"

    phone: str

    @property
    def channel(self) -> ChannelName:
        return "sms"

    @property
    def address_to(self) -> str:
        return self.phone

    def to_node(self) -> Dict[str, Any]:
        return {"type": self.type_tag, "params": {"phone": self.phone}}

    def describe(self) -> str:
        return f"send_sms({self.phone})"


class SendEmailAction(NotifyAction):
    type_tag: ClassVar[str] = "send_email"

    sender: str
    receiver: str

    @property
    def channel(self) -> ChannelName:
        return "email"

    @property
    def address_to(self) -> str:
        return self.receiver

    def notification(self) -> Notification:
        return Notification(channel="email", address_to=self.receiver, sender=self.sender)

    def to_node(self) -> Dict[str, Any]:
        return {"type": self.type_tag, "params": {"sender": self.sender, "receiver": self.receiver}}

    def describe(self) -> str:
        return f"send_email({self.sender} -> {self.receiver})"


__all__ = ["NotifyAction", "SendEmailAction", "SendSmsAction"]
