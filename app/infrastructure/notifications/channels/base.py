"""Notification channel abstract base class.

All channel implementations (Slack, Email, Webhook) derive from this class
and declare which notification operations they support.
"""

from abc import ABC, abstractmethod
from typing import Any

from infrastructure.notifications.capabilities import (
    CapabilityDeclaration,
    NotificationCapability,
)
from infrastructure.notifications.errors import UnsupportedNotificationError


class NotificationChannel(ABC):
    """Abstract base class for notification channels.

    Each channel delivers through a specific transport:
    - SlackWebhookChannel: Slack incoming webhook (Block Kit message)
    - TemplatedEmailChannel: GC Notify email templates
    - GenericWebhookChannel: any HTTP endpoint accepting ``{"text": ...}``

    A channel implements only the operations listed in its ``declaration``.
    Every operation returns ``True`` when delivered and ``False`` when the
    channel is unconfigured and deliberately did nothing. Delivery problems
    raise NotificationDeliveryError.

    Channels are created per dispatch from a binding entry and are never
    shared between dispatches.

    Example Implementation:
        class LogChannel(NotificationChannel):
            declaration = create_capability_declaration(
                "log", NotificationCapability.TEST
            )

            @property
            def notification_type(self) -> str:
                return "N/A"

            def notify_test(self, message: str) -> bool:
                logger.info("test_notification", message=message)
                return True
    """

    declaration: CapabilityDeclaration

    @property
    def channel_kind(self) -> str:
        """Channel identifier (slack, email, webhook)."""
        return self.declaration.channel_kind

    @property
    @abstractmethod
    def notification_type(self) -> str:
        """Label reported to analytics when this channel fires."""

    def supports(self, capability: NotificationCapability) -> bool:
        """Check whether this channel implements ``capability``."""
        return self.declaration.supports(capability)

    def invoke(self, capability: NotificationCapability, *args: Any) -> bool:
        """Run the operation for ``capability`` with the given arguments.

        Raises:
            UnsupportedNotificationError: If the channel does not declare it
        """
        if not self.supports(capability):
            raise UnsupportedNotificationError(self.channel_kind, capability.value)
        return getattr(self, capability.value)(*args)
