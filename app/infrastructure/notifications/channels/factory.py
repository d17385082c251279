"""Channel factory.

Builds a fresh channel instance for one entry of a channel binding.
"""

from typing import Optional

from infrastructure.configuration import Settings
from infrastructure.notifications.channels.base import NotificationChannel
from infrastructure.notifications.channels.email import TemplatedEmailChannel
from infrastructure.notifications.channels.slack import SlackWebhookChannel
from infrastructure.notifications.channels.webhook import GenericWebhookChannel
from infrastructure.notifications.models import (
    ChannelConfig,
    ChannelKind,
    SlackConfiguration,
    WebhookConfiguration,
)
from infrastructure.services import get_settings


def create_channel(
    kind: ChannelKind,
    config: ChannelConfig = None,
    settings: Optional[Settings] = None,
    receiver_email: Optional[str] = None,
) -> NotificationChannel:
    """Create the channel for a binding entry.

    Args:
        kind: Channel kind from the binding
        config: Per-kind configuration from the binding (None for email)
        settings: Application settings (defaults to the shared instance)
        receiver_email: Default email recipient, usually the workspace email

    Returns:
        NotificationChannel: A new channel owned by the caller

    Raises:
        ValueError: If the kind is unknown
    """
    settings = settings or get_settings()

    if kind == ChannelKind.SLACK:
        slack_config = config if isinstance(config, SlackConfiguration) else None
        return SlackWebhookChannel(
            webhook_url=slack_config.webhook if slack_config else "",
            timeout=settings.slack.SLACK_WEBHOOK_TIMEOUT_SECONDS,
            webhook_host=settings.slack.SLACK_WEBHOOK_HOST,
            max_error_length=settings.notifications.max_error_length,
        )
    if kind == ChannelKind.EMAIL:
        return TemplatedEmailChannel(settings.notify, receiver_email=receiver_email)
    if kind == ChannelKind.WEBHOOK:
        webhook_config = config if isinstance(config, WebhookConfiguration) else None
        return GenericWebhookChannel(
            url=webhook_config.url if webhook_config else "",
            timeout=settings.notifications.http_timeout_seconds,
        )
    raise ValueError(f"Unknown notification channel kind: {kind}")
