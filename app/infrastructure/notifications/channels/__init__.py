"""Notification channel implementations."""

from infrastructure.notifications.channels.base import NotificationChannel
from infrastructure.notifications.channels.email import TemplatedEmailChannel
from infrastructure.notifications.channels.factory import create_channel
from infrastructure.notifications.channels.slack import SlackWebhookChannel
from infrastructure.notifications.channels.webhook import GenericWebhookChannel

__all__ = [
    "NotificationChannel",
    "SlackWebhookChannel",
    "TemplatedEmailChannel",
    "GenericWebhookChannel",
    "create_channel",
]
