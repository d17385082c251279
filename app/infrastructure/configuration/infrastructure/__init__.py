"""Infrastructure settings __init__ - exports all infrastructure settings."""

from infrastructure.configuration.infrastructure.notifications import (
    NotificationSettings,
)
from infrastructure.configuration.infrastructure.webapp import WebAppSettings

__all__ = [
    "NotificationSettings",
    "WebAppSettings",
]
