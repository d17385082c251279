"""Infrastructure configuration module - public API.

This module provides centralized configuration management for the job
notification service using Pydantic BaseSettings with domain-based
organization.

Exports:
    Settings: Main settings class (for testing/overrides)
    NotifySettings, SlackSettings: Integration settings classes
    NotificationSettings, WebAppSettings: Infrastructure settings classes

Example:
    ```python
    from infrastructure.services import get_settings

    settings = get_settings()

    # Access settings
    template_id = settings.notify.NOTIFY_JOB_FAILURE_TEMPLATE_ID
    timeout = settings.notifications.http_timeout_seconds

    # Check environment
    if settings.is_production:
        # Production-specific logic...
    ```
"""

from infrastructure.configuration.settings import Settings
from infrastructure.configuration.integrations import NotifySettings, SlackSettings
from infrastructure.configuration.infrastructure import (
    NotificationSettings,
    WebAppSettings,
)

__all__ = [
    "Settings",
    "NotifySettings",
    "SlackSettings",
    "NotificationSettings",
    "WebAppSettings",
]
