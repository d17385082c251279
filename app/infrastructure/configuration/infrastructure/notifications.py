"""Notification delivery infrastructure settings."""

from pydantic import Field

from infrastructure.configuration.base import InfrastructureSettings


class NotificationSettings(InfrastructureSettings):
    """Transport configuration shared by notification channels.

    Environment Variables:
        NOTIFICATION_HTTP_TIMEOUT_SECONDS: Timeout for one HTTP delivery (default: 10)
        NOTIFICATION_USER_AGENT: User-Agent header sent to webhook receivers
        NOTIFICATION_MAX_ERROR_LENGTH: Failure reasons longer than this are truncated

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()

        timeout = settings.notifications.http_timeout_seconds
        ```
    """

    http_timeout_seconds: int = Field(
        default=10,
        alias="NOTIFICATION_HTTP_TIMEOUT_SECONDS",
        description="Timeout for a single HTTP delivery attempt (seconds)",
    )
    user_agent: str = Field(
        default="job-notifications/1.0",
        alias="NOTIFICATION_USER_AGENT",
        description="User-Agent header for outgoing webhook requests",
    )
    max_error_length: int = Field(
        default=2500,
        alias="NOTIFICATION_MAX_ERROR_LENGTH",
        description="Maximum length of a failure reason rendered into a message",
    )
