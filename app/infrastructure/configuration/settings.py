"""Job notification configuration settings - main aggregator."""

from pydantic_settings import BaseSettings, SettingsConfigDict

# Integration settings
from infrastructure.configuration.integrations import (
    SlackSettings,
    NotifySettings,
)

# Infrastructure settings
from infrastructure.configuration.infrastructure import (
    NotificationSettings,
    WebAppSettings,
)


class Settings(BaseSettings):
    """Job notification configuration settings - main aggregator.

    Aggregates all domain-specific settings into a single configuration object.
    Settings are organized by concern:

    - **Integrations**: External delivery services (Slack webhooks, GC Notify)
    - **Infrastructure**: Core system configurations (transport, web app URLs)

    Environment Variables:
        PREFIX: Environment prefix for non-production deployments
        LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR)
        GIT_SHA: Git commit SHA for deployment tracking

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()

        # Access integration settings
        api_url = settings.notify.NOTIFY_API_URL

        # Access infrastructure settings
        timeout = settings.notifications.http_timeout_seconds
        webapp_url = settings.webapp.WEBAPP_URL

        # Check environment
        if settings.is_production:
            # Production-specific logic...
        ```
    """

    # Application-level settings
    PREFIX: str = ""
    LOG_LEVEL: str = "INFO"
    GIT_SHA: str = "Unknown"

    # Integration settings
    slack: SlackSettings
    notify: NotifySettings

    # Infrastructure settings
    notifications: NotificationSettings
    webapp: WebAppSettings

    @property
    def is_production(self) -> bool:
        """Check if the application is running in production.

        Returns:
            True if PREFIX is empty (production), False otherwise.
        """
        return not bool(self.PREFIX)

    def __init__(self, **kwargs):
        """Initialize Settings with automatic subsettings instantiation.

        Args:
            **kwargs: Optional overrides for specific settings sections.
        """
        settings_map = {
            # Integrations
            "slack": SlackSettings,
            "notify": NotifySettings,
            # Infrastructure
            "notifications": NotificationSettings,
            "webapp": WebAppSettings,
        }

        for setting_name, setting_class in settings_map.items():
            if setting_name not in kwargs:
                kwargs[setting_name] = setting_class()

        super().__init__(**kwargs)

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )
