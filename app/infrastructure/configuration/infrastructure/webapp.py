"""Web application URL settings."""

from pydantic import Field

from infrastructure.configuration.base import InfrastructureSettings


class WebAppSettings(InfrastructureSettings):
    """Base URL of the web application, used for links in notifications.

    Environment Variables:
        WEBAPP_URL: Public URL of the web application (default: http://localhost:8000/)
    """

    WEBAPP_URL: str = Field(default="http://localhost:8000/", alias="WEBAPP_URL")
