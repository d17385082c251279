"""GC Notify integration settings."""

from pydantic import Field

from infrastructure.configuration.base import IntegrationSettings


class NotifySettings(IntegrationSettings):
    """GC Notify API configuration for templated email notifications.

    Each notification kind is rendered by a Notify template. A blank
    template ID disables email delivery for that kind.

    Environment Variables:
        NOTIFY_API_URL: GC Notify API endpoint URL
        NOTIFY_CLIENT_ID: GC Notify service account identifier
        NOTIFY_CLIENT_SECRET: GC Notify service account secret
        NOTIFY_JOB_FAILURE_TEMPLATE_ID: Template for failed syncs
        NOTIFY_JOB_SUCCESS_TEMPLATE_ID: Template for successful syncs
        NOTIFY_CONNECTION_DISABLED_TEMPLATE_ID: Template for auto-disabled connections
        NOTIFY_CONNECTION_DISABLE_WARNING_TEMPLATE_ID: Template for auto-disable warnings
        NOTIFY_SCHEMA_PROPAGATED_TEMPLATE_ID: Template for schema changes
        NOTIFY_BREAKING_CHANGE_WARNING_TEMPLATE_ID: Template for upcoming breaking changes
        NOTIFY_BREAKING_CHANGE_SYNCS_DISABLED_TEMPLATE_ID: Template for syncs disabled by a breaking change

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()

        api_url = settings.notify.NOTIFY_API_URL
        template_id = settings.notify.NOTIFY_JOB_FAILURE_TEMPLATE_ID
        ```
    """

    NOTIFY_API_URL: str = Field(default="", alias="NOTIFY_API_URL")
    NOTIFY_CLIENT_ID: str | None = Field(default=None, alias="NOTIFY_CLIENT_ID")
    NOTIFY_CLIENT_SECRET: str | None = Field(
        default=None, alias="NOTIFY_CLIENT_SECRET"
    )

    NOTIFY_JOB_FAILURE_TEMPLATE_ID: str = Field(
        default="", alias="NOTIFY_JOB_FAILURE_TEMPLATE_ID"
    )
    NOTIFY_JOB_SUCCESS_TEMPLATE_ID: str = Field(
        default="", alias="NOTIFY_JOB_SUCCESS_TEMPLATE_ID"
    )
    NOTIFY_CONNECTION_DISABLED_TEMPLATE_ID: str = Field(
        default="", alias="NOTIFY_CONNECTION_DISABLED_TEMPLATE_ID"
    )
    NOTIFY_CONNECTION_DISABLE_WARNING_TEMPLATE_ID: str = Field(
        default="", alias="NOTIFY_CONNECTION_DISABLE_WARNING_TEMPLATE_ID"
    )
    NOTIFY_SCHEMA_PROPAGATED_TEMPLATE_ID: str = Field(
        default="", alias="NOTIFY_SCHEMA_PROPAGATED_TEMPLATE_ID"
    )
    NOTIFY_BREAKING_CHANGE_WARNING_TEMPLATE_ID: str = Field(
        default="", alias="NOTIFY_BREAKING_CHANGE_WARNING_TEMPLATE_ID"
    )
    NOTIFY_BREAKING_CHANGE_SYNCS_DISABLED_TEMPLATE_ID: str = Field(
        default="", alias="NOTIFY_BREAKING_CHANGE_SYNCS_DISABLED_TEMPLATE_ID"
    )
