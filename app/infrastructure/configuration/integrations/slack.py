"""Slack integration settings."""

from pydantic import Field

from infrastructure.configuration.base import IntegrationSettings


class SlackSettings(IntegrationSettings):
    """Slack incoming webhook configuration.

    Webhook URLs themselves are per-workspace channel bindings, not
    deployment settings. This only controls how they are called.

    Environment Variables:
        SLACK_WEBHOOK_TIMEOUT_SECONDS: Timeout for a single webhook POST
        SLACK_WEBHOOK_HOST: Host that identifies a genuine Slack webhook

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()

        timeout = settings.slack.SLACK_WEBHOOK_TIMEOUT_SECONDS
        ```
    """

    SLACK_WEBHOOK_TIMEOUT_SECONDS: int = Field(
        default=30, alias="SLACK_WEBHOOK_TIMEOUT_SECONDS"
    )
    SLACK_WEBHOOK_HOST: str = Field(
        default="hooks.slack.com", alias="SLACK_WEBHOOK_HOST"
    )
