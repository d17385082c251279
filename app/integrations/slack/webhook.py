"""Slack incoming webhook client."""

from typing import Dict, Optional

from slack_sdk.webhook import WebhookClient, WebhookResponse

from infrastructure.logging import get_module_logger
from infrastructure.services import get_settings

logger = get_module_logger()


def get_webhook_client(url: str, timeout: Optional[int] = None) -> WebhookClient:
    """Create a WebhookClient for one incoming webhook URL.

    Clients are not reused between deliveries. Built-in retry handlers are
    disabled so that each message is posted exactly once.
    """
    settings = get_settings()
    if timeout is None:
        timeout = settings.slack.SLACK_WEBHOOK_TIMEOUT_SECONDS
    return WebhookClient(
        url=url,
        timeout=timeout,
        default_headers={"User-Agent": settings.notifications.user_agent},
        retry_handlers=[],
    )


def post_message(url: str, payload: Dict, timeout: Optional[int] = None) -> WebhookResponse:
    """Post a message payload to a Slack incoming webhook.

    Args:
        url: Incoming webhook URL
        payload: Message body, e.g. ``{"text": ..., "blocks": [...]}``
        timeout: Request timeout in seconds

    Returns:
        WebhookResponse: status code and body returned by Slack
    """
    client = get_webhook_client(url, timeout=timeout)
    response = client.send_dict(payload)
    logger.info("slack_webhook_posted", status_code=response.status_code)
    return response
