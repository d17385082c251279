"""Generic webhook client."""

import json
from typing import Dict, Optional

import requests

from infrastructure.logging import get_module_logger
from infrastructure.services import get_settings

logger = get_module_logger()


def post_json(url: str, payload: Dict, timeout: Optional[int] = None):
    """Post a JSON payload to a webhook endpoint once.

    Args:
        url: Endpoint URL
        payload: JSON-serializable body
        timeout: Request timeout in seconds (defaults to the notification timeout)

    Returns:
        requests.Response: the receiver's response, whatever its status
    """
    settings = get_settings()
    if timeout is None:
        timeout = settings.notifications.http_timeout_seconds
    headers = {
        "Content-Type": "application/json",
        "User-Agent": settings.notifications.user_agent,
    }
    response = requests.post(
        url, data=json.dumps(payload), headers=headers, timeout=timeout
    )
    logger.info("webhook_posted", status_code=response.status_code)
    return response
