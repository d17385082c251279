"""Error classifiers for notification operations.

Converts exceptions raised by channels, integrations and collaborator
lookups into standardized OperationResult objects. Centralizes error
classification so every best-effort boundary reports failures the same way.

Usage:
    from infrastructure.operations.classifiers import classify_error

    try:
        channel.notify_job_failure(summary, receiver_email)
    except Exception as exc:
        return classify_error(exc)
"""

from urllib.error import URLError

import requests

from infrastructure.operations.errors import OperationError
from infrastructure.operations.result import OperationResult


def classify_error(exc: Exception) -> OperationResult:
    """Classify an exception into an OperationResult.

    Mapping:
    - OperationError (and subclasses): the status and error code it carries
    - requests.RequestException: TRANSIENT_ERROR, CONNECTION_ERROR
    - urllib URLError (raised by slack_sdk webhooks): TRANSIENT_ERROR, CONNECTION_ERROR
    - TimeoutError: TRANSIENT_ERROR, TIMEOUT
    - Anything else: PERMANENT_ERROR, UNEXPECTED_ERROR

    Args:
        exc: Exception raised by the operation

    Returns:
        OperationResult with an error status, message and error_code
    """
    if isinstance(exc, OperationError):
        return OperationResult.error(exc.status, exc.message, error_code=exc.error_code)

    if isinstance(exc, (requests.RequestException, URLError)):
        return OperationResult.transient_error(
            f"Connection error: {type(exc).__name__}: {str(exc)}",
            error_code="CONNECTION_ERROR",
        )

    if isinstance(exc, TimeoutError):
        return OperationResult.transient_error(
            f"Timed out: {str(exc)}",
            error_code="TIMEOUT",
        )

    return OperationResult.permanent_error(
        f"Unexpected error: {type(exc).__name__}: {str(exc)}",
        error_code="UNEXPECTED_ERROR",
    )
