"""Notification delivery errors."""

from typing import Optional

from infrastructure.operations import OperationError, OperationStatus


class NotificationDeliveryError(OperationError):
    """A channel failed to deliver a notification.

    Raised for non-2xx responses, transport failures and messages that could
    not be rendered. Distinct from a deliberate no-op, which returns False.

    Attributes:
        status_code: HTTP status code, when a response was received
        body: Response body, when a response was received
    """

    status = OperationStatus.TRANSIENT_ERROR
    error_code = "DELIVERY_FAILED"

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
        error_code: Optional[str] = None,
    ):
        if error_code is None and status_code is not None:
            error_code = f"HTTP_{status_code}"
        super().__init__(message, error_code=error_code)
        self.status_code = status_code
        self.body = body


class UnsupportedNotificationError(OperationError):
    """The channel does not implement the requested operation."""

    status = OperationStatus.UNSUPPORTED
    error_code = "UNSUPPORTED_OPERATION"

    def __init__(self, channel_kind: str, operation: str):
        super().__init__(
            f"{channel_kind} notification is not supported for {operation}"
        )
        self.channel_kind = channel_kind
        self.operation = operation
