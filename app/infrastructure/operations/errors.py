"""Typed exceptions carrying an operation status.

Raised by channels and integrations; converted to OperationResult by
`classify_error` at the boundaries that must not propagate failures.
"""

from typing import Optional

from infrastructure.operations.status import OperationStatus


class OperationError(Exception):
    """Base class for errors that know how they should be classified."""

    status: OperationStatus = OperationStatus.PERMANENT_ERROR
    error_code: str = "OPERATION_ERROR"

    def __init__(self, message: str, error_code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        if error_code:
            self.error_code = error_code
