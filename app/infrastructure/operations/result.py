"""Operation result dataclass.

Uniform result type returned from operations across the application,
including status, data, and error information.
"""

from typing import Optional, Any
from dataclasses import dataclass

from infrastructure.operations.status import OperationStatus


@dataclass
class OperationResult:
    """Uniform result returned from operations.

    Attributes:
        status: OperationStatus -- high-level outcome
        message: str -- human-friendly message for logs/troubleshooting
        data: Optional[Any] -- optional payload (can be dict, list, or object)
        error_code: Optional[str] -- optional machine error code
    """

    status: OperationStatus
    message: str
    data: Optional[Any] = None
    error_code: Optional[str] = None

    @property
    def is_success(self) -> bool:
        """Helper property to check if operation was successful.

        Returns:
            True if status is SUCCESS, False otherwise
        """
        return self.status == OperationStatus.SUCCESS

    @property
    def is_skipped(self) -> bool:
        """True when the operation was a deliberate no-op."""
        return self.status == OperationStatus.SKIPPED

    @property
    def is_failure(self) -> bool:
        """True for any error status."""
        return not (self.is_success or self.is_skipped)

    @classmethod
    def success(
        cls, data: Optional[Any] = None, message: str = "ok"
    ) -> "OperationResult":
        """Create a SUCCESS OperationResult with optional data.

        Args:
            data: Optional payload to include with the result
            message: Human-friendly success message

        Returns:
            OperationResult with SUCCESS status
        """
        return cls(status=OperationStatus.SUCCESS, message=message, data=data)

    @classmethod
    def skipped(cls, message: str = "skipped") -> "OperationResult":
        """Create a SKIPPED OperationResult.

        Use when nothing was configured for the operation, e.g. an empty
        webhook URL or no channel binding for a trigger.
        """
        return cls(status=OperationStatus.SKIPPED, message=message)

    @classmethod
    def error(
        cls,
        status: OperationStatus,
        message: str,
        error_code: Optional[str] = None,
        data: Optional[Any] = None,
    ) -> "OperationResult":
        """Create an error OperationResult.

        Args:
            status: OperationStatus indicating error type
            message: Human-friendly error message
            error_code: Optional machine error code
            data: Optional payload to include with the error

        Returns:
            OperationResult with specified error status
        """
        return cls(
            status=status,
            message=message,
            error_code=error_code,
            data=data,
        )

    @classmethod
    def transient_error(
        cls, message: str, error_code: Optional[str] = None
    ) -> "OperationResult":
        """Create a transient error result.

        Use for errors caused by the environment rather than the input:
        - Network timeouts
        - Non-2xx responses from a webhook receiver
        - Temporary service unavailability

        Args:
            message: Human-friendly error message
            error_code: Optional machine error code

        Returns:
            OperationResult with TRANSIENT_ERROR status
        """
        return cls.error(OperationStatus.TRANSIENT_ERROR, message, error_code)

    @classmethod
    def permanent_error(
        cls, message: str, error_code: Optional[str] = None
    ) -> "OperationResult":
        """Create a permanent error result.

        Use for errors that will not succeed if repeated, such as:
        - Validation errors
        - Unknown channel types
        - Rendering failures

        Args:
            message: Human-friendly error message
            error_code: Optional machine error code

        Returns:
            OperationResult with PERMANENT_ERROR status
        """
        return cls.error(OperationStatus.PERMANENT_ERROR, message, error_code)
