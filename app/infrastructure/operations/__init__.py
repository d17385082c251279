"""Operation result types and status enums.

This module contains standardized result types for operations across
the application, including status enums, result dataclasses, typed
errors, the error classifier and the best-effort `attempt` combinator.
"""

from infrastructure.operations.attempt import attempt
from infrastructure.operations.classifiers import classify_error
from infrastructure.operations.errors import OperationError
from infrastructure.operations.result import OperationResult
from infrastructure.operations.status import OperationStatus

__all__ = [
    "OperationResult",
    "OperationStatus",
    "OperationError",
    "attempt",
    "classify_error",
]
