"""Operation status enumeration.

Status codes for operation results, used to classify outcomes of
notification operations (metadata lookups, channel calls, analytics
emission) for logging and metrics.
"""

from enum import Enum


class OperationStatus(Enum):
    """Status codes for operation results.

    Attributes:
        SUCCESS: Operation completed successfully
        SKIPPED: Operation was a deliberate no-op (nothing configured)
        TRANSIENT_ERROR: Error that may clear up on its own (network, 5xx)
        PERMANENT_ERROR: Error that will not clear up (bad input, rendering)
        UNSUPPORTED: Operation is not implemented by the target
    """

    SUCCESS = "success"
    SKIPPED = "skipped"
    TRANSIENT_ERROR = "transient_error"
    PERMANENT_ERROR = "permanent_error"
    UNSUPPORTED = "unsupported"
