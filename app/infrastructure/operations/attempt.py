"""Best-effort operation combinator.

`attempt` is the one place where failures are swallowed. Every boundary
that must never propagate an exception (metadata resolution, each channel
call, analytics emission) runs its work through it and inspects the
returned OperationResult instead.
"""

from typing import Any, Callable, Optional

from structlog.stdlib import BoundLogger

from infrastructure.logging import get_module_logger
from infrastructure.operations.classifiers import classify_error
from infrastructure.operations.result import OperationResult
from infrastructure.operations.status import OperationStatus

logger = get_module_logger()


def attempt(
    operation: Callable[[], Any],
    event: str,
    log: Optional[BoundLogger] = None,
    **log_context: Any,
) -> OperationResult:
    """Run an operation and convert its outcome into an OperationResult.

    A return value of ``False`` means the operation deliberately did
    nothing and maps to SKIPPED. Any other return value is SUCCESS with the
    value in ``data``. Exceptions are classified, logged under ``event`` and
    returned as an error result.

    Args:
        operation: Zero-argument callable to run
        event: Log event name used when the operation fails
        log: Optional bound logger (defaults to this module's logger)
        **log_context: Extra key-value pairs added to the failure log entry

    Returns:
        OperationResult describing the outcome
    """
    try:
        value = operation()
    except Exception as exc:
        result = classify_error(exc)
        log_method = (log or logger).warning
        if result.status != OperationStatus.UNSUPPORTED:
            log_method = (log or logger).error
        log_method(
            event,
            error=result.message,
            error_code=result.error_code,
            status=result.status.value,
            exc_info=result.status != OperationStatus.UNSUPPORTED,
            **log_context,
        )
        return result

    if value is False:
        return OperationResult.skipped()
    return OperationResult.success(data=value)
