"""Notification context binding for structured logging.

Binds dispatch-scoped identifiers (job, workspace, trigger) to every log
entry emitted while one notification is being dispatched, so the entries
for a single job event can be correlated.

Usage:
    from infrastructure.logging import bind_notification_context

    with bind_notification_context(job_id=42, trigger="Failure Notification"):
        # All logs within this block will include the context
        logger.info("resolving_workspace")

Dependencies:
    - structlog.contextvars
"""

import uuid
from contextlib import contextmanager
from typing import Optional, Any, Generator
import structlog


@contextmanager
def bind_notification_context(
    correlation_id: Optional[str] = None,
    job_id: Optional[Any] = None,
    workspace_id: Optional[Any] = None,
    trigger: Optional[str] = None,
    **extra_context: Any,
) -> Generator[None, None, None]:
    """Bind dispatch-scoped context to all logs within the context manager.

    Args:
        correlation_id: Unique dispatch identifier. Auto-generated if not provided.
        job_id: Job the notification is about.
        workspace_id: Workspace that owns the job's connection.
        trigger: Trigger type value (e.g. "Failure Notification").
        **extra_context: Additional key-value pairs to include in logs.

    Yields:
        None - context is automatically bound to structlog's context vars.
    """
    context: dict[str, Any] = {}

    context["correlation_id"] = correlation_id or str(uuid.uuid4())

    if job_id is not None:
        context["job_id"] = str(job_id)

    if workspace_id is not None:
        context["workspace_id"] = str(workspace_id)

    if trigger is not None:
        context["trigger"] = trigger

    context.update(extra_context)

    # Restore any outer values on exit so nested dispatches stay isolated
    tokens = structlog.contextvars.bind_contextvars(**context)
    try:
        yield
    finally:
        structlog.contextvars.reset_contextvars(**tokens)


def get_correlation_id() -> Optional[str]:
    """Get the current correlation ID from the logging context.

    Returns:
        The correlation ID if set, None otherwise.
    """
    ctx = structlog.contextvars.get_contextvars()
    return ctx.get("correlation_id")


def clear_notification_context() -> None:
    """Clear all dispatch-scoped context from the logging context."""
    structlog.contextvars.clear_contextvars()
