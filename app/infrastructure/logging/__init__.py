"""Structured logging infrastructure.

This package provides centralized logging configuration and utilities
for the job notification service using structlog.

Public API:
    - configure_logging(): Initialize logging for the application
    - get_logger(): Get a logger instance with a specific name
    - get_module_logger(): Get a logger for the calling module
    - bind_notification_context(): Context manager for dispatch-scoped logging
    - get_correlation_id(): Get current correlation ID from context
    - clear_notification_context(): Clear all dispatch context

Formatters:
    - add_app_info(): Processor to add app name/version
    - mask_sensitive_data(): Processor to redact sensitive fields
    - truncate_large_values(): Processor to limit string lengths

Example:
    from infrastructure.logging import (
        get_module_logger,
        bind_notification_context,
    )

    logger = get_module_logger()

    with bind_notification_context(job_id=42, trigger="Failure Notification"):
        logger.info("dispatching_notification")
"""

from infrastructure.logging.setup import (
    configure_logging,
    get_logger,
    get_module_logger,
)

from infrastructure.logging.context import (
    bind_notification_context,
    get_correlation_id,
    clear_notification_context,
)

from infrastructure.logging.formatters import (
    add_app_info,
    mask_sensitive_data,
    truncate_large_values,
    SENSITIVE_PATTERNS,
)

__all__ = [
    # Setup
    "configure_logging",
    "get_logger",
    "get_module_logger",
    # Context
    "bind_notification_context",
    "get_correlation_id",
    "clear_notification_context",
    # Formatters
    "add_app_info",
    "mask_sensitive_data",
    "truncate_large_values",
    "SENSITIVE_PATTERNS",
]
