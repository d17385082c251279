"""Infrastructure modules for the job notification service.

Centralized infrastructure components:
- configuration: Settings management (Settings and its sections)
- logging: Structured logging (get_module_logger, logger)
- notifications: Channels, formatting and the notification dispatcher
- operations: Operation results and error classification
- services: Shared providers (get_settings)
"""

# Configuration
from infrastructure.services import get_settings

# Logging
from infrastructure.logging import get_module_logger
from infrastructure.logging.setup import logger

# Operations
from infrastructure.operations.result import OperationResult
from infrastructure.operations.status import OperationStatus

__all__ = [
    # Configuration
    "get_settings",
    # Logging
    "get_module_logger",
    "logger",
    # Operations
    "OperationResult",
    "OperationStatus",
]
