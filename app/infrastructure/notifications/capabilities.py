"""Notification channel capability models and declarations.

Defines the operations a notification channel can support, and a
declaration type that each channel uses to state which of them it
implements. Invoking an undeclared operation is an error, never a no-op.
"""

from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet


class NotificationCapability(str, Enum):
    """Operations a notification channel may implement.

    Values are the channel method names that implement each operation.
    """

    JOB_FAILURE = "notify_job_failure"
    JOB_SUCCESS = "notify_job_success"
    CONNECTION_DISABLED = "notify_connection_disabled"
    CONNECTION_DISABLE_WARNING = "notify_connection_disable_warning"
    SCHEMA_PROPAGATED = "notify_schema_propagated"
    BREAKING_CHANGE_WARNING = "notify_breaking_change_warning"
    BREAKING_CHANGE_SYNCS_DISABLED = "notify_breaking_change_syncs_disabled"
    TEST = "notify_test"


@dataclass(frozen=True)
class CapabilityDeclaration:
    """Declares the operations supported by a notification channel.

    Attributes:
        channel_kind: Channel identifier (slack, email, webhook).
        capabilities: Set of NotificationCapability values the channel implements.
    """

    channel_kind: str
    capabilities: FrozenSet[NotificationCapability]

    def supports(self, capability: NotificationCapability) -> bool:
        """Check if the channel supports the given capability.

        Args:
            capability: The capability to check.

        Returns:
            True if capability is supported, False otherwise.
        """
        return capability in self.capabilities


def create_capability_declaration(
    channel_kind: str,
    *capabilities: NotificationCapability,
) -> CapabilityDeclaration:
    """Factory function for creating CapabilityDeclaration instances.

    Example:
        >>> decl = create_capability_declaration(
        ...     "slack",
        ...     NotificationCapability.JOB_FAILURE,
        ...     NotificationCapability.JOB_SUCCESS,
        ... )
    """
    return CapabilityDeclaration(
        channel_kind=channel_kind,
        capabilities=frozenset(capabilities),
    )
