"""Metrics and analytics sinks.

The dispatcher reports every channel attempt to a MetricsSink, and the job
notifier reports fired notifications to a TrackingSink. Both are
fire-and-forget; callers run them through ``attempt`` so a failing sink
never affects delivery.
"""

from typing import Any, Dict, Optional, Protocol
from uuid import UUID

import structlog

from infrastructure.notifications.models import (
    ChannelKind,
    DeliveryOutcome,
    TriggerType,
)

logger = structlog.get_logger()


class MetricsSink(Protocol):
    """Receives one data point per channel attempt."""

    def record_attempt(
        self,
        trigger: Optional[TriggerType],
        channel_kind: Optional[ChannelKind],
        outcome: DeliveryOutcome,
    ) -> None: ...


class TrackingSink(Protocol):
    """Receives analytics events for notifications that fired."""

    def record_event(
        self, workspace_id: UUID, action: str, attributes: Dict[str, Any]
    ) -> None: ...


class LoggingMetricsSink:
    """MetricsSink writing each attempt as a structured log entry."""

    def record_attempt(self, trigger, channel_kind, outcome) -> None:
        logger.info(
            "notification_attempt_recorded",
            trigger=trigger.value if trigger else None,
            channel_kind=channel_kind.value if channel_kind else None,
            outcome=outcome.value,
        )


class LoggingTrackingSink:
    """TrackingSink writing each event as a structured log entry."""

    def record_event(self, workspace_id, action, attributes) -> None:
        logger.info(
            "notification_event_tracked",
            workspace_id=str(workspace_id),
            action=action,
            **attributes,
        )
