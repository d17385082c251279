"""Per-channel notification dispatcher.

Delivers one notification through every channel of a binding:
- Channels are created fresh for each dispatch, in binding order
- Each channel call is isolated; a failing channel never stops the next one
- Every attempt is reported to the metrics sink, whatever its outcome
- Nothing raises past ``dispatch``

Usage Example:
    from infrastructure.notifications import (
        NotificationCapability,
        NotificationDispatcher,
        TriggerType,
    )

    dispatcher = NotificationDispatcher()
    report = dispatcher.dispatch(
        TriggerType.ON_FAILURE,
        binding,
        NotificationCapability.JOB_FAILURE,
        summary,
        receiver_email="owner@example.com",
    )
    logger.info("dispatched", delivered=report.delivered_count)
"""

from typing import Any, Callable, List, Optional

import structlog

from infrastructure.configuration import Settings
from infrastructure.notifications.capabilities import NotificationCapability
from infrastructure.notifications.channels.base import NotificationChannel
from infrastructure.notifications.channels.factory import create_channel
from infrastructure.notifications.models import (
    ChannelAttempt,
    ChannelBinding,
    ChannelConfig,
    ChannelKind,
    DeliveryOutcome,
    DispatchReport,
    TriggerType,
)
from infrastructure.notifications.sinks import LoggingMetricsSink, MetricsSink
from infrastructure.operations import OperationResult, attempt

logger = structlog.get_logger()

ChannelFactory = Callable[..., NotificationChannel]


def outcome_for(result: OperationResult) -> DeliveryOutcome:
    """Map an operation result onto a delivery outcome."""
    if result.is_success:
        return DeliveryOutcome.DELIVERED
    if result.is_skipped:
        return DeliveryOutcome.SKIPPED
    return DeliveryOutcome.FAILED


class NotificationDispatcher:
    """Dispatches one notification across the channels of a binding.

    Attributes:
        settings: Application settings handed to the channel factory
        metrics_sink: Receives one record per channel attempt
        channel_factory: Builds a channel from ``(kind, config, settings, receiver_email)``

    Example:
        dispatcher = NotificationDispatcher(metrics_sink=LoggingMetricsSink())
        report = dispatcher.dispatch(
            TriggerType.ON_SUCCESS,
            binding,
            NotificationCapability.JOB_SUCCESS,
            summary,
        )
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        metrics_sink: Optional[MetricsSink] = None,
        channel_factory: ChannelFactory = create_channel,
    ):
        self.settings = settings
        self.metrics_sink = metrics_sink or LoggingMetricsSink()
        self.channel_factory = channel_factory

    def dispatch(
        self,
        trigger: TriggerType,
        binding: Optional[ChannelBinding],
        capability: NotificationCapability,
        *args: Any,
        receiver_email: Optional[str] = None,
    ) -> DispatchReport:
        """Invoke ``capability`` on every channel of ``binding``.

        A missing binding produces a single SKIPPED attempt with no channel
        kind. Otherwise each binding entry produces exactly one attempt.

        Args:
            trigger: Trigger being notified
            binding: Channels configured for the trigger, or None
            capability: Channel operation to invoke
            *args: Arguments for the channel operation
            receiver_email: Default email recipient for email channels

        Returns:
            DispatchReport: One ChannelAttempt per channel, in binding order
        """
        report = DispatchReport(trigger=trigger)

        if binding is None or not binding.notification_type:
            logger.info("notification_skipped", reason="no_channel_binding")
            skipped = ChannelAttempt(
                trigger=trigger,
                outcome=DeliveryOutcome.SKIPPED,
                message="No channel configured for trigger",
            )
            report.attempts.append(skipped)
            self._record(skipped)
            return report

        for kind, config in binding.entries():
            channel_attempt = self.deliver(
                kind,
                config,
                capability,
                *args,
                trigger=trigger,
                receiver_email=receiver_email,
            )
            report.attempts.append(channel_attempt)
            self._record(channel_attempt)

        logger.info(
            "notification_dispatched",
            channels=len(report.attempts),
            delivered=report.delivered_count,
            failed=report.failed_count,
        )
        return report

    def send_test(self, binding: ChannelBinding, message: str) -> List[ChannelAttempt]:
        """Send a connectivity test message through every channel of ``binding``.

        Test messages are not reported to the metrics sink.
        """
        return [
            self.deliver(kind, config, NotificationCapability.TEST, message)
            for kind, config in binding.entries()
        ]

    def deliver(
        self,
        kind: ChannelKind,
        config: ChannelConfig,
        capability: NotificationCapability,
        *args: Any,
        trigger: Optional[TriggerType] = None,
        receiver_email: Optional[str] = None,
    ) -> ChannelAttempt:
        """Create one channel and invoke ``capability`` on it.

        Never raises. Creation failures, delivery errors and unsupported
        operations all come back as a FAILED attempt.
        """
        created = attempt(
            lambda: self.channel_factory(kind, config, self.settings, receiver_email),
            "notification_channel_creation_failed",
            channel_kind=kind.value,
        )
        if not created.is_success:
            return ChannelAttempt(
                trigger=trigger,
                channel_kind=kind,
                outcome=DeliveryOutcome.FAILED,
                message=created.message,
                error_code=created.error_code,
            )

        channel: NotificationChannel = created.data
        result = attempt(
            lambda: channel.invoke(capability, *args),
            "channel_notification_failed",
            channel_kind=kind.value,
            capability=capability.value,
        )
        outcome = outcome_for(result)
        if outcome == DeliveryOutcome.DELIVERED:
            logger.info(
                "notification_delivered",
                channel_kind=kind.value,
                capability=capability.value,
            )

        labelled = attempt(
            lambda: str(channel.notification_type),
            "notification_type_lookup_failed",
            channel_kind=kind.value,
        )
        return ChannelAttempt(
            trigger=trigger,
            channel_kind=kind,
            outcome=outcome,
            message=result.message,
            error_code=result.error_code,
            notification_type=labelled.data if labelled.is_success else None,
        )

    def _record(self, channel_attempt: ChannelAttempt) -> None:
        attempt(
            lambda: self.metrics_sink.record_attempt(
                channel_attempt.trigger,
                channel_attempt.channel_kind,
                channel_attempt.outcome,
            ),
            "notification_metric_failed",
        )
