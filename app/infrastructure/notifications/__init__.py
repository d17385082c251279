"""Job-event notification delivery.

Provides channel-agnostic event models, message formatting and
multi-channel delivery (Slack webhook, GC Notify email, generic webhook)
with per-channel failure isolation.

Usage:
    from infrastructure.notifications import (
        ChannelBinding,
        ChannelKind,
        NotificationCapability,
        NotificationDispatcher,
        SlackConfiguration,
        TriggerType,
    )

    binding = ChannelBinding(
        notification_type=[ChannelKind.SLACK],
        slack_configuration=SlackConfiguration(webhook=webhook_url),
    )

    # Feature-level: build the event summary
    summary = build_event_summary(...)

    # Infrastructure-level: deliver through every bound channel
    report = NotificationDispatcher().dispatch(
        TriggerType.ON_FAILURE,
        binding,
        NotificationCapability.JOB_FAILURE,
        summary,
    )
"""

# Models
from infrastructure.notifications.models import (
    ActorType,
    BreakingChangeContext,
    ChannelAttempt,
    ChannelBinding,
    ChannelKind,
    ConnectionEventContext,
    DeliveryOutcome,
    DispatchReport,
    EventSummary,
    NotificationPolicy,
    ResourceInfo,
    SchemaUpdateContext,
    SlackConfiguration,
    TriggerType,
    WebhookConfiguration,
)
from infrastructure.notifications.catalog import (
    CatalogDiff,
    FieldTransform,
    FieldTransformType,
    StreamDescriptor,
    StreamTransform,
    StreamTransformType,
)
from infrastructure.notifications.capabilities import (
    CapabilityDeclaration,
    NotificationCapability,
    create_capability_declaration,
)
from infrastructure.notifications.errors import (
    NotificationDeliveryError,
    UnsupportedNotificationError,
)

# Dispatcher and sinks
from infrastructure.notifications.dispatcher import NotificationDispatcher
from infrastructure.notifications.sinks import (
    LoggingMetricsSink,
    LoggingTrackingSink,
    MetricsSink,
    TrackingSink,
)

# Channels
from infrastructure.notifications.channels import (
    GenericWebhookChannel,
    NotificationChannel,
    SlackWebhookChannel,
    TemplatedEmailChannel,
    create_channel,
)

__all__ = [
    # Models
    "ActorType",
    "BreakingChangeContext",
    "ChannelAttempt",
    "ChannelBinding",
    "ChannelKind",
    "ConnectionEventContext",
    "DeliveryOutcome",
    "DispatchReport",
    "EventSummary",
    "NotificationPolicy",
    "ResourceInfo",
    "SchemaUpdateContext",
    "SlackConfiguration",
    "TriggerType",
    "WebhookConfiguration",
    # Catalog diff
    "CatalogDiff",
    "FieldTransform",
    "FieldTransformType",
    "StreamDescriptor",
    "StreamTransform",
    "StreamTransformType",
    # Capabilities and errors
    "CapabilityDeclaration",
    "NotificationCapability",
    "create_capability_declaration",
    "NotificationDeliveryError",
    "UnsupportedNotificationError",
    # Dispatcher and sinks
    "NotificationDispatcher",
    "MetricsSink",
    "TrackingSink",
    "LoggingMetricsSink",
    "LoggingTrackingSink",
    # Channels
    "NotificationChannel",
    "SlackWebhookChannel",
    "TemplatedEmailChannel",
    "GenericWebhookChannel",
    "create_channel",
]
