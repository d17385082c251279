"""Notification system core models.

Platform-agnostic notification models for job-event dispatch.
Features build the event content, infrastructure handles delivery.

Uses Pydantic BaseModel for:
- Runtime input validation
- Immutable event summaries (frozen models)
- Type safety with proper error messages
"""

from datetime import datetime
from enum import Enum
from typing import Dict, Iterator, List, Optional, Tuple, Union
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field

from infrastructure.notifications.catalog import CatalogDiff


class TriggerType(str, Enum):
    """Job-lifecycle events that select a notification policy entry.

    Values double as the analytics action name reported for the trigger.
    """

    ON_FAILURE = "Failure Notification"
    ON_SUCCESS = "Success Notification"
    ON_SYNC_DISABLED = "Connection Disabled Notification"
    ON_SYNC_DISABLED_WARNING = "Connection Disabled Warning Notification"
    ON_SCHEMA_CHANGE = "Schema Change Notification"


class ChannelKind(str, Enum):
    """Notification channel kinds a binding can reference."""

    SLACK = "slack"
    EMAIL = "email"
    WEBHOOK = "webhook"


class DeliveryOutcome(str, Enum):
    """Outcome of a single channel invocation.

    SKIPPED covers both "nothing configured for this trigger" and a channel
    that deliberately did nothing (e.g. empty webhook URL).
    """

    DELIVERED = "delivered"
    SKIPPED = "skipped"
    FAILED = "failed"


class ActorType(str, Enum):
    """Connector role, used in breaking-change notifications."""

    SOURCE = "source"
    DESTINATION = "destination"


class ResourceInfo(BaseModel):
    """Name, identifier and web URL of a workspace, connection or connector."""

    name: str
    id: UUID
    url: str

    model_config = {"frozen": True}


class EventSummary(BaseModel):
    """Channel-agnostic description of a job event.

    Built fresh for each dispatch and never modified afterwards. Committed
    counts are expected to be at most the emitted counts, but renderers must
    not rely on it.

    Attributes:
        workspace: Workspace owning the connection
        connection: Connection the job ran for
        source: Source connector instance
        destination: Destination connector instance
        started_at: When the job started (duration is omitted when absent)
        finished_at: When the job last changed state
        is_success: True when the job succeeded
        job_id: Job identifier
        error_message: Failure reason, if any
        records_emitted: Records read from the source across all attempts
        records_committed: Records written to the destination across all attempts
        bytes_emitted: Bytes read from the source across all attempts
        bytes_committed: Bytes written to the destination across all attempts
    """

    workspace: ResourceInfo
    connection: ResourceInfo
    source: ResourceInfo
    destination: ResourceInfo
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None
    is_success: bool
    job_id: Union[int, str]
    error_message: Optional[str] = None
    records_emitted: int = Field(default=0, ge=0)
    records_committed: int = Field(default=0, ge=0)
    bytes_emitted: int = Field(default=0, ge=0)
    bytes_committed: int = Field(default=0, ge=0)

    model_config = {"frozen": True}

    @property
    def duration_available(self) -> bool:
        """True when both timestamps are known."""
        return self.started_at is not None and self.finished_at is not None


class ConnectionEventContext(BaseModel):
    """Context for connection auto-disable notifications and warnings."""

    receiver_email: Optional[EmailStr] = None
    source_connector: str
    destination_connector: str
    job_description: str
    workspace_id: UUID
    connection_id: UUID

    model_config = {"frozen": True}


class SchemaUpdateContext(BaseModel):
    """Context for schema change notifications."""

    workspace: ResourceInfo
    connection: ResourceInfo
    source: ResourceInfo
    catalog_diff: CatalogDiff
    is_breaking_change: bool = False
    receiver_email: Optional[EmailStr] = None

    model_config = {"frozen": True}


class BreakingChangeContext(BaseModel):
    """Context for connector breaking-change notifications.

    Breaking changes are announced to every affected workspace at once, so
    the context carries a list of recipients.
    """

    receiver_emails: List[EmailStr] = Field(..., min_length=1)
    connector_name: str
    actor_type: ActorType
    version: str
    message: str
    upgrade_deadline: str
    migration_documentation_url: Optional[str] = None

    model_config = {"frozen": True}


class SlackConfiguration(BaseModel):
    """Slack channel settings of a binding."""

    webhook: str = ""


class WebhookConfiguration(BaseModel):
    """Generic webhook channel settings of a binding."""

    url: str = ""


ChannelConfig = Union[SlackConfiguration, WebhookConfiguration, None]


class ChannelBinding(BaseModel):
    """Channels to notify for one trigger, with their per-channel settings.

    Attributes:
        notification_type: Channel kinds to notify, in dispatch order
        slack_configuration: Settings for the SLACK kind
        webhook_configuration: Settings for the WEBHOOK kind

    The EMAIL kind needs no settings; it delivers to the workspace email.

    Example:
        binding = ChannelBinding(
            notification_type=[ChannelKind.SLACK, ChannelKind.EMAIL],
            slack_configuration=SlackConfiguration(
                webhook="https://hooks.slack.com/services/T000/B000/XXX"
            ),
        )
    """

    notification_type: List[ChannelKind] = Field(default_factory=list)
    slack_configuration: Optional[SlackConfiguration] = None
    webhook_configuration: Optional[WebhookConfiguration] = None

    def entries(self) -> Iterator[Tuple[ChannelKind, ChannelConfig]]:
        """Yield ``(kind, config)`` pairs in binding order."""
        for kind in self.notification_type:
            if kind == ChannelKind.SLACK:
                yield kind, self.slack_configuration or SlackConfiguration()
            elif kind == ChannelKind.WEBHOOK:
                yield kind, self.webhook_configuration or WebhookConfiguration()
            else:
                yield kind, None


class NotificationPolicy(BaseModel):
    """Per-workspace mapping from trigger type to channel binding.

    A trigger with no binding sends no notification.
    """

    bindings: Dict[TriggerType, ChannelBinding] = Field(default_factory=dict)

    def binding_for(self, trigger: TriggerType) -> Optional[ChannelBinding]:
        """Binding configured for ``trigger``, or None."""
        return self.bindings.get(trigger)


class ChannelAttempt(BaseModel):
    """Outcome of invoking one channel for one trigger.

    ``channel_kind`` is None for the single SKIPPED attempt recorded when a
    trigger has no binding.

    Attributes:
        trigger: Trigger being dispatched (None for connectivity tests)
        channel_kind: Channel that was invoked
        outcome: DELIVERED, SKIPPED or FAILED
        message: Human-readable result message
        error_code: Machine error code for failures
        notification_type: Analytics label of the channel that fired
    """

    trigger: Optional[TriggerType] = None
    channel_kind: Optional[ChannelKind] = None
    outcome: DeliveryOutcome
    message: str = ""
    error_code: Optional[str] = None
    notification_type: Optional[str] = None

    @property
    def is_success(self) -> bool:
        """Check if the channel delivered the notification."""
        return self.outcome == DeliveryOutcome.DELIVERED


class DispatchReport(BaseModel):
    """All channel attempts made for one trigger."""

    trigger: TriggerType
    attempts: List[ChannelAttempt] = Field(default_factory=list)

    @property
    def fired(self) -> List[ChannelAttempt]:
        """Attempts that did something (delivered or failed)."""
        return [a for a in self.attempts if a.outcome != DeliveryOutcome.SKIPPED]

    @property
    def delivered_count(self) -> int:
        return sum(1 for a in self.attempts if a.is_success)

    @property
    def failed_count(self) -> int:
        return sum(1 for a in self.attempts if a.outcome == DeliveryOutcome.FAILED)
