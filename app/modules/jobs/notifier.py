"""Job notifier.

Sends notifications to a workspace about things that happened to its jobs
and connections. Each call goes through the same steps:

1. Resolving: look up the workspace, connection, connectors and definitions
2. Building: build the event summary or context for the trigger
3. Dispatching: deliver through every channel bound to the trigger
4. Reporting: emit an analytics event when a notification fired

Notification delivery is best-effort. No public method raises; failed
lookups abandon the notification and are only visible in the logs.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple
from uuid import UUID

from infrastructure.configuration import Settings
from infrastructure.logging import bind_notification_context, get_module_logger
from infrastructure.notifications import (
    BreakingChangeContext,
    CatalogDiff,
    ChannelAttempt,
    ChannelBinding,
    ChannelKind,
    ConnectionEventContext,
    DeliveryOutcome,
    DispatchReport,
    NotificationCapability,
    NotificationDispatcher,
    ResourceInfo,
    SchemaUpdateContext,
    TriggerType,
)
from infrastructure.notifications.formatting import (
    describe_job,
    summarize_catalog_diff,
)
from infrastructure.operations import OperationError, attempt
from infrastructure.services import get_settings
from modules.jobs import tracking
from modules.jobs.models import (
    AttemptStats,
    Connection,
    ConnectorDefinition,
    Destination,
    Job,
    Source,
    Workspace,
)
from modules.jobs.ports import (
    ConfigRepository,
    LoggingTrackingSink,
    MetricsSink,
    TrackingSink,
)
from modules.jobs.summary import build_event_summary
from modules.jobs.urls import WebUrlHelper

logger = get_module_logger()

JOB_CAPABILITIES = {
    TriggerType.ON_FAILURE: NotificationCapability.JOB_FAILURE,
    TriggerType.ON_SUCCESS: NotificationCapability.JOB_SUCCESS,
    TriggerType.ON_SYNC_DISABLED: NotificationCapability.CONNECTION_DISABLED,
    TriggerType.ON_SYNC_DISABLED_WARNING: NotificationCapability.CONNECTION_DISABLE_WARNING,
}


class WorkspaceNotFoundError(OperationError):
    error_code = "WORKSPACE_NOT_FOUND"


@dataclass
class ConnectionMetadata:
    """Everything resolved about the connection a notification is for."""

    connection: Connection
    source: Source
    destination: Destination
    source_definition: ConnectorDefinition
    destination_definition: ConnectorDefinition


class JobNotifier:
    """Notifies workspaces about job and connection events.

    Attributes:
        config_repository: Workspace and connection lookups
        tracking_sink: Receives an analytics event per fired notification
        dispatcher: Delivers through the channels of a binding
        urls: Link builder for the web application

    Example:
        notifier = JobNotifier(config_repository)
        notifier.fail_job("source was unreachable", job, attempt_stats)
    """

    def __init__(
        self,
        config_repository: ConfigRepository,
        tracking_sink: Optional[TrackingSink] = None,
        metrics_sink: Optional[MetricsSink] = None,
        settings: Optional[Settings] = None,
        dispatcher: Optional[NotificationDispatcher] = None,
    ):
        settings = settings or get_settings()
        self.config_repository = config_repository
        self.tracking_sink = tracking_sink or LoggingTrackingSink()
        self.dispatcher = dispatcher or NotificationDispatcher(
            settings=settings, metrics_sink=metrics_sink
        )
        self.urls = WebUrlHelper(settings.webapp.WEBAPP_URL)

    def fail_job(
        self, reason: Optional[str], job: Job, attempt_stats: Sequence[AttemptStats]
    ) -> Optional[DispatchReport]:
        return self.dispatch(TriggerType.ON_FAILURE, job, attempt_stats, reason=reason)

    def success_job(
        self, job: Job, attempt_stats: Sequence[AttemptStats]
    ) -> Optional[DispatchReport]:
        return self.dispatch(TriggerType.ON_SUCCESS, job, attempt_stats)

    def auto_disable_connection(
        self, job: Job, attempt_stats: Sequence[AttemptStats]
    ) -> Optional[DispatchReport]:
        return self.dispatch(TriggerType.ON_SYNC_DISABLED, job, attempt_stats)

    def auto_disable_connection_warning(
        self, job: Job, attempt_stats: Sequence[AttemptStats]
    ) -> Optional[DispatchReport]:
        return self.dispatch(TriggerType.ON_SYNC_DISABLED_WARNING, job, attempt_stats)

    def dispatch(
        self,
        trigger: TriggerType,
        job: Job,
        attempt_stats: Sequence[AttemptStats],
        workspace: Optional[Workspace] = None,
        reason: Optional[str] = None,
    ) -> Optional[DispatchReport]:
        """Notify the workspace owning ``job`` about ``trigger``.

        Args:
            trigger: Job event being notified
            job: Job the event is about
            attempt_stats: Stats of every attempt of the job
            workspace: Owning workspace, when the caller already has it
            reason: Failure reason for failure and auto-disable messages

        Returns:
            DispatchReport of the channel attempts, or None when the
            notification was abandoned before dispatch
        """
        with bind_notification_context(job_id=job.id, trigger=trigger.value):
            capability = JOB_CAPABILITIES.get(trigger)
            if capability is None:
                logger.warning("job_notification_unsupported_trigger")
                return None

            if workspace is None:
                resolved = attempt(
                    lambda: self._workspace_for_job(job),
                    "notification_workspace_lookup_failed",
                )
                if not resolved.is_success:
                    return None
                workspace = resolved.data

            resolved = attempt(
                lambda: self._resolve_connection(job.connection_id),
                "notification_metadata_lookup_failed",
                workspace_id=str(workspace.workspace_id),
            )
            if not resolved.is_success:
                return None
            metadata: ConnectionMetadata = resolved.data

            built = attempt(
                lambda: self._build_arguments(
                    trigger, job, attempt_stats, workspace, metadata, reason
                ),
                "notification_build_failed",
            )
            if not built.is_success:
                return None

            dispatched = attempt(
                lambda: self.dispatcher.dispatch(
                    trigger,
                    self._binding_for(workspace, trigger),
                    capability,
                    *built.data,
                    receiver_email=workspace.email,
                ),
                "notification_dispatch_failed",
            )
            if not dispatched.is_success:
                return None
            report: DispatchReport = dispatched.data

            self._track(
                workspace.workspace_id,
                trigger,
                report,
                lambda: {
                    **tracking.job_metadata(job),
                    **tracking.source_definition_metadata(metadata.source_definition),
                    **tracking.destination_definition_metadata(
                        metadata.destination_definition
                    ),
                },
                job.connection_id,
            )
            return report

    def notify_schema_change(
        self,
        connection_id: UUID,
        catalog_diff: CatalogDiff,
        is_breaking_change: bool = False,
    ) -> Optional[DispatchReport]:
        """Notify the owning workspace that a connection's schema changed.

        Returns:
            DispatchReport of the channel attempts, or None when abandoned
        """
        trigger = TriggerType.ON_SCHEMA_CHANGE
        with bind_notification_context(
            trigger=trigger.value, connection_id=str(connection_id)
        ):
            resolved = attempt(
                lambda: self._schema_change_context(
                    connection_id, catalog_diff, is_breaking_change
                ),
                "notification_metadata_lookup_failed",
            )
            if not resolved.is_success:
                return None
            workspace, metadata, context = resolved.data

            built = attempt(
                lambda: summarize_catalog_diff(catalog_diff),
                "notification_build_failed",
            )
            if not built.is_success:
                return None

            dispatched = attempt(
                lambda: self.dispatcher.dispatch(
                    trigger,
                    self._binding_for(workspace, trigger),
                    NotificationCapability.SCHEMA_PROPAGATED,
                    built.data,
                    context,
                    receiver_email=workspace.email,
                ),
                "notification_dispatch_failed",
            )
            if not dispatched.is_success:
                return None
            report: DispatchReport = dispatched.data

            self._track(
                workspace.workspace_id,
                trigger,
                report,
                lambda: {
                    "is_breaking_change": is_breaking_change,
                    **tracking.source_definition_metadata(metadata.source_definition),
                },
                connection_id,
            )
            return report

    def notify_breaking_change(
        self, context: BreakingChangeContext, syncs_disabled: bool = False
    ) -> ChannelAttempt:
        """Email every affected workspace about a connector breaking change.

        Breaking changes reach many workspaces at once, so they are only
        sent through the bulk email channel.
        """
        capability = NotificationCapability.BREAKING_CHANGE_WARNING
        if syncs_disabled:
            capability = NotificationCapability.BREAKING_CHANGE_SYNCS_DISABLED

        with bind_notification_context(connector=context.connector_name):
            delivered = attempt(
                lambda: self.dispatcher.deliver(
                    ChannelKind.EMAIL, None, capability, context
                ),
                "notification_dispatch_failed",
            )
            if delivered.is_success:
                return delivered.data
            return ChannelAttempt(
                channel_kind=ChannelKind.EMAIL,
                outcome=DeliveryOutcome.FAILED,
                message=delivered.message,
                error_code=delivered.error_code,
            )

    def send_test_notification(
        self, binding: ChannelBinding, message: str
    ) -> List[ChannelAttempt]:
        """Send ``message`` through every channel of ``binding``."""
        with bind_notification_context(trigger="test"):
            sent = attempt(
                lambda: self.dispatcher.send_test(binding, message),
                "notification_dispatch_failed",
            )
            attempts: List[ChannelAttempt] = sent.data if sent.is_success else []
            logger.info(
                "test_notification_sent",
                delivered=sum(1 for a in attempts if a.is_success),
                channels=len(attempts),
            )
            return attempts

    def _workspace_for_job(self, job: Job) -> Workspace:
        workspace_id = self.config_repository.get_workspace_id_for_job(job.id)
        if workspace_id is None:
            raise WorkspaceNotFoundError(f"No workspace found for job {job.id}")
        return self.config_repository.get_workspace(workspace_id)

    def _resolve_connection(self, connection_id: UUID) -> ConnectionMetadata:
        repository = self.config_repository
        connection = repository.get_connection(connection_id)
        return ConnectionMetadata(
            connection=connection,
            source=repository.get_source(connection.source_id),
            destination=repository.get_destination(connection.destination_id),
            source_definition=repository.get_source_definition_for_connection(
                connection_id
            ),
            destination_definition=repository.get_destination_definition_for_connection(
                connection_id
            ),
        )

    def _schema_change_context(
        self,
        connection_id: UUID,
        catalog_diff: CatalogDiff,
        is_breaking_change: bool,
    ) -> Tuple[Workspace, ConnectionMetadata, SchemaUpdateContext]:
        workspace_id = self.config_repository.get_workspace_id_for_connection(
            connection_id
        )
        if workspace_id is None:
            raise WorkspaceNotFoundError(
                f"No workspace found for connection {connection_id}"
            )
        workspace = self.config_repository.get_workspace(workspace_id)
        metadata = self._resolve_connection(connection_id)
        source = metadata.source

        context = SchemaUpdateContext(
            workspace=ResourceInfo(
                name=workspace.name,
                id=workspace_id,
                url=self.urls.workspace_url(workspace_id),
            ),
            connection=ResourceInfo(
                name=metadata.connection.name,
                id=connection_id,
                url=self.urls.connection_url(workspace_id, connection_id),
            ),
            source=ResourceInfo(
                name=source.name,
                id=source.source_id,
                url=self.urls.source_url(workspace_id, source.source_id),
            ),
            catalog_diff=catalog_diff,
            is_breaking_change=is_breaking_change,
            receiver_email=workspace.email,
        )
        return workspace, metadata, context

    def _build_arguments(
        self,
        trigger: TriggerType,
        job: Job,
        attempt_stats: Sequence[AttemptStats],
        workspace: Workspace,
        metadata: ConnectionMetadata,
        reason: Optional[str],
    ) -> Tuple[Any, ...]:
        if trigger in (TriggerType.ON_FAILURE, TriggerType.ON_SUCCESS):
            summary = build_event_summary(
                job,
                attempt_stats,
                workspace,
                metadata.connection,
                metadata.source,
                metadata.destination,
                self.urls,
                reason=reason,
            )
            return summary, workspace.email

        context = ConnectionEventContext(
            receiver_email=workspace.email,
            source_connector=metadata.source_definition.name,
            destination_connector=metadata.destination_definition.name,
            job_description=describe_job(
                job.started_at or job.created_at, job.updated_at, reason
            ),
            workspace_id=workspace.workspace_id,
            connection_id=job.connection_id,
        )
        return (context,)

    @staticmethod
    def _binding_for(
        workspace: Workspace, trigger: TriggerType
    ) -> Optional[ChannelBinding]:
        if workspace.notification_policy is None:
            logger.warning("notification_policy_missing")
            return None
        return workspace.notification_policy.binding_for(trigger)

    def _track(
        self,
        workspace_id: UUID,
        trigger: TriggerType,
        report: DispatchReport,
        base_metadata,
        connection_id: UUID,
    ) -> None:
        if not report.fired:
            return

        def emit() -> None:
            attributes: Dict[str, Any] = base_metadata()
            attributes.update(tracking.notification_metadata(connection_id, report))
            self.tracking_sink.record_event(workspace_id, trigger.value, attributes)

        attempt(emit, "notification_tracking_failed")
