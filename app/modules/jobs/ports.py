"""Collaborator interfaces of the job notifier.

The notifier reads configuration through a ConfigRepository and reports
to the metrics and tracking sinks defined by the notification
infrastructure.
"""

from typing import Optional, Protocol
from uuid import UUID

from infrastructure.notifications.sinks import (
    LoggingMetricsSink,
    LoggingTrackingSink,
    MetricsSink,
    TrackingSink,
)
from modules.jobs.models import (
    Connection,
    ConnectorDefinition,
    Destination,
    Source,
    Workspace,
)


class ConfigRepository(Protocol):
    """Read access to workspace and connection configuration.

    Implementations may raise any exception on a failed lookup; the
    notifier treats every failure as "abandon this notification".
    """

    def get_workspace_id_for_job(self, job_id: int) -> Optional[UUID]: ...

    def get_workspace_id_for_connection(
        self, connection_id: UUID
    ) -> Optional[UUID]: ...

    def get_workspace(self, workspace_id: UUID) -> Workspace: ...

    def get_connection(self, connection_id: UUID) -> Connection: ...

    def get_source(self, source_id: UUID) -> Source: ...

    def get_destination(self, destination_id: UUID) -> Destination: ...

    def get_source_definition_for_connection(
        self, connection_id: UUID
    ) -> ConnectorDefinition: ...

    def get_destination_definition_for_connection(
        self, connection_id: UUID
    ) -> ConnectorDefinition: ...


__all__ = [
    "ConfigRepository",
    "MetricsSink",
    "TrackingSink",
    "LoggingMetricsSink",
    "LoggingTrackingSink",
]
