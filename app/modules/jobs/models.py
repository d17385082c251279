"""Job domain models consumed by the job notifier.

These are read-only views of the records owned by job persistence and the
configuration store. The notifier never modifies them.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, EmailStr

from infrastructure.notifications.models import NotificationPolicy


class JobStatus(str, Enum):
    """Lifecycle status of a job."""

    PENDING = "pending"
    RUNNING = "running"
    INCOMPLETE = "incomplete"
    FAILED = "failed"
    SUCCEEDED = "succeeded"
    CANCELLED = "cancelled"


class JobConfigType(str, Enum):
    """What a job does."""

    SYNC = "sync"
    RESET_CONNECTION = "reset_connection"
    REFRESH = "refresh"
    CLEAR = "clear"


class Job(BaseModel):
    """A pipeline job.

    Attributes:
        id: Job identifier
        config_type: Kind of job
        scope: Identifier of the connection the job runs for
        status: Current status
        created_at: When the job was created
        updated_at: When the job last changed status
        started_at: When the first attempt started, if it has
        attempt_count: Number of attempts made so far
    """

    id: int
    config_type: JobConfigType = JobConfigType.SYNC
    scope: str
    status: JobStatus
    created_at: datetime
    updated_at: datetime
    started_at: Optional[datetime] = None
    attempt_count: int = 0

    @property
    def connection_id(self) -> UUID:
        """Connection identifier parsed from the job scope.

        Raises:
            ValueError: If the scope is not a UUID
        """
        return UUID(self.scope)


class SyncStats(BaseModel):
    """Volume counters of one attempt. Counters may be missing."""

    records_emitted: Optional[int] = None
    records_committed: Optional[int] = None
    bytes_emitted: Optional[int] = None
    bytes_committed: Optional[int] = None


class AttemptStats(BaseModel):
    """Stats recorded for one attempt. ``combined_stats`` is None when unknown."""

    combined_stats: Optional[SyncStats] = None


class Workspace(BaseModel):
    """Workspace owning connections, with its notification policy."""

    workspace_id: UUID
    name: str
    email: Optional[EmailStr] = None
    notification_policy: Optional[NotificationPolicy] = None


class Connection(BaseModel):
    connection_id: UUID
    name: str
    source_id: UUID
    destination_id: UUID


class Source(BaseModel):
    source_id: UUID
    name: str
    source_definition_id: Optional[UUID] = None


class Destination(BaseModel):
    destination_id: UUID
    name: str
    destination_definition_id: Optional[UUID] = None


class ConnectorDefinition(BaseModel):
    """Connector type a source or destination is an instance of."""

    definition_id: UUID
    name: str
    docker_repository: str = ""
    docker_image_tag: str = ""
