"""Event summary construction.

Turns a job, its attempt stats and the resolved workspace metadata into the
channel-agnostic EventSummary that every channel renders.
"""

from typing import Iterable, Optional

from infrastructure.notifications.models import EventSummary, ResourceInfo
from modules.jobs.models import (
    AttemptStats,
    Connection,
    Destination,
    Job,
    JobStatus,
    Source,
    SyncStats,
    Workspace,
)
from modules.jobs.urls import WebUrlHelper


def aggregate_stats(attempt_stats: Iterable[AttemptStats]) -> SyncStats:
    """Sum the volume counters of every attempt.

    Attempts without stats, and missing counters, contribute zero. Each
    counter is summed on its own; committed values are never derived from
    emitted ones.
    """
    totals = SyncStats(
        records_emitted=0, records_committed=0, bytes_emitted=0, bytes_committed=0
    )
    for stats in attempt_stats:
        combined = stats.combined_stats
        if combined is None:
            continue
        totals.records_emitted += combined.records_emitted or 0
        totals.records_committed += combined.records_committed or 0
        totals.bytes_emitted += combined.bytes_emitted or 0
        totals.bytes_committed += combined.bytes_committed or 0
    return totals


def build_event_summary(
    job: Job,
    attempt_stats: Iterable[AttemptStats],
    workspace: Workspace,
    connection: Connection,
    source: Source,
    destination: Destination,
    urls: WebUrlHelper,
    reason: Optional[str] = None,
) -> EventSummary:
    """Build the summary of a finished job.

    Args:
        job: Job the notification is about
        attempt_stats: Stats of every attempt of the job (may be empty)
        workspace: Workspace owning the connection
        connection: Connection the job ran for
        source: Source of the connection
        destination: Destination of the connection
        urls: Link builder for the web application
        reason: Failure reason, rendered as the error message

    Returns:
        EventSummary: immutable summary of the event
    """
    workspace_id = workspace.workspace_id
    totals = aggregate_stats(attempt_stats)

    return EventSummary(
        workspace=ResourceInfo(
            name=workspace.name,
            id=workspace_id,
            url=urls.workspace_url(workspace_id),
        ),
        connection=ResourceInfo(
            name=connection.name,
            id=connection.connection_id,
            url=urls.connection_url(workspace_id, connection.connection_id),
        ),
        source=ResourceInfo(
            name=source.name,
            id=source.source_id,
            url=urls.source_url(workspace_id, source.source_id),
        ),
        destination=ResourceInfo(
            name=destination.name,
            id=destination.destination_id,
            url=urls.destination_url(workspace_id, destination.destination_id),
        ),
        started_at=job.created_at,
        finished_at=job.updated_at,
        is_success=job.status == JobStatus.SUCCEEDED,
        job_id=job.id,
        error_message=reason,
        records_emitted=totals.records_emitted,
        records_committed=totals.records_committed,
        bytes_emitted=totals.bytes_emitted,
        bytes_committed=totals.bytes_committed,
    )
