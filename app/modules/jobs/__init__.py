# modules/jobs/__init__.py
"""Job event notifications module.

Notifies workspaces when their sync jobs fail or succeed, when a connection
is automatically disabled (or about to be), when a connection's schema
changes, and when a connector announces a breaking change.

Features:
- Event summaries aggregated over every attempt of a job
- Delivery through the channels bound to each trigger in the workspace policy
- Best-effort delivery that never fails the calling workflow
- Analytics tracking of the notifications that fired
"""

from modules.jobs.models import (
    AttemptStats,
    Connection,
    ConnectorDefinition,
    Destination,
    Job,
    JobConfigType,
    JobStatus,
    Source,
    SyncStats,
    Workspace,
)
from modules.jobs.notifier import JobNotifier
from modules.jobs.ports import ConfigRepository
from modules.jobs.summary import aggregate_stats, build_event_summary
from modules.jobs.urls import WebUrlHelper

__all__ = [
    "AttemptStats",
    "Connection",
    "ConnectorDefinition",
    "Destination",
    "Job",
    "JobConfigType",
    "JobStatus",
    "Source",
    "SyncStats",
    "Workspace",
    "JobNotifier",
    "ConfigRepository",
    "aggregate_stats",
    "build_event_summary",
    "WebUrlHelper",
]
