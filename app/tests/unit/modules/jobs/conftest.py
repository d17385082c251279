"""Fixtures for job notifier tests."""

from datetime import datetime, timezone
from unittest.mock import MagicMock
from uuid import UUID

import pytest

from infrastructure.notifications.models import (
    ChannelAttempt,
    ChannelBinding,
    ChannelKind,
    DeliveryOutcome,
    DispatchReport,
    NotificationPolicy,
    SlackConfiguration,
    TriggerType,
)
from modules.jobs.models import (
    AttemptStats,
    Connection,
    ConnectorDefinition,
    Destination,
    Job,
    JobStatus,
    Source,
    SyncStats,
    Workspace,
)

WORKSPACE_ID = UUID("11111111-1111-1111-1111-111111111111")
CONNECTION_ID = UUID("22222222-2222-2222-2222-222222222222")
SOURCE_ID = UUID("33333333-3333-3333-3333-333333333333")
DESTINATION_ID = UUID("44444444-4444-4444-4444-444444444444")
SOURCE_DEFINITION_ID = UUID("55555555-5555-5555-5555-555555555555")
DESTINATION_DEFINITION_ID = UUID("66666666-6666-6666-6666-666666666666")
SLACK_WEBHOOK = "https://hooks.slack.com/services/T000/B000/XXXX"


class FakeConfigRepository:
    """In-memory ConfigRepository for a single workspace and connection."""

    def __init__(self, workspace):
        self.workspace = workspace
        self.connection = Connection(
            connection_id=CONNECTION_ID,
            name="Postgres to BigQuery",
            source_id=SOURCE_ID,
            destination_id=DESTINATION_ID,
        )
        self.source = Source(
            source_id=SOURCE_ID,
            name="Postgres",
            source_definition_id=SOURCE_DEFINITION_ID,
        )
        self.destination = Destination(
            destination_id=DESTINATION_ID,
            name="BigQuery",
            destination_definition_id=DESTINATION_DEFINITION_ID,
        )
        self.source_definition = ConnectorDefinition(
            definition_id=SOURCE_DEFINITION_ID,
            name="Postgres",
            docker_repository="connectors/source-postgres",
            docker_image_tag="3.1.0",
        )
        self.destination_definition = ConnectorDefinition(
            definition_id=DESTINATION_DEFINITION_ID,
            name="BigQuery",
            docker_repository="connectors/destination-bigquery",
            docker_image_tag="2.0.4",
        )

    def get_workspace_id_for_job(self, job_id):
        return self.workspace.workspace_id if self.workspace else None

    def get_workspace_id_for_connection(self, connection_id):
        return self.workspace.workspace_id if self.workspace else None

    def get_workspace(self, workspace_id):
        return self.workspace

    def get_connection(self, connection_id):
        if connection_id != self.connection.connection_id:
            raise KeyError(f"Unknown connection {connection_id}")
        return self.connection

    def get_source(self, source_id):
        return self.source

    def get_destination(self, destination_id):
        return self.destination

    def get_source_definition_for_connection(self, connection_id):
        return self.source_definition

    def get_destination_definition_for_connection(self, connection_id):
        return self.destination_definition


@pytest.fixture
def slack_binding():
    return ChannelBinding(
        notification_type=[ChannelKind.SLACK, ChannelKind.EMAIL],
        slack_configuration=SlackConfiguration(webhook=SLACK_WEBHOOK),
    )


@pytest.fixture
def workspace_factory(slack_binding):
    """Factory for Workspace instances.

    By default every trigger is bound to Slack and email.

    Example:
        no_policy = workspace_factory(notification_policy=None)
    """

    def _factory(**overrides):
        values = {
            "workspace_id": WORKSPACE_ID,
            "name": "Main workspace",
            "email": "owner@example.com",
            "notification_policy": NotificationPolicy(
                bindings={trigger: slack_binding for trigger in TriggerType}
            ),
        }
        values.update(overrides)
        return Workspace(**values)

    return _factory


@pytest.fixture
def job_factory():
    """Factory for Job instances.

    Example:
        failed = job_factory(status=JobStatus.FAILED, attempt_count=3)
    """

    def _factory(**overrides):
        values = {
            "id": 42,
            "scope": str(CONNECTION_ID),
            "status": JobStatus.SUCCEEDED,
            "created_at": datetime(2024, 1, 1, 10, 0, 0, tzinfo=timezone.utc),
            "updated_at": datetime(2024, 1, 1, 10, 3, 5, tzinfo=timezone.utc),
            "attempt_count": 1,
        }
        values.update(overrides)
        return Job(**values)

    return _factory


@pytest.fixture
def attempt_stats():
    return [
        AttemptStats(
            combined_stats=SyncStats(
                records_emitted=100,
                records_committed=90,
                bytes_emitted=2048,
                bytes_committed=1024,
            )
        ),
        AttemptStats(combined_stats=None),
        AttemptStats(
            combined_stats=SyncStats(records_emitted=50, records_committed=30)
        ),
    ]


@pytest.fixture
def config_repository(workspace_factory):
    return FakeConfigRepository(workspace_factory())


@pytest.fixture
def report_factory():
    """Factory for DispatchReport instances from ``(kind, outcome, type)`` triples."""

    def _factory(trigger, *attempts):
        return DispatchReport(
            trigger=trigger,
            attempts=[
                ChannelAttempt(
                    trigger=trigger,
                    channel_kind=kind,
                    outcome=outcome,
                    notification_type=notification_type,
                )
                for kind, outcome, notification_type in attempts
            ],
        )

    return _factory


@pytest.fixture
def mock_dispatcher(report_factory):
    """Dispatcher whose dispatch reports a delivered Slack message."""
    dispatcher = MagicMock()
    dispatcher.dispatch.side_effect = lambda trigger, *args, **kwargs: report_factory(
        trigger, (ChannelKind.SLACK, DeliveryOutcome.DELIVERED, "slack")
    )
    return dispatcher
