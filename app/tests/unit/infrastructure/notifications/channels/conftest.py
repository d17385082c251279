"""Fixtures for notification channel tests."""

from unittest.mock import MagicMock
from uuid import UUID

import pytest

from infrastructure.configuration import NotifySettings
from infrastructure.notifications.models import (
    ActorType,
    BreakingChangeContext,
    ConnectionEventContext,
    SchemaUpdateContext,
)


@pytest.fixture
def notify_settings():
    return NotifySettings(
        NOTIFY_API_URL="https://api.notification.example.ca",
        NOTIFY_CLIENT_ID="client-id",
        NOTIFY_CLIENT_SECRET="secret",
        NOTIFY_JOB_FAILURE_TEMPLATE_ID="tpl-failure",
        NOTIFY_JOB_SUCCESS_TEMPLATE_ID="tpl-success",
        NOTIFY_CONNECTION_DISABLED_TEMPLATE_ID="tpl-disabled",
        NOTIFY_CONNECTION_DISABLE_WARNING_TEMPLATE_ID="tpl-warning",
        NOTIFY_SCHEMA_PROPAGATED_TEMPLATE_ID="tpl-schema",
        NOTIFY_BREAKING_CHANGE_WARNING_TEMPLATE_ID="tpl-bc-warning",
        NOTIFY_BREAKING_CHANGE_SYNCS_DISABLED_TEMPLATE_ID="tpl-bc-disabled",
    )


@pytest.fixture
def http_response():
    """Factory for fake HTTP responses.

    Example:
        response = http_response(500, "internal error")
    """

    def _factory(status_code=200, body="ok"):
        response = MagicMock()
        response.status_code = status_code
        response.body = body
        response.text = body
        return response

    return _factory


@pytest.fixture
def connection_context():
    return ConnectionEventContext(
        receiver_email="owner@example.com",
        source_connector="Postgres",
        destination_connector="BigQuery",
        job_description=(
            "sync started on Monday, January 01, 2024 at 10:00:00 AM UTC, "
            "running for 3 minutes 5 seconds."
        ),
        workspace_id=UUID("11111111-1111-1111-1111-111111111111"),
        connection_id=UUID("22222222-2222-2222-2222-222222222222"),
    )


@pytest.fixture
def schema_context(event_summary_factory, catalog_diff):
    summary = event_summary_factory()
    return SchemaUpdateContext(
        workspace=summary.workspace,
        connection=summary.connection,
        source=summary.source,
        catalog_diff=catalog_diff,
        is_breaking_change=True,
        receiver_email="owner@example.com",
    )


@pytest.fixture
def breaking_change_context():
    return BreakingChangeContext(
        receiver_emails=["a@example.com", "b@example.com"],
        connector_name="Postgres",
        actor_type=ActorType.SOURCE,
        version="3.0.0",
        message="Primary keys are now required.",
        upgrade_deadline="2024-06-01",
        migration_documentation_url="https://docs.example.com/postgres-v3",
    )
