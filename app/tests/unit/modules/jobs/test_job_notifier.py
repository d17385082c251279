"""Unit tests for JobNotifier.

Tests cover:
- Job failure, success and auto-disable notifications
- Lookup failures abandoning the notification without raising
- Analytics tracking of fired notifications
- Schema change, breaking change and test notifications
- End-to-end delivery through the real dispatcher
"""

from unittest.mock import MagicMock, patch
from uuid import UUID

import pytest

from infrastructure.configuration import Settings, WebAppSettings
from infrastructure.notifications.capabilities import NotificationCapability
from infrastructure.notifications.dispatcher import NotificationDispatcher
from infrastructure.notifications.models import (
    ActorType,
    BreakingChangeContext,
    ChannelBinding,
    ChannelKind,
    ConnectionEventContext,
    DeliveryOutcome,
    EventSummary,
    NotificationPolicy,
    SchemaUpdateContext,
    SlackConfiguration,
    TriggerType,
    WebhookConfiguration,
)
from modules.jobs.models import JobStatus
from modules.jobs.notifier import JobNotifier

WORKSPACE_ID = UUID("11111111-1111-1111-1111-111111111111")
CONNECTION_ID = UUID("22222222-2222-2222-2222-222222222222")


@pytest.fixture
def settings():
    return Settings(webapp=WebAppSettings(WEBAPP_URL="https://app.example.com/"))


@pytest.fixture
def tracking_sink():
    return MagicMock()


@pytest.fixture
def notifier(config_repository, tracking_sink, mock_dispatcher, settings):
    return JobNotifier(
        config_repository,
        tracking_sink=tracking_sink,
        settings=settings,
        dispatcher=mock_dispatcher,
    )


@pytest.mark.unit
class TestJobResultNotifications:
    def test_fail_job_dispatches_summary(
        self, notifier, mock_dispatcher, job_factory, attempt_stats, slack_binding
    ):
        job = job_factory(status=JobStatus.FAILED)

        report = notifier.fail_job("source was unreachable", job, attempt_stats)

        assert report.delivered_count == 1
        args = mock_dispatcher.dispatch.call_args.args
        assert args[0] == TriggerType.ON_FAILURE
        assert args[1] == slack_binding
        assert args[2] == NotificationCapability.JOB_FAILURE
        summary, receiver = args[3], args[4]
        assert isinstance(summary, EventSummary)
        assert summary.is_success is False
        assert summary.error_message == "source was unreachable"
        assert summary.records_emitted == 150
        assert summary.connection.url == (
            f"https://app.example.com/workspaces/{WORKSPACE_ID}"
            f"/connections/{CONNECTION_ID}"
        )
        assert receiver == "owner@example.com"
        assert mock_dispatcher.dispatch.call_args.kwargs == {
            "receiver_email": "owner@example.com"
        }

    def test_success_job(self, notifier, mock_dispatcher, job_factory, attempt_stats):
        notifier.success_job(job_factory(), attempt_stats)

        args = mock_dispatcher.dispatch.call_args.args
        assert args[0] == TriggerType.ON_SUCCESS
        assert args[2] == NotificationCapability.JOB_SUCCESS
        assert args[3].is_success is True

    def test_empty_attempt_list(self, notifier, mock_dispatcher, job_factory):
        notifier.success_job(job_factory(), [])

        summary = mock_dispatcher.dispatch.call_args.args[3]
        assert summary.records_emitted == 0
        assert summary.bytes_committed == 0

    def test_pre_resolved_workspace_skips_lookup(
        self, notifier, config_repository, mock_dispatcher, job_factory
    ):
        config_repository.get_workspace_id_for_job = MagicMock(
            side_effect=AssertionError("should not be called")
        )

        report = notifier.dispatch(
            TriggerType.ON_SUCCESS,
            job_factory(),
            [],
            workspace=config_repository.workspace,
        )

        assert report is not None
        mock_dispatcher.dispatch.assert_called_once()


@pytest.mark.unit
class TestConnectionDisabledNotifications:
    def test_auto_disable_connection(
        self, notifier, mock_dispatcher, job_factory, attempt_stats
    ):
        notifier.auto_disable_connection(job_factory(status=JobStatus.FAILED), attempt_stats)

        args = mock_dispatcher.dispatch.call_args.args
        assert args[0] == TriggerType.ON_SYNC_DISABLED
        assert args[2] == NotificationCapability.CONNECTION_DISABLED
        context = args[3]
        assert isinstance(context, ConnectionEventContext)
        assert context.source_connector == "Postgres"
        assert context.destination_connector == "BigQuery"
        assert context.receiver_email == "owner@example.com"
        assert context.connection_id == CONNECTION_ID
        assert context.job_description == (
            "sync started on Monday, January 01, 2024 at 10:00:00 AM UTC, "
            "running for 3 minutes 5 seconds."
        )

    def test_warning_prefers_started_at(
        self, notifier, mock_dispatcher, job_factory, attempt_stats
    ):
        job = job_factory(
            started_at=job_factory().created_at.replace(minute=1),
        )

        notifier.auto_disable_connection_warning(job, attempt_stats)

        args = mock_dispatcher.dispatch.call_args.args
        assert args[0] == TriggerType.ON_SYNC_DISABLED_WARNING
        assert args[2] == NotificationCapability.CONNECTION_DISABLE_WARNING
        assert "at 10:01:00 AM UTC, running for 2 minutes 5 seconds." in (
            args[3].job_description
        )


@pytest.mark.unit
class TestAbandonedNotifications:
    def test_workspace_lookup_failure_is_swallowed(
        self, notifier, config_repository, mock_dispatcher, tracking_sink, job_factory
    ):
        config_repository.get_workspace_id_for_job = MagicMock(
            side_effect=RuntimeError("database down")
        )

        assert notifier.fail_job("boom", job_factory(), []) is None

        mock_dispatcher.dispatch.assert_not_called()
        tracking_sink.record_event.assert_not_called()

    def test_unknown_workspace(
        self, notifier, config_repository, mock_dispatcher, job_factory
    ):
        config_repository.workspace = None

        assert notifier.success_job(job_factory(), []) is None

        mock_dispatcher.dispatch.assert_not_called()

    def test_connection_lookup_failure(
        self, notifier, mock_dispatcher, job_factory
    ):
        job = job_factory(scope="99999999-9999-9999-9999-999999999999")

        assert notifier.success_job(job, []) is None

        mock_dispatcher.dispatch.assert_not_called()

    def test_invalid_scope(self, notifier, mock_dispatcher, job_factory):
        assert notifier.success_job(job_factory(scope="not-a-uuid"), []) is None

        mock_dispatcher.dispatch.assert_not_called()

    def test_schema_trigger_is_not_a_job_notification(
        self, notifier, mock_dispatcher, job_factory
    ):
        result = notifier.dispatch(TriggerType.ON_SCHEMA_CHANGE, job_factory(), [])

        assert result is None
        mock_dispatcher.dispatch.assert_not_called()

    def test_missing_policy_dispatches_without_binding(
        self, notifier, config_repository, workspace_factory, mock_dispatcher, job_factory
    ):
        config_repository.workspace = workspace_factory(notification_policy=None)

        notifier.success_job(job_factory(), [])

        assert mock_dispatcher.dispatch.call_args.args[1] is None


@pytest.mark.unit
class TestTracking:
    def test_tracks_fired_notification(
        self, notifier, tracking_sink, job_factory, attempt_stats
    ):
        notifier.fail_job("boom", job_factory(attempt_count=2), attempt_stats)

        tracking_sink.record_event.assert_called_once()
        workspace_id, action, attributes = tracking_sink.record_event.call_args.args
        assert workspace_id == WORKSPACE_ID
        assert action == "Failure Notification"
        assert attributes["job_id"] == "42"
        assert attributes["job_type"] == "sync"
        assert attributes["attempt_id"] == 1
        assert attributes["connector_source"] == "Postgres"
        assert attributes["connector_source_version"] == "3.1.0"
        assert attributes["connector_destination"] == "BigQuery"
        assert attributes["connection_id"] == str(CONNECTION_ID)
        assert attributes["notification_type"] == "slack"

    def test_nothing_fired_is_not_tracked(
        self, notifier, mock_dispatcher, report_factory, tracking_sink, job_factory
    ):
        mock_dispatcher.dispatch.side_effect = None
        mock_dispatcher.dispatch.return_value = report_factory(
            TriggerType.ON_SUCCESS, (None, DeliveryOutcome.SKIPPED, None)
        )

        notifier.success_job(job_factory(), [])

        tracking_sink.record_event.assert_not_called()

    def test_tracking_failure_is_swallowed(
        self, notifier, tracking_sink, job_factory
    ):
        tracking_sink.record_event.side_effect = RuntimeError("analytics down")

        report = notifier.success_job(job_factory(), [])

        assert report.delivered_count == 1


@pytest.mark.unit
class TestDispatcherErrors:
    def test_job_dispatch_error_is_contained(
        self, notifier, mock_dispatcher, tracking_sink, job_factory
    ):
        mock_dispatcher.dispatch.side_effect = TypeError("bad call")

        assert notifier.fail_job("boom", job_factory(), []) is None

        tracking_sink.record_event.assert_not_called()

    def test_schema_dispatch_error_is_contained(
        self, notifier, mock_dispatcher, catalog_diff
    ):
        mock_dispatcher.dispatch.side_effect = RuntimeError("boom")

        assert notifier.notify_schema_change(CONNECTION_ID, catalog_diff) is None

    def test_breaking_change_error_is_a_failed_attempt(self, notifier, mock_dispatcher):
        mock_dispatcher.deliver.side_effect = RuntimeError("boom")
        context = BreakingChangeContext(
            receiver_emails=["a@example.com"],
            connector_name="Postgres",
            actor_type=ActorType.SOURCE,
            version="3.0.0",
            message="Primary keys are now required.",
            upgrade_deadline="2024-06-01",
        )

        result = notifier.notify_breaking_change(context)

        assert result.channel_kind == ChannelKind.EMAIL
        assert result.outcome == DeliveryOutcome.FAILED
        assert result.error_code == "UNEXPECTED_ERROR"

    def test_send_test_error_returns_no_attempts(
        self, notifier, mock_dispatcher, slack_binding
    ):
        mock_dispatcher.send_test.side_effect = RuntimeError("boom")

        assert notifier.send_test_notification(slack_binding, "Hello") == []


@pytest.mark.unit
class TestSchemaChange:
    def test_dispatches_summary_and_context(
        self, notifier, mock_dispatcher, tracking_sink, catalog_diff
    ):
        report = notifier.notify_schema_change(
            CONNECTION_ID, catalog_diff, is_breaking_change=True
        )

        assert report is not None
        args = mock_dispatcher.dispatch.call_args.args
        assert args[0] == TriggerType.ON_SCHEMA_CHANGE
        assert args[2] == NotificationCapability.SCHEMA_PROPAGATED
        assert args[3].startswith(" • Streams (+1/-1)\n")
        context = args[4]
        assert isinstance(context, SchemaUpdateContext)
        assert context.is_breaking_change is True
        assert context.connection.name == "Postgres to BigQuery"
        assert context.source.url.endswith("/source/33333333-3333-3333-3333-333333333333")

        attributes = tracking_sink.record_event.call_args.args[2]
        assert attributes["is_breaking_change"] is True
        assert attributes["connector_source"] == "Postgres"
        assert "connector_destination" not in attributes

    def test_unknown_workspace(self, notifier, config_repository, mock_dispatcher, catalog_diff):
        config_repository.workspace = None

        assert notifier.notify_schema_change(CONNECTION_ID, catalog_diff) is None

        mock_dispatcher.dispatch.assert_not_called()


@pytest.mark.unit
class TestBreakingChange:
    @pytest.fixture
    def context(self):
        return BreakingChangeContext(
            receiver_emails=["a@example.com"],
            connector_name="Postgres",
            actor_type=ActorType.SOURCE,
            version="3.0.0",
            message="Primary keys are now required.",
            upgrade_deadline="2024-06-01",
        )

    def test_warning_goes_to_email(self, notifier, mock_dispatcher, context):
        notifier.notify_breaking_change(context)

        mock_dispatcher.deliver.assert_called_once_with(
            ChannelKind.EMAIL,
            None,
            NotificationCapability.BREAKING_CHANGE_WARNING,
            context,
        )

    def test_syncs_disabled(self, notifier, mock_dispatcher, context):
        notifier.notify_breaking_change(context, syncs_disabled=True)

        assert mock_dispatcher.deliver.call_args.args[2] == (
            NotificationCapability.BREAKING_CHANGE_SYNCS_DISABLED
        )


@pytest.mark.unit
def test_send_test_notification(notifier, mock_dispatcher, slack_binding):
    mock_dispatcher.send_test.return_value = []

    notifier.send_test_notification(slack_binding, "Hello")

    mock_dispatcher.send_test.assert_called_once_with(slack_binding, "Hello")


@pytest.mark.unit
class TestEndToEnd:
    @patch("infrastructure.notifications.channels.slack.webhook.post_message")
    def test_slack_delivered_email_skipped(
        self,
        mock_post_message,
        config_repository,
        tracking_sink,
        settings,
        job_factory,
        attempt_stats,
    ):
        mock_post_message.return_value = MagicMock(status_code=200, body="ok")
        metrics_sink = MagicMock()
        notifier = JobNotifier(
            config_repository,
            tracking_sink=tracking_sink,
            settings=settings,
            dispatcher=NotificationDispatcher(
                settings=settings, metrics_sink=metrics_sink
            ),
        )

        report = notifier.fail_job(
            "source was unreachable", job_factory(status=JobStatus.FAILED), attempt_stats
        )

        assert [a.outcome for a in report.attempts] == [
            DeliveryOutcome.DELIVERED,
            DeliveryOutcome.SKIPPED,
        ]
        payload = mock_post_message.call_args.args[1]
        assert payload["blocks"][0]["text"]["text"].startswith("Sync failure occurred")
        assert metrics_sink.record_attempt.call_count == 2
        attributes = tracking_sink.record_event.call_args.args[2]
        assert attributes["notification_types"] == ["slack"]

    @patch("infrastructure.notifications.channels.slack.webhook.post_message")
    def test_slack_failure_does_not_raise(
        self,
        mock_post_message,
        config_repository,
        tracking_sink,
        settings,
        job_factory,
    ):
        mock_post_message.return_value = MagicMock(status_code=500, body="error")
        notifier = JobNotifier(
            config_repository, tracking_sink=tracking_sink, settings=settings
        )

        report = notifier.success_job(job_factory(), [])

        assert report.attempts[0].outcome == DeliveryOutcome.FAILED
        assert report.attempts[0].error_code == "HTTP_500"
        tracking_sink.record_event.assert_called_once()

    @patch("infrastructure.notifications.channels.webhook.post_json")
    @patch("infrastructure.notifications.channels.slack.webhook.post_message")
    def test_raising_channel_does_not_stop_the_next(
        self,
        mock_post_message,
        mock_post_json,
        config_repository,
        workspace_factory,
        tracking_sink,
        settings,
        job_factory,
    ):
        binding = ChannelBinding(
            notification_type=[ChannelKind.SLACK, ChannelKind.WEBHOOK],
            slack_configuration=SlackConfiguration(
                webhook="https://hooks.slack.com/services/T/B/X"
            ),
            webhook_configuration=WebhookConfiguration(url="https://hooks.example.com"),
        )
        config_repository.workspace = workspace_factory(
            notification_policy=NotificationPolicy(
                bindings={TriggerType.ON_FAILURE: binding}
            )
        )
        mock_post_message.side_effect = RuntimeError("socket closed")
        mock_post_json.return_value = MagicMock(status_code=200, text="ok")
        notifier = JobNotifier(
            config_repository, tracking_sink=tracking_sink, settings=settings
        )

        report = notifier.fail_job("boom", job_factory(status=JobStatus.FAILED), [])

        assert [a.outcome for a in report.attempts] == [
            DeliveryOutcome.FAILED,
            DeliveryOutcome.DELIVERED,
        ]
        assert mock_post_json.call_args.args[0] == "https://hooks.example.com"
        attributes = tracking_sink.record_event.call_args.args[2]
        assert attributes["notification_types"] == ["slack", "N/A"]
