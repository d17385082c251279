"""Slack channel implementation using incoming webhooks."""

from typing import Callable, Dict, Optional
from urllib.error import URLError

import structlog
from slack_sdk.errors import SlackObjectFormationError

from infrastructure.notifications.capabilities import (
    NotificationCapability,
    create_capability_declaration,
)
from infrastructure.notifications.channels.base import NotificationChannel
from infrastructure.notifications.errors import (
    NotificationDeliveryError,
    UnsupportedNotificationError,
)
from infrastructure.notifications.formatting import (
    create_link,
    format_duration,
    format_volume,
)
from infrastructure.notifications.messages import (
    connection_values,
    job_values,
    render_template,
)
from infrastructure.notifications.models import (
    BreakingChangeContext,
    ConnectionEventContext,
    EventSummary,
    SchemaUpdateContext,
)
from integrations.slack import blocks, webhook

logger = structlog.get_logger()

EMPTY_FIELD = " "
NO_SCHEMA_CHANGES = "No stream or field changes."


def build_job_completed_message(
    summary: EventSummary, text: str, max_error_length: Optional[int] = None
) -> Dict:
    """Build the Block Kit message for a finished sync.

    Layout: a title linking the connection, a two-column section with the
    source, destination and duration, a failure reason block for failed
    syncs, and the loaded/extracted totals.

    Args:
        summary: Event being reported
        text: Plain-text fallback shown in notifications
        max_error_length: Truncate the failure reason to this many characters

    Returns:
        Dict: ``{"text": ..., "blocks": [...]}`` message payload
    """
    connection_link = create_link(summary.connection.name, summary.connection.url)
    title = "Sync completed" if summary.is_success else "Sync failure occurred"

    if summary.duration_available:
        duration_label = "*Duration:*"
        duration = format_duration(summary.started_at, summary.finished_at)
    else:
        duration_label = duration = EMPTY_FIELD

    message_blocks = [
        blocks.create_section_block(f"{title}: {connection_link}"),
        blocks.create_fields_block(
            [
                "*Source:*",
                duration_label,
                create_link(summary.source.name, summary.source.url),
                duration,
                "*Destination:*",
                EMPTY_FIELD,
                create_link(summary.destination.name, summary.destination.url),
            ]
        ),
    ]

    if not summary.is_success and summary.error_message is not None:
        reason = summary.error_message
        if max_error_length and len(reason) > max_error_length:
            reason = reason[:max_error_length] + "..."
        message_blocks.append(
            blocks.create_section_block(f"*Failure reason:*\n\n```\n{reason}\n```\n")
        )

    message_blocks.append(
        blocks.create_section_block(
            "*Sync Summary:*\n"
            f"{summary.records_committed} record(s) loaded / "
            f"{summary.records_emitted} record(s) extracted\n"
            f"{format_volume(summary.bytes_committed)} loaded / "
            f"{format_volume(summary.bytes_emitted)} extracted\n"
        )
    )
    return {"text": text, "blocks": message_blocks}


def build_schema_propagation_message(
    diff_summary: str, context: SchemaUpdateContext
) -> Dict:
    """Build the Block Kit message announcing a propagated schema change."""
    header = "The schema of '{}' has changed.".format(
        create_link(context.connection.name, context.connection.url)
    )
    return {
        "text": header,
        "blocks": [
            blocks.create_section_block(header),
            blocks.create_fields_block(
                [
                    "*Workspace*",
                    "*Source*",
                    create_link(context.workspace.name, context.workspace.url),
                    create_link(context.source.name, context.source.url),
                ]
            ),
            blocks.create_divider_block(),
            blocks.create_section_block(diff_summary or NO_SCHEMA_CHANGES),
        ],
    }


class SlackWebhookChannel(NotificationChannel):
    """Slack notification channel.

    Posts one message per notification to a Slack incoming webhook. Job
    results and schema changes are sent as Block Kit messages; the other
    notifications are sent as plain text. Breaking-change announcements go
    to many recipients at once and are not sent over Slack.
    """

    declaration = create_capability_declaration(
        "slack",
        NotificationCapability.JOB_FAILURE,
        NotificationCapability.JOB_SUCCESS,
        NotificationCapability.CONNECTION_DISABLED,
        NotificationCapability.CONNECTION_DISABLE_WARNING,
        NotificationCapability.SCHEMA_PROPAGATED,
        NotificationCapability.TEST,
    )

    def __init__(
        self,
        webhook_url: str,
        timeout: Optional[int] = None,
        webhook_host: str = "hooks.slack.com",
        max_error_length: Optional[int] = None,
    ):
        """Initialize Slack webhook channel.

        Args:
            webhook_url: Incoming webhook URL; empty disables the channel
            timeout: Request timeout in seconds
            webhook_host: Host that identifies a genuine Slack webhook
            max_error_length: Truncate failure reasons to this many characters
        """
        self.webhook_url = webhook_url or ""
        self.timeout = timeout
        self.webhook_host = webhook_host
        self.max_error_length = max_error_length

    @property
    def notification_type(self) -> str:
        """``slack`` for genuine Slack webhooks, ``N/A`` for anything else."""
        if self.webhook_host and self.webhook_host in self.webhook_url:
            return "slack"
        return "N/A"

    def notify_job_failure(
        self, summary: EventSummary, receiver_email: Optional[str] = None
    ) -> bool:
        return self._send(
            lambda: build_job_completed_message(
                summary,
                render_template("job_failure", **job_values(summary)),
                self.max_error_length,
            )
        )

    def notify_job_success(
        self, summary: EventSummary, receiver_email: Optional[str] = None
    ) -> bool:
        return self._send(
            lambda: build_job_completed_message(
                summary,
                render_template("job_success", **job_values(summary)),
                self.max_error_length,
            )
        )

    def notify_connection_disabled(self, context: ConnectionEventContext) -> bool:
        return self._send(
            lambda: {
                "text": render_template(
                    "connection_disabled", **connection_values(context)
                )
            }
        )

    def notify_connection_disable_warning(
        self, context: ConnectionEventContext
    ) -> bool:
        return self._send(
            lambda: {
                "text": render_template(
                    "connection_disable_warning", **connection_values(context)
                )
            }
        )

    def notify_schema_propagated(
        self, diff_summary: str, context: SchemaUpdateContext
    ) -> bool:
        return self._send(
            lambda: build_schema_propagation_message(diff_summary, context)
        )

    def notify_breaking_change_warning(self, context: BreakingChangeContext) -> bool:
        raise UnsupportedNotificationError(
            self.channel_kind, "breaking change warning"
        )

    def notify_breaking_change_syncs_disabled(
        self, context: BreakingChangeContext
    ) -> bool:
        raise UnsupportedNotificationError(
            self.channel_kind, "breaking change syncs disabled notification"
        )

    def notify_test(self, message: str) -> bool:
        return self._send(lambda: {"text": message})

    def _send(self, render: Callable[[], Dict]) -> bool:
        """Render a message and post it once.

        Args:
            render: Builds the message payload; only called when a webhook is set

        Returns:
            bool: False when no webhook is configured, True when Slack accepted it

        Raises:
            NotificationDeliveryError: On a rendering failure, a non-2xx
                response or a transport failure
        """
        if not self.webhook_url:
            logger.info("slack_notification_skipped", reason="empty_webhook")
            return False

        try:
            payload = render()
        except SlackObjectFormationError as e:
            raise NotificationDeliveryError(
                f"Failed to render Slack message: {e}",
                error_code="RENDER_FAILED",
            ) from e

        if not blocks.validate_blocks(payload.get("blocks", [])):
            raise NotificationDeliveryError(
                "Invalid Slack message blocks", error_code="RENDER_FAILED"
            )

        try:
            response = webhook.post_message(
                self.webhook_url, payload, timeout=self.timeout
            )
        except (URLError, OSError) as e:
            raise NotificationDeliveryError(
                f"Failed to reach Slack webhook: {e}",
                error_code="CONNECTION_ERROR",
            ) from e

        if not 200 <= response.status_code < 300:
            logger.error(
                "slack_notification_failed",
                status_code=response.status_code,
                body=response.body,
            )
            raise NotificationDeliveryError(
                f"Failed to deliver notification ({response.status_code}): "
                f"{response.body}",
                status_code=response.status_code,
                body=response.body,
            )

        logger.info("slack_notification_delivered", status_code=response.status_code)
        return True
