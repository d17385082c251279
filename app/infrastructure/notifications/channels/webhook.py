"""Generic webhook channel for custom and legacy endpoints."""

from typing import Optional

import requests
import structlog

from infrastructure.notifications.capabilities import (
    NotificationCapability,
    create_capability_declaration,
)
from infrastructure.notifications.channels.base import NotificationChannel
from infrastructure.notifications.errors import (
    NotificationDeliveryError,
    UnsupportedNotificationError,
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
from integrations.webhook import post_json

logger = structlog.get_logger()


class GenericWebhookChannel(NotificationChannel):
    """Webhook channel posting ``{"text": ...}`` to any HTTP endpoint."""

    declaration = create_capability_declaration(
        "webhook",
        NotificationCapability.JOB_FAILURE,
        NotificationCapability.JOB_SUCCESS,
        NotificationCapability.CONNECTION_DISABLED,
        NotificationCapability.CONNECTION_DISABLE_WARNING,
        NotificationCapability.SCHEMA_PROPAGATED,
        NotificationCapability.TEST,
    )

    def __init__(self, url: str, timeout: Optional[int] = None):
        self.url = url or ""
        self.timeout = timeout

    @property
    def notification_type(self) -> str:
        return "N/A"

    def notify_job_failure(
        self, summary: EventSummary, receiver_email: Optional[str] = None
    ) -> bool:
        return self._post(render_template("job_failure", **job_values(summary)))

    def notify_job_success(
        self, summary: EventSummary, receiver_email: Optional[str] = None
    ) -> bool:
        return self._post(render_template("job_success", **job_values(summary)))

    def notify_connection_disabled(self, context: ConnectionEventContext) -> bool:
        return self._post(
            render_template("connection_disabled", **connection_values(context))
        )

    def notify_connection_disable_warning(
        self, context: ConnectionEventContext
    ) -> bool:
        return self._post(
            render_template("connection_disable_warning", **connection_values(context))
        )

    def notify_schema_propagated(
        self, diff_summary: str, context: SchemaUpdateContext
    ) -> bool:
        return self._post(
            render_template(
                "schema_propagated",
                connection_name=context.connection.name,
                workspace_name=context.workspace.name,
                source_name=context.source.name,
                summary=diff_summary,
            )
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
        return self._post(message)

    def _post(self, text: str) -> bool:
        if not self.url:
            logger.info("webhook_notification_skipped", reason="empty_url")
            return False

        try:
            response = post_json(self.url, {"text": text}, timeout=self.timeout)
        except requests.RequestException as e:
            raise NotificationDeliveryError(
                f"Failed to reach webhook: {e}", error_code="CONNECTION_ERROR"
            ) from e

        if not 200 <= response.status_code < 300:
            logger.error(
                "webhook_notification_failed",
                status_code=response.status_code,
                body=response.text,
            )
            raise NotificationDeliveryError(
                f"Failed to deliver notification ({response.status_code}): "
                f"{response.text}",
                status_code=response.status_code,
                body=response.text,
            )

        logger.info("webhook_notification_delivered", status_code=response.status_code)
        return True
