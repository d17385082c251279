"""Email channel implementation using GC Notify templates."""

from typing import Dict, List, Optional

import requests
import structlog

from infrastructure.configuration.integrations import NotifySettings
from infrastructure.notifications.capabilities import (
    NotificationCapability,
    create_capability_declaration,
)
from infrastructure.notifications.channels.base import NotificationChannel
from infrastructure.notifications.errors import NotificationDeliveryError
from infrastructure.notifications.formatting import format_duration, format_volume
from infrastructure.notifications.models import (
    BreakingChangeContext,
    ConnectionEventContext,
    EventSummary,
    SchemaUpdateContext,
)
from integrations.notify import client as notify_client

logger = structlog.get_logger()


def job_personalisation(summary: EventSummary) -> Dict:
    """Template values for the job failure and success emails."""
    duration = ""
    if summary.duration_available:
        duration = format_duration(summary.started_at, summary.finished_at)
    return {
        "workspace_name": summary.workspace.name,
        "connection_name": summary.connection.name,
        "connection_url": summary.connection.url,
        "source_name": summary.source.name,
        "destination_name": summary.destination.name,
        "job_id": str(summary.job_id),
        "duration": duration,
        "error_message": summary.error_message or "",
        "records_loaded": summary.records_committed,
        "records_extracted": summary.records_emitted,
        "volume_loaded": format_volume(summary.bytes_committed),
        "volume_extracted": format_volume(summary.bytes_emitted),
    }


class TemplatedEmailChannel(NotificationChannel):
    """GC Notify email notification channel.

    Rendering and delivery are delegated to GC Notify. Each notification
    kind maps to a Notify template; a blank template ID turns that kind
    into a no-op. Breaking-change announcements are sent as one bulk job
    to every affected recipient.
    """

    declaration = create_capability_declaration(
        "email",
        NotificationCapability.JOB_FAILURE,
        NotificationCapability.JOB_SUCCESS,
        NotificationCapability.CONNECTION_DISABLED,
        NotificationCapability.CONNECTION_DISABLE_WARNING,
        NotificationCapability.SCHEMA_PROPAGATED,
        NotificationCapability.BREAKING_CHANGE_WARNING,
        NotificationCapability.BREAKING_CHANGE_SYNCS_DISABLED,
    )

    def __init__(self, settings: NotifySettings, receiver_email: Optional[str] = None):
        """Initialize the email channel.

        Args:
            settings: GC Notify configuration (API URL and template IDs)
            receiver_email: Default recipient, usually the workspace email
        """
        self.settings = settings
        self.receiver_email = receiver_email

    @property
    def notification_type(self) -> str:
        return "email"

    def notify_job_failure(
        self, summary: EventSummary, receiver_email: Optional[str] = None
    ) -> bool:
        return self._send(
            self.settings.NOTIFY_JOB_FAILURE_TEMPLATE_ID,
            receiver_email,
            job_personalisation(summary),
        )

    def notify_job_success(
        self, summary: EventSummary, receiver_email: Optional[str] = None
    ) -> bool:
        return self._send(
            self.settings.NOTIFY_JOB_SUCCESS_TEMPLATE_ID,
            receiver_email,
            job_personalisation(summary),
        )

    def notify_connection_disabled(self, context: ConnectionEventContext) -> bool:
        return self._send(
            self.settings.NOTIFY_CONNECTION_DISABLED_TEMPLATE_ID,
            context.receiver_email,
            self._connection_personalisation(context),
        )

    def notify_connection_disable_warning(
        self, context: ConnectionEventContext
    ) -> bool:
        return self._send(
            self.settings.NOTIFY_CONNECTION_DISABLE_WARNING_TEMPLATE_ID,
            context.receiver_email,
            self._connection_personalisation(context),
        )

    def notify_schema_propagated(
        self, diff_summary: str, context: SchemaUpdateContext
    ) -> bool:
        return self._send(
            self.settings.NOTIFY_SCHEMA_PROPAGATED_TEMPLATE_ID,
            context.receiver_email,
            {
                "workspace_name": context.workspace.name,
                "connection_name": context.connection.name,
                "connection_url": context.connection.url,
                "source_name": context.source.name,
                "is_breaking_change": "yes" if context.is_breaking_change else "no",
                "changes": diff_summary,
            },
        )

    def notify_breaking_change_warning(self, context: BreakingChangeContext) -> bool:
        return self._send_bulk(
            "Breaking change warning",
            self.settings.NOTIFY_BREAKING_CHANGE_WARNING_TEMPLATE_ID,
            context,
        )

    def notify_breaking_change_syncs_disabled(
        self, context: BreakingChangeContext
    ) -> bool:
        return self._send_bulk(
            "Breaking change syncs disabled",
            self.settings.NOTIFY_BREAKING_CHANGE_SYNCS_DISABLED_TEMPLATE_ID,
            context,
        )

    @staticmethod
    def _connection_personalisation(context: ConnectionEventContext) -> Dict:
        return {
            "source_connector": context.source_connector,
            "destination_connector": context.destination_connector,
            "job_description": context.job_description,
            "workspace_id": str(context.workspace_id),
            "connection_id": str(context.connection_id),
        }

    def _send(
        self, template_id: str, receiver_email: Optional[str], personalisation: Dict
    ) -> bool:
        receiver = receiver_email or self.receiver_email
        if not self._configured(template_id) or not receiver:
            logger.info(
                "email_notification_skipped",
                template_id=template_id,
                has_receiver=bool(receiver),
            )
            return False

        response = self._call(
            notify_client.send_email, receiver, template_id, personalisation
        )
        return self._check(response, template_id)

    def _send_bulk(
        self, name: str, template_id: str, context: BreakingChangeContext
    ) -> bool:
        if not self._configured(template_id):
            logger.info("email_notification_skipped", template_id=template_id)
            return False

        recipients: List[str] = [str(email) for email in context.receiver_emails]
        personalisation = {
            "connector_name": context.connector_name,
            "connector_type": context.actor_type.value,
            "connector_version": context.version,
            "breaking_change_message": context.message,
            "upgrade_deadline": context.upgrade_deadline,
            "migration_documentation_url": context.migration_documentation_url or "",
        }
        response = self._call(
            notify_client.send_bulk_email,
            f"{name}: {context.connector_name}",
            template_id,
            recipients,
            personalisation,
        )
        return self._check(response, template_id)

    def _configured(self, template_id: str) -> bool:
        return bool(self.settings.NOTIFY_API_URL and template_id)

    @staticmethod
    def _call(send, *args):
        try:
            return send(*args)
        except requests.RequestException as e:
            raise NotificationDeliveryError(
                f"Failed to reach GC Notify: {e}", error_code="CONNECTION_ERROR"
            ) from e
        except ValueError as e:
            # Missing Notify credentials
            raise NotificationDeliveryError(
                str(e), error_code="NOTIFY_CREDENTIALS_MISSING"
            ) from e

    @staticmethod
    def _check(response, template_id: str) -> bool:
        # A successful response has a status code of 201
        if response.status_code != 201:
            logger.error(
                "email_notification_failed",
                template_id=template_id,
                status_code=response.status_code,
                body=response.text,
            )
            raise NotificationDeliveryError(
                f"GC Notify rejected the email ({response.status_code}): "
                f"{response.text}",
                status_code=response.status_code,
                body=response.text,
            )
        logger.info("email_notification_delivered", template_id=template_id)
        return True
