"""Analytics metadata attached to notification tracking events."""

from typing import Any, Dict
from uuid import UUID

from infrastructure.notifications.models import DispatchReport
from modules.jobs.models import ConnectorDefinition, Job


def job_metadata(job: Job) -> Dict[str, Any]:
    metadata: Dict[str, Any] = {
        "job_type": job.config_type.value,
        "job_id": str(job.id),
    }
    if job.attempt_count > 0:
        metadata["attempt_id"] = job.attempt_count - 1
    return metadata


def _definition_metadata(prefix: str, definition: ConnectorDefinition) -> Dict[str, Any]:
    return {
        prefix: definition.name,
        f"{prefix}_definition_id": str(definition.definition_id),
        f"{prefix}_docker_repository": definition.docker_repository,
        f"{prefix}_version": definition.docker_image_tag,
    }


def source_definition_metadata(definition: ConnectorDefinition) -> Dict[str, Any]:
    return _definition_metadata("connector_source", definition)


def destination_definition_metadata(
    definition: ConnectorDefinition,
) -> Dict[str, Any]:
    return _definition_metadata("connector_destination", definition)


def notification_metadata(
    connection_id: UUID, report: DispatchReport
) -> Dict[str, Any]:
    """Which channels fired for a connection.

    ``notification_type`` names the last channel that fired: ``slack`` only
    for webhooks pointing at Slack, ``email`` for the templated email
    channel, ``N/A`` for anything else.
    """
    fired = [a.notification_type or "N/A" for a in report.fired]
    metadata: Dict[str, Any] = {
        "connection_id": str(connection_id),
        "notification_types": fired,
    }
    if fired:
        metadata["notification_type"] = fired[-1]
    return metadata
