"""Plain-text notification templates.

Used for the ``text`` fallback of Slack messages and for the body of
generic webhook payloads. Templates are looked up by name and rendered with
``str.format``.
"""

TEMPLATES = {
    "job_failure": (
        "Your connection {connection_name} from {source_name} to "
        "{destination_name} just failed...\n"
        "This happened with {error_message}\n"
        "\n"
        "You can access its logs here: {connection_url}\n"
        "\n"
        "Job ID: {job_id}\n"
    ),
    "job_success": (
        "Your connection {connection_name} from {source_name} to "
        "{destination_name} succeeded\n"
        "\n"
        "You can access its logs here: {connection_url}\n"
        "\n"
        "Job ID: {job_id}\n"
    ),
    "connection_disabled": (
        "Your connection from {source_connector} to {destination_connector} "
        "was automatically disabled because it failed consecutively or has "
        "been failing for too long.\n"
        "\n"
        "Please address the failing issues to ensure your syncs continue to "
        "run. The most recent attempted {job_description}\n"
        "\n"
        "Workspace ID: {workspace_id}\n"
        "Connection ID: {connection_id}\n"
    ),
    "connection_disable_warning": (
        "Your connection from {source_connector} to {destination_connector} "
        "is scheduled to be automatically disabled because it keeps failing.\n"
        "\n"
        "Please address the failing issues to ensure your syncs continue to "
        "run. The most recent attempted {job_description}\n"
        "\n"
        "Workspace ID: {workspace_id}\n"
        "Connection ID: {connection_id}\n"
    ),
    "schema_propagated": (
        "The schema of '{connection_name}' has changed.\n"
        "\n"
        "Workspace: {workspace_name}\n"
        "Source: {source_name}\n"
        "\n"
        "{summary}"
    ),
}


def render_template(name: str, **values) -> str:
    """Render the template called ``name``.

    Raises:
        ValueError: If no template has that name
    """
    template = TEMPLATES.get(name)
    if template is None:
        raise ValueError(f"Unknown notification template: {name}")
    return template.format(**values)


def job_values(summary) -> dict:
    """Template values shared by the job failure and success messages."""
    return {
        "connection_name": summary.connection.name,
        "connection_url": summary.connection.url,
        "source_name": summary.source.name,
        "destination_name": summary.destination.name,
        "error_message": summary.error_message or "",
        "job_id": summary.job_id,
    }


def connection_values(context) -> dict:
    """Template values for connection auto-disable messages."""
    return {
        "source_connector": context.source_connector,
        "destination_connector": context.destination_connector,
        "job_description": context.job_description,
        "workspace_id": context.workspace_id,
        "connection_id": context.connection_id,
    }
