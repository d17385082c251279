"""Web application URLs for notification links."""

from uuid import UUID


class WebUrlHelper:
    """Builds links into the web application.

    Example:
        urls = WebUrlHelper("https://app.example.com/")
        urls.connection_url(workspace_id, connection_id)
        # https://app.example.com/workspaces/<workspace>/connections/<connection>
    """

    def __init__(self, base_url: str):
        self.base_url = base_url.rstrip("/")

    def workspace_url(self, workspace_id: UUID) -> str:
        return f"{self.base_url}/workspaces/{workspace_id}"

    def connection_url(self, workspace_id: UUID, connection_id: UUID) -> str:
        return f"{self.workspace_url(workspace_id)}/connections/{connection_id}"

    def source_url(self, workspace_id: UUID, source_id: UUID) -> str:
        return f"{self.workspace_url(workspace_id)}/source/{source_id}"

    def destination_url(self, workspace_id: UUID, destination_id: UUID) -> str:
        return f"{self.workspace_url(workspace_id)}/destination/{destination_id}"
