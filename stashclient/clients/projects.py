"""Projects resource client."""

from typing import TYPE_CHECKING

from stashclient.clients.repos import parse_project
from stashclient.decoding import decode_body
from stashclient.types.repos import Project

if TYPE_CHECKING:
    from stashclient.transport import HTTPTransport


class ProjectsClient:
    """Client for project operations."""

    def __init__(self, transport: "HTTPTransport") -> None:
        self.transport = transport

    def create(self, project_key: str, name: str | None = None) -> Project:
        """
        Create a project.

        Args:
            project_key: Upper-case project key (e.g., "OPS")
            name: Display name (default: the key)
        """
        body = self.transport.request(
            "POST",
            "/rest/api/1.0/projects",
            {"key": project_key, "name": name or project_key},
            201,
        )
        return decode_body(parse_project, body)
