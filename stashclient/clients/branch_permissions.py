"""Branch permissions resource client."""

from typing import TYPE_CHECKING, Any

from stashclient.clients.repos import parse_branch
from stashclient.decoding import decode_body
from stashclient.types.repos import BranchRestriction

if TYPE_CHECKING:
    from stashclient.transport import HTTPTransport


def _parse_restriction(data: dict[str, Any]) -> BranchRestriction:
    branch = data.get("branch")
    return BranchRestriction(
        id=data["id"],
        branch=parse_branch(branch) if branch else None,
    )


def _parse_restrictions(data: dict[str, Any]) -> list[BranchRestriction]:
    return [_parse_restriction(item) for item in data.get("values") or []]


class BranchPermissionsClient:
    """Client for branch restriction operations."""

    def __init__(self, transport: "HTTPTransport") -> None:
        self.transport = transport

    @staticmethod
    def _path(project_key: str, slug: str) -> str:
        return f"/rest/branch-permissions/1.0/projects/{project_key}/repos/{slug}/restricted"

    def create(
        self,
        project_key: str,
        slug: str,
        branch: str,
        users: list[str],
        groups: list[str] | None = None,
    ) -> BranchRestriction:
        """
        Restrict writes to ``branch`` to the given users and groups.

        Args:
            project_key: Project key
            slug: Repository slug
            branch: Branch name (e.g., "master")
            users: User names allowed to push
            groups: Group names allowed to push
        """
        payload = {
            "type": "BRANCH",
            "value": branch,
            "users": users,
            "groups": groups or [],
        }
        body = self.transport.request("POST", self._path(project_key, slug), payload, 200)
        return decode_body(_parse_restriction, body)

    def delete(self, project_key: str, slug: str, restriction_id: int) -> None:
        """Delete a branch restriction."""
        self.transport.request(
            "DELETE",
            f"{self._path(project_key, slug)}/{restriction_id}",
            None,
            204,
        )

    def list(self, project_key: str, slug: str) -> list[BranchRestriction]:
        """List branch restrictions of a repository."""
        body = self.transport.request("GET", self._path(project_key, slug), None, 200)
        return decode_body(_parse_restrictions, body)
