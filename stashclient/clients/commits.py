"""Commits resource client."""

from typing import TYPE_CHECKING, Any
from urllib.parse import urlencode

from stashclient.clients.repos import repository_path
from stashclient.decoding import decode_body
from stashclient.types.commits import Commit

if TYPE_CHECKING:
    from stashclient.transport import HTTPTransport


def _parse_commit(data: dict[str, Any]) -> Commit:
    author = data.get("author") or {}
    attributes = data.get("attributes") or {}
    return Commit(
        id=data["id"],
        display_id=data.get("displayId", data["id"][:11]),
        author_name=author.get("name", ""),
        author_email=author.get("emailAddress"),
        author_timestamp=data.get("authorTimestamp", 0),
        jira_keys=list(attributes.get("jira-key") or []),
    )


def _parse_commits(data: dict[str, Any]) -> list[Commit]:
    return [_parse_commit(item) for item in data.get("values") or []]


class CommitsClient:
    """Client for commit operations."""

    def __init__(self, transport: "HTTPTransport") -> None:
        self.transport = transport

    def get(self, project_key: str, slug: str, commit_hash: str) -> Commit:
        """Get a single commit."""
        body = self.transport.request(
            "GET",
            f"{repository_path(project_key, slug)}/commits/{commit_hash}",
            None,
            200,
        )
        return decode_body(_parse_commit, body)

    def between(
        self,
        project_key: str,
        slug: str,
        since: str,
        until: str,
        limit: int = 1000,
    ) -> list[Commit]:
        """
        List the commits reachable from ``until`` but not from ``since``.

        Args:
            project_key: Project key
            slug: Repository slug
            since: Exclusive lower bound commit or ref
            until: Inclusive upper bound commit or ref
            limit: Maximum number of commits returned by the server
        """
        query = urlencode({"since": since, "until": until, "limit": limit})
        body = self.transport.request(
            "GET",
            f"{repository_path(project_key, slug)}/commits?{query}",
            None,
            200,
        )
        return decode_body(_parse_commits, body)
