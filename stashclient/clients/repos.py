"""Repositories resource client."""

from typing import TYPE_CHECKING, Any
from urllib.parse import quote

from stashclient.decoding import decode_body
from stashclient.pagination import collect_keyed, page_fetcher
from stashclient.types.repos import Branch, CloneLink, Project, Repository, Tag

if TYPE_CHECKING:
    from stashclient.transport import HTTPTransport


def parse_project(data: dict[str, Any]) -> Project:
    return Project(id=data["id"], key=data["key"], name=data.get("name"))


def parse_repository(data: dict[str, Any]) -> Repository:
    """Parse repository data from API response."""
    project = data.get("project")
    links = data.get("links") or {}
    return Repository(
        id=data["id"],
        name=data["name"],
        slug=data["slug"],
        project=parse_project(project) if project else None,
        scm_id=data.get("scmId", "git"),
        clone_links=[
            CloneLink(href=link["href"], name=link.get("name", ""))
            for link in links.get("clone", [])
        ],
    )


def parse_branch(data: dict[str, Any]) -> Branch:
    return Branch(
        id=data["id"],
        display_id=data["displayId"],
        latest_changeset=data.get("latestChangeset") or data.get("latestCommit", ""),
        is_default=data.get("isDefault", False),
    )


def parse_tag(data: dict[str, Any]) -> Tag:
    return Tag(
        id=data["id"],
        display_id=data["displayId"],
        hash=data.get("hash") or data.get("latestCommit", ""),
    )


def repository_path(project_key: str, slug: str) -> str:
    return f"/rest/api/1.0/projects/{project_key}/repos/{slug}"


class ReposClient:
    """Client for repository-related operations."""

    def __init__(self, transport: "HTTPTransport") -> None:
        """
        Initialize the repos client.

        Args:
            transport: HTTP transport for making requests
        """
        self.transport = transport

    def create(self, project_key: str, slug: str) -> Repository:
        """
        Create a git repository in a project.

        Raises:
            APIError: With status 409 if the repository already exists
        """
        body = self.transport.request(
            "POST",
            f"/rest/api/1.0/projects/{project_key}/repos",
            {"name": slug, "scmId": "git"},
            201,
        )
        return decode_body(parse_repository, body)

    def get(self, project_key: str, slug: str) -> Repository:
        """
        Get repository information.

        Raises:
            APIError: With status 404 if the repository does not exist
        """
        body = self.transport.request("GET", repository_path(project_key, slug), None, 200)
        return decode_body(parse_repository, body)

    def rename(self, project_key: str, slug: str, new_name: str) -> None:
        """Rename a repository."""
        self.transport.request(
            "PUT", repository_path(project_key, slug), {"name": new_name}, 201
        )

    def move(self, project_key: str, slug: str, new_project_key: str) -> None:
        """Move a repository to another project."""
        self.transport.request(
            "PUT",
            repository_path(project_key, slug),
            {"project": {"key": new_project_key}},
            201,
        )

    def remove(self, project_key: str, slug: str) -> None:
        """Schedule a repository for deletion."""
        self.transport.request("DELETE", repository_path(project_key, slug), None, 202, 204)

    def list_all(self, max_pages: int | None = None) -> dict[int, Repository]:
        """
        List every repository visible to the client.

        Returns:
            Repositories keyed by numeric id
        """
        return collect_keyed(
            page_fetcher(self.transport, "/rest/api/1.0/repos"),
            parse_repository,
            lambda repo: repo.id,
            max_pages=max_pages,
        )

    def list_project(
        self, project_key: str, max_pages: int | None = None
    ) -> dict[int, Repository]:
        """List the repositories of one project, keyed by numeric id."""
        return collect_keyed(
            page_fetcher(self.transport, f"/rest/api/1.0/projects/{project_key}/repos"),
            parse_repository,
            lambda repo: repo.id,
            max_pages=max_pages,
        )

    def branches(
        self, project_key: str, slug: str, max_pages: int | None = None
    ) -> dict[str, Branch]:
        """List branches keyed by display name."""
        return collect_keyed(
            page_fetcher(self.transport, f"{repository_path(project_key, slug)}/branches"),
            parse_branch,
            lambda branch: branch.display_id,
            max_pages=max_pages,
        )

    def tags(
        self, project_key: str, slug: str, max_pages: int | None = None
    ) -> dict[str, Tag]:
        """List tags keyed by display name."""
        return collect_keyed(
            page_fetcher(self.transport, f"{repository_path(project_key, slug)}/tags"),
            parse_tag,
            lambda tag: tag.display_id,
            max_pages=max_pages,
        )

    def delete_branch(self, project_key: str, slug: str, branch: str) -> None:
        """Delete ``refs/heads/<branch>``."""
        self.transport.request(
            "DELETE",
            f"/rest/branch-utils/1.0/projects/{project_key}/repos/{slug}/branches",
            {"name": f"refs/heads/{branch}", "dryRun": False},
            204,
        )

    def raw_file(self, project_key: str, slug: str, file_path: str, ref: str) -> bytes:
        """
        Fetch the raw content of a file at a ref.

        Args:
            project_key: Project key
            slug: Repository slug
            file_path: Path inside the repository (e.g., "docs/README.md")
            ref: Branch, tag or commit to read from
        """
        path = "/projects/{}/repos/{}/browse/{}?at={}&raw".format(
            project_key.lower(),
            slug.lower(),
            quote(file_path.lstrip("/")),
            quote(ref, safe=""),
        )
        return self.transport.request("GET", path, None, 200)
