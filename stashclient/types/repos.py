"""Project, repository and ref data models."""

from collections.abc import Mapping
from dataclasses import dataclass, field


@dataclass
class Project:
    """Stash project."""

    id: int
    key: str
    name: str | None = None


@dataclass
class CloneLink:
    """Clone URL of a repository."""

    href: str
    name: str  # "http" or "ssh"


@dataclass
class Repository:
    """Repository information."""

    id: int
    name: str
    slug: str
    project: Project | None
    scm_id: str
    clone_links: list[CloneLink] = field(default_factory=list)

    @property
    def ssh_url(self) -> str:
        """SSH clone URL, or an empty string if the server exposes none."""
        for link in self.clone_links:
            if link.name == "ssh":
                return link.href
        return ""


@dataclass
class Branch:
    """Branch ref."""

    id: str
    display_id: str
    latest_changeset: str
    is_default: bool


@dataclass
class Tag:
    """Tag ref."""

    id: str
    display_id: str
    hash: str


@dataclass
class BranchRestriction:
    """Branch permission entry."""

    id: int
    branch: Branch | None


def find_repository_by_clone_url(
    repositories: Mapping[int, Repository], url: str
) -> Repository | None:
    """Return the repository having ``url`` among its clone links."""
    for repository in repositories.values():
        for link in repository.clone_links:
            if link.href == url:
                return repository
    return None
