"""Pull request-related data models."""

from dataclasses import dataclass, field
from datetime import datetime, timezone

from stashclient.types.repos import Repository


@dataclass
class User:
    """Stash user as embedded in pull requests."""

    name: str
    email: str | None = None
    display_name: str | None = None


@dataclass
class Ref:
    """Source or target ref of a pull request."""

    id: str
    display_id: str | None
    latest_commit: str | None
    repository: Repository | None


@dataclass
class PullRequest:
    """Pull request information."""

    id: int
    version: int
    state: str  # "OPEN", "MERGED", "DECLINED"
    open: bool
    closed: bool
    title: str
    description: str | None
    from_ref: Ref | None
    to_ref: Ref | None
    created_date: int  # milliseconds since the epoch
    updated_date: int
    author: User | None = None
    reviewers: list[User] = field(default_factory=list)

    @property
    def created_at(self) -> datetime:
        return datetime.fromtimestamp(self.created_date / 1000, tz=timezone.utc)

    @property
    def updated_at(self) -> datetime:
        return datetime.fromtimestamp(self.updated_date / 1000, tz=timezone.utc)


@dataclass
class MergeVeto:
    """Reason a merge check refused the merge."""

    summary_message: str
    detailed_message: str


@dataclass
class MergeError:
    """Error entry of a refused merge."""

    message: str
    exception_name: str | None
    conflicted: bool
    vetoes: list[MergeVeto] = field(default_factory=list)


@dataclass
class MergeResult:
    """Result of merging a pull request.

    The server answers 409 with the pull request and a list of errors when
    the merge is refused; that is a valid outcome, not an exception.
    """

    pull_request: PullRequest | None
    errors: list[MergeError] = field(default_factory=list)

    @property
    def merged(self) -> bool:
        return not self.errors

    @property
    def conflicted(self) -> bool:
        return any(error.conflicted for error in self.errors)


@dataclass
class Comment:
    """Pull request comment."""

    id: int
    text: str | None = None
    version: int | None = None
