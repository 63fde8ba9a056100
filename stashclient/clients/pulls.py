"""Pull requests resource client."""

from typing import TYPE_CHECKING, Any

from stashclient.clients.repos import parse_repository, repository_path
from stashclient.decoding import decode_body
from stashclient.exceptions import UnexpectedStatusError
from stashclient.pagination import collect_list, page_fetcher
from stashclient.types.pulls import (
    Comment,
    MergeError,
    MergeResult,
    MergeVeto,
    PullRequest,
    Ref,
    User,
)

if TYPE_CHECKING:
    from stashclient.transport import HTTPTransport


def _parse_user(data: dict[str, Any]) -> User:
    return User(
        name=data["name"],
        email=data.get("emailAddress"),
        display_name=data.get("displayName"),
    )


def _parse_ref(data: dict[str, Any]) -> Ref:
    repository = data.get("repository")
    return Ref(
        id=data["id"],
        display_id=data.get("displayId"),
        latest_commit=data.get("latestCommit"),
        repository=parse_repository(repository) if repository else None,
    )


def parse_pull_request(data: dict[str, Any]) -> PullRequest:
    """Parse pull request data from API response."""
    author = data.get("author")
    from_ref = data.get("fromRef")
    to_ref = data.get("toRef")
    return PullRequest(
        id=data["id"],
        version=data.get("version", 0),
        state=data.get("state", "OPEN"),
        open=data.get("open", False),
        closed=data.get("closed", False),
        title=data["title"],
        description=data.get("description"),
        from_ref=_parse_ref(from_ref) if from_ref else None,
        to_ref=_parse_ref(to_ref) if to_ref else None,
        created_date=data.get("createdDate", 0),
        updated_date=data.get("updatedDate", 0),
        author=_parse_user(author["user"]) if author else None,
        reviewers=[_parse_user(r["user"]) for r in data.get("reviewers") or []],
    )


def _parse_merge_result(data: dict[str, Any]) -> MergeResult:
    errors = [
        MergeError(
            message=item.get("message") or "",
            exception_name=item.get("exceptionName"),
            conflicted=item.get("conflicted", False),
            vetoes=[
                MergeVeto(
                    summary_message=veto.get("summaryMessage", ""),
                    detailed_message=veto.get("detailedMessage", ""),
                )
                for veto in item.get("vetoes") or []
            ],
        )
        for item in data.get("errors") or []
    ]
    return MergeResult(
        pull_request=parse_pull_request(data) if "id" in data else None,
        errors=errors,
    )


def _parse_comment(data: dict[str, Any]) -> Comment:
    return Comment(id=data["id"], text=data.get("text"), version=data.get("version"))


def _ref_payload(ref_id: str, project_key: str, slug: str) -> dict[str, Any]:
    return {
        "id": ref_id,
        "repository": {"slug": slug, "project": {"key": project_key}},
    }


def _reviewers_payload(reviewers: list[str] | None) -> list[dict[str, Any]]:
    return [{"user": {"name": name}} for name in reviewers or []]


class PullsClient:
    """Client for pull request operations."""

    def __init__(self, transport: "HTTPTransport") -> None:
        """
        Initialize the pulls client.

        Args:
            transport: HTTP transport for making requests
        """
        self.transport = transport

    @staticmethod
    def _path(project_key: str, slug: str) -> str:
        return f"{repository_path(project_key, slug)}/pull-requests"

    def get(self, project_key: str, slug: str, pr_id: int | str) -> PullRequest:
        """
        Get pull request information.

        Raises:
            APIError: With status 404 if the pull request does not exist
        """
        body = self.transport.request(
            "GET", f"{self._path(project_key, slug)}/{pr_id}", None, 200
        )
        return decode_body(parse_pull_request, body)

    def create(
        self,
        project_key: str,
        slug: str,
        title: str,
        description: str,
        from_ref: str,
        to_ref: str,
        reviewers: list[str] | None = None,
    ) -> PullRequest:
        """
        Create a pull request between two branches of the same repository.

        Args:
            project_key: Project key
            slug: Repository slug
            title: Pull request title
            description: Pull request description
            from_ref: Source ref (e.g., "refs/heads/feature")
            to_ref: Target ref (e.g., "refs/heads/master")
            reviewers: User names to add as reviewers

        Raises:
            APIError: With status 409 if an equivalent pull request is open
        """
        payload = {
            "title": title,
            "description": description,
            "fromRef": _ref_payload(from_ref, project_key, slug),
            "toRef": _ref_payload(to_ref, project_key, slug),
            "reviewers": _reviewers_payload(reviewers),
        }
        body = self.transport.request("POST", self._path(project_key, slug), payload, 201)
        return decode_body(parse_pull_request, body)

    def update(
        self,
        project_key: str,
        slug: str,
        pr_id: int | str,
        version: int,
        title: str | None = None,
        description: str | None = None,
        to_ref: str | None = None,
        reviewers: list[str] | None = None,
    ) -> PullRequest:
        """
        Update a pull request.

        ``version`` must be the pull request's current version; fields left as
        None are not sent.
        """
        payload: dict[str, Any] = {"version": version}
        if title:
            payload["title"] = title
        if description:
            payload["description"] = description
        if to_ref:
            payload["toRef"] = _ref_payload(to_ref, project_key, slug)
        if reviewers:
            payload["reviewers"] = _reviewers_payload(reviewers)

        body = self.transport.request(
            "PUT", f"{self._path(project_key, slug)}/{pr_id}", payload, 200
        )
        return decode_body(parse_pull_request, body)

    def merge(
        self, project_key: str, slug: str, pr_id: int | str, version: int
    ) -> MergeResult:
        """
        Merge a pull request.

        Returns:
            MergeResult; a refused merge (HTTP 409) is returned with its
            errors rather than raised

        Raises:
            StashError: On network failures or any other status
        """
        request = self.transport.build_request(
            "POST",
            f"{self._path(project_key, slug)}/{pr_id}/merge",
            {"version": version},
        )
        response = self.transport.consume(request)

        if response.status_code in (200, 409) and response.body is not None:
            return decode_body(_parse_merge_result, response.body)

        response.raise_for_error()
        raise UnexpectedStatusError(response.status_code)

    def comment(
        self, project_key: str, slug: str, pr_id: int | str, text: str
    ) -> Comment:
        """Add a comment to a pull request."""
        body = self.transport.request(
            "POST",
            f"{self._path(project_key, slug)}/{pr_id}/comments",
            {"text": text},
            201,
        )
        return decode_body(_parse_comment, body)

    def list(
        self,
        project_key: str,
        slug: str,
        state: str = "OPEN",
        max_pages: int | None = None,
    ) -> list[PullRequest]:
        """
        List pull requests in server order.

        Args:
            project_key: Project key
            slug: Repository slug
            state: "OPEN", "MERGED", "DECLINED" or "ALL"
            max_pages: Optional bound on the number of pages fetched
        """
        return collect_list(
            page_fetcher(self.transport, self._path(project_key, slug), {"state": state}),
            parse_pull_request,
            max_pages=max_pages,
        )
