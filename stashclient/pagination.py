"""
Cursor-based pagination over Stash paged collections.

Paged endpoints answer with ``{"values": [...], "isLastPage": bool,
"nextPageStart": int, "start": int, "size": int, "limit": int}``. Walking
always follows the server's ``nextPageStart``; offsets are never computed
locally because servers may skip or reorder them.
"""

from collections.abc import Callable, Hashable, Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, TypeVar
from urllib.parse import urlencode

from stashclient.decoding import decode_body
from stashclient.exceptions import DecodingError, PaginationLimitError

if TYPE_CHECKING:
    from stashclient.transport import HTTPTransport

T = TypeVar("T")
K = TypeVar("K", bound=Hashable)

PAGE_LIMIT = 25


@dataclass
class Page:
    """One page of a paged collection."""

    values: list[Any] = field(default_factory=list)
    is_last_page: bool = True
    next_page_start: int | None = None
    start: int = 0
    size: int = 0
    limit: int = PAGE_LIMIT

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Page":
        values = data.get("values") or []
        if not isinstance(values, list):
            raise TypeError("'values' is not a list")
        next_page_start = data.get("nextPageStart")
        if next_page_start is not None and (
            isinstance(next_page_start, bool) or not isinstance(next_page_start, int)
        ):
            raise TypeError(f"'nextPageStart' is not an integer: {next_page_start!r}")
        return cls(
            values=values,
            is_last_page=bool(data.get("isLastPage", True)),
            next_page_start=next_page_start,
            start=data.get("start", 0),
            size=data.get("size", len(values)),
            limit=data.get("limit", PAGE_LIMIT),
        )


def iter_pages(
    fetch_page: Callable[[int], Page],
    start: int = 0,
    max_pages: int | None = None,
) -> Iterator[Page]:
    """
    Yield pages until the server reports the last one.

    Args:
        fetch_page: Callable returning the page that begins at an offset
        start: Offset of the first page
        max_pages: Optional bound on the number of pages; None is unbounded

    Raises:
        PaginationLimitError: If more than ``max_pages`` pages would be fetched
        DecodingError: If a non-last page carries no ``nextPageStart``
    """
    fetched = 0
    while True:
        if max_pages is not None and fetched >= max_pages:
            raise PaginationLimitError(
                f"paged listing did not end after {max_pages} pages"
            )

        page = fetch_page(start)
        fetched += 1
        yield page

        if page.is_last_page:
            return

        if page.next_page_start is None:
            raise DecodingError("page is not the last one but has no nextPageStart")
        start = page.next_page_start


def collect_keyed(
    fetch_page: Callable[[int], Page],
    parse: Callable[[Any], T],
    key: Callable[[T], K],
    max_pages: int | None = None,
) -> dict[K, T]:
    """Merge every page into a dict; later pages win on duplicate keys."""
    result: dict[K, T] = {}
    for page in iter_pages(fetch_page, max_pages=max_pages):
        for raw in page.values:
            item = parse(raw)
            result[key(item)] = item
    return result


def collect_list(
    fetch_page: Callable[[int], Page],
    parse: Callable[[Any], T],
    max_pages: int | None = None,
) -> list[T]:
    """Concatenate every page in server order."""
    result: list[T] = []
    for page in iter_pages(fetch_page, max_pages=max_pages):
        result.extend(parse(raw) for raw in page.values)
    return result


def page_fetcher(
    transport: "HTTPTransport",
    path: str,
    params: dict[str, Any] | None = None,
    limit: int = PAGE_LIMIT,
) -> Callable[[int], Page]:
    """
    Build a ``fetch_page`` callable for a paged GET endpoint.

    Args:
        transport: HTTP transport for making requests
        path: Endpoint path without query string
        params: Extra query parameters (e.g., ``{"state": "OPEN"}``)
        limit: Page size requested from the server
    """

    def fetch(start: int) -> Page:
        query = dict(params or {})
        query["start"] = start
        query["limit"] = limit
        body = transport.request("GET", f"{path}?{urlencode(query)}", None, 200)
        return decode_body(Page.from_dict, body)

    return fetch
