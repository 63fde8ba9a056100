"""
Property-based tests for cursor pagination.

Feature: stashclient
"""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from stashclient.exceptions import DecodingError, PaginationLimitError
from stashclient.pagination import (
    PAGE_LIMIT,
    Page,
    collect_keyed,
    collect_list,
    iter_pages,
    page_fetcher,
)
from stashclient.testing import MockStashServer

page_sizes_strategy = st.lists(
    st.integers(min_value=0, max_value=PAGE_LIMIT), min_size=1, max_size=8
)


def make_fetcher(pages: list[list[int]], starts: list[int]):
    """Serve ``pages`` at ``starts``, recording every requested offset."""
    requested: list[int] = []
    by_start = dict(zip(starts, range(len(pages))))

    def fetch(start: int) -> Page:
        requested.append(start)
        index = by_start[start]
        is_last = index == len(pages) - 1
        return Page(
            values=pages[index],
            is_last_page=is_last,
            next_page_start=None if is_last else starts[index + 1],
            start=start,
            size=len(pages[index]),
        )

    return fetch, requested


def split_into_pages(sizes: list[int]) -> tuple[list[list[int]], list[int]]:
    pages = []
    starts = []
    offset = 0
    for size in sizes:
        starts.append(offset)
        pages.append(list(range(offset, offset + size)))
        offset += size + 1
    return pages, starts


@given(sizes=page_sizes_strategy)
@settings(max_examples=100)
def test_collected_size_is_sum_of_page_sizes(sizes: list[int]) -> None:
    """
    Pagination terminates and the accumulated collection's size equals the
    sum of each page's item count.
    """
    pages, starts = split_into_pages(sizes)
    fetch, requested = make_fetcher(pages, starts)

    result = collect_list(fetch, lambda raw: raw)

    assert len(result) == sum(sizes)
    assert result == [item for page in pages for item in page]
    assert requested == starts


@given(sizes=page_sizes_strategy)
@settings(max_examples=100)
def test_keyed_collection_has_every_unique_item(sizes: list[int]) -> None:
    pages, starts = split_into_pages(sizes)
    fetch, _ = make_fetcher(pages, starts)

    result = collect_keyed(fetch, lambda raw: {"id": raw}, lambda item: item["id"])

    assert len(result) == sum(sizes)
    assert set(result) == {item for page in pages for item in page}


def test_server_supplied_offsets_are_followed() -> None:
    """Offsets come from nextPageStart, never from local arithmetic."""
    pages = [[1, 2], [3], [4, 5, 6]]
    starts = [0, 100, 7]
    fetch, requested = make_fetcher(pages, starts)

    result = collect_list(fetch, lambda raw: raw)

    assert requested == [0, 100, 7]
    assert result == [1, 2, 3, 4, 5, 6]


def test_keyed_merge_later_pages_win() -> None:
    pages = [[{"id": 1, "v": "old"}], [{"id": 1, "v": "new"}, {"id": 2, "v": "x"}]]
    fetch, _ = make_fetcher(pages, [0, 1])

    result = collect_keyed(fetch, lambda raw: raw, lambda item: item["id"])

    assert result == {1: {"id": 1, "v": "new"}, 2: {"id": 2, "v": "x"}}


def test_max_pages_bound() -> None:
    pages = [[1], [2], [3]]
    fetch, requested = make_fetcher(pages, [0, 1, 2])

    with pytest.raises(PaginationLimitError):
        collect_list(fetch, lambda raw: raw, max_pages=2)

    assert requested == [0, 1]


def test_max_pages_equal_to_page_count_succeeds() -> None:
    fetch, _ = make_fetcher([[1], [2]], [0, 1])

    assert collect_list(fetch, lambda raw: raw, max_pages=2) == [1, 2]


def test_missing_next_page_start_is_decoding_error() -> None:
    def fetch(start: int) -> Page:
        return Page(values=[1], is_last_page=False, next_page_start=None)

    with pytest.raises(DecodingError):
        list(iter_pages(fetch))


def test_page_from_dict() -> None:
    page = Page.from_dict(
        {"values": [{"id": 1}], "isLastPage": False, "nextPageStart": 25, "start": 0, "size": 1, "limit": 25}
    )

    assert page.values == [{"id": 1}]
    assert page.is_last_page is False
    assert page.next_page_start == 25


def test_page_from_dict_defaults_to_last_page() -> None:
    page = Page.from_dict({})

    assert page.values == []
    assert page.is_last_page is True
    assert page.limit == PAGE_LIMIT


@pytest.mark.parametrize("next_page_start", ["abc", "25", 2.5, True, [25]])
def test_page_from_dict_rejects_non_integer_next_page_start(next_page_start: object) -> None:
    with pytest.raises(TypeError):
        Page.from_dict({"values": [], "isLastPage": False, "nextPageStart": next_page_start})


def test_page_fetcher_rejects_string_next_page_start() -> None:
    server = MockStashServer()
    server.add(
        "GET",
        "/rest/api/1.0/repos",
        json={"values": [{"id": 1}], "isLastPage": False, "nextPageStart": "abc"},
    )
    client = server.client()

    with pytest.raises(DecodingError):
        collect_list(page_fetcher(client.transport, "/rest/api/1.0/repos"), lambda raw: raw)

    assert len(server.requests) == 1


def test_page_fetcher_sends_cursor_and_extra_params() -> None:
    server = MockStashServer()
    server.add_pages(
        "/rest/api/1.0/projects/OPS/repos/tools/pull-requests",
        [[{"n": 1}], [{"n": 2}]],
        query={"state": "MERGED"},
    )
    client = server.client()

    fetch = page_fetcher(
        client.transport,
        "/rest/api/1.0/projects/OPS/repos/tools/pull-requests",
        {"state": "MERGED"},
    )

    assert collect_list(fetch, lambda raw: raw["n"]) == [1, 2]
    params = [request.url.params for request in server.requests]
    assert [p["start"] for p in params] == ["0", "1"]
    assert all(p["limit"] == str(PAGE_LIMIT) for p in params)
    assert all(p["state"] == "MERGED" for p in params)


def test_page_fetcher_rejects_malformed_page() -> None:
    server = MockStashServer()
    server.add("GET", "/rest/api/1.0/repos", json={"values": "nope"})
    client = server.client()

    with pytest.raises(DecodingError):
        page_fetcher(client.transport, "/rest/api/1.0/repos")(0)
