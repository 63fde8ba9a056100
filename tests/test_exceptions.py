"""Tests for the error hierarchy and recognizer predicates."""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from stashclient.exceptions import (
    APIError,
    BodyReadError,
    ErrorEntry,
    StashError,
    TransportError,
    UnexpectedStatusError,
    UnparseableErrorBodyError,
    is_repository_exists,
    is_repository_not_found,
)


def status_errors(status_code: int) -> list[StashError]:
    return [
        UnexpectedStatusError(status_code),
        APIError(status_code, [ErrorEntry(None, "boom", None)]),
        UnparseableErrorBodyError(status_code, "Expecting value"),
        BodyReadError("reset", status_code),
    ]


@given(status_code=st.integers(min_value=100, max_value=599))
@settings(max_examples=100)
def test_predicates_match_exact_status(status_code: int) -> None:
    """
    The "exists" predicate is true iff the status is 409, the "not found"
    predicate iff it is 404.
    """
    for error in status_errors(status_code):
        assert is_repository_exists(error) == (status_code == 409)
        assert is_repository_not_found(error) == (status_code == 404)


@pytest.mark.parametrize(
    "error",
    [None, ValueError("409"), TransportError("connection refused")],
)
def test_predicates_false_for_other_errors(error: Exception | None) -> None:
    assert not is_repository_exists(error)
    assert not is_repository_not_found(error)


def test_api_error_keeps_entries_and_body() -> None:
    entries = [
        ErrorEntry("name", "Bad name.", None),
        ErrorEntry(None, "Try again.", "com.atlassian.Exception"),
    ]

    error = APIError(400, entries, b"{}")

    assert str(error) == "Bad name. Try again."
    assert error.errors == entries
    assert error.body == b"{}"
    assert isinstance(error, StashError)


def test_unexpected_status_error_format() -> None:
    error = UnexpectedStatusError(202)

    assert str(error) == "unexpected server status (202)"
    assert error.reason == "unexpected server status"
    assert error.status_code == 202


def test_transport_error_has_zero_status() -> None:
    assert TransportError("timeout").status_code == 0
