"""Decoding of successful response bodies into typed results."""

import json
from collections.abc import Callable
from typing import Any, TypeVar

from stashclient.exceptions import DecodingError

T = TypeVar("T")


def parse_json(body: bytes) -> Any:
    """Parse a response body as JSON, raising DecodingError on failure."""
    try:
        return json.loads(body)
    except (ValueError, RecursionError) as e:
        raise DecodingError(f"unable to decode response: {e}", body=body) from e


def decode(parser: Callable[[Any], T], data: Any, body: bytes | None = None) -> T:
    """
    Run ``parser`` over decoded JSON.

    Missing or mistyped fields surface as DecodingError so that a call never
    returns a half-populated result.
    """
    try:
        return parser(data)
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise DecodingError(
            f"unexpected response shape: {type(e).__name__}: {e}", body=body
        ) from e


def decode_body(parser: Callable[[Any], T], body: bytes) -> T:
    """Parse ``body`` as JSON and run ``parser`` over it."""
    return decode(parser, parse_json(body), body)
