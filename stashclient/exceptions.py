"""Stash client exception classes."""

from dataclasses import dataclass


class StashError(Exception):
    """Base exception for all Stash client errors."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class ConfigurationError(StashError):
    """Raised when client configuration is invalid or missing."""

    pass


class TransportError(StashError):
    """Raised on network failures (DNS, refused connection, timeout)."""

    def __init__(self, message: str) -> None:
        super().__init__(message, status_code=0)


class BodyReadError(StashError):
    """Raised when a response body cannot be read after the round trip."""

    pass


class EncodingError(StashError):
    """Raised when a request payload cannot be serialized to JSON."""

    pass


class DecodingError(StashError):
    """Raised when a successful response cannot be decoded."""

    def __init__(
        self, message: str, status_code: int | None = None, body: bytes | None = None
    ) -> None:
        super().__init__(message, status_code)
        self.body = body


@dataclass
class ErrorEntry:
    """A single entry of the server's ``errors`` envelope."""

    context: str | None
    message: str
    exception_name: str | None


class APIError(StashError):
    """Raised when the server answers >= 400 with a readable error envelope."""

    def __init__(
        self,
        status_code: int,
        errors: list[ErrorEntry],
        body: bytes | None = None,
    ) -> None:
        super().__init__(" ".join(e.message for e in errors), status_code)
        self.errors = errors
        self.body = body


class UnparseableErrorBodyError(StashError):
    """Raised when the server answers >= 400 and its error body is garbage."""

    def __init__(self, status_code: int, detail: str) -> None:
        super().__init__(
            f"status {status_code}; unable to parse error body: {detail}",
            status_code,
        )
        self.detail = detail


class UnexpectedStatusError(StashError):
    """Raised when the status is not one of the statuses the call accepts."""

    REASON = "unexpected server status"

    def __init__(self, status_code: int, reason: str = REASON) -> None:
        super().__init__(f"{reason} ({status_code})", status_code)
        self.reason = reason


class PaginationLimitError(StashError):
    """Raised when a paged listing exceeds the caller's page bound."""

    pass


def is_repository_exists(error: BaseException | None) -> bool:
    """Return True if ``error`` reports an existing resource (HTTP 409)."""
    return isinstance(error, StashError) and error.status_code == 409


def is_repository_not_found(error: BaseException | None) -> bool:
    """Return True if ``error`` reports a missing resource (HTTP 404)."""
    return isinstance(error, StashError) and error.status_code == 404
