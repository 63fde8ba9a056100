"""
HTTP Transport for the Stash client.

Every API call flows through this module: request construction,
credential injection, execution, status classification and error-body
decoding.
"""

import base64
import json
import time
from dataclasses import dataclass, field
from typing import Any

import httpx

from stashclient.decoding import parse_json
from stashclient.exceptions import (
    APIError,
    BodyReadError,
    EncodingError,
    ErrorEntry,
    TransportError,
    UnexpectedStatusError,
    UnparseableErrorBodyError,
)
from stashclient.logging import get_logger, log_http_request, log_http_response

JSON_CONTENT_TYPE = "application/json"

logger = get_logger()


@dataclass(frozen=True)
class TransportConfig:
    """Settings of the shared HTTP client."""

    timeout: float = 10.0  # Per-request timeout in seconds
    verify_tls: bool = True


@dataclass(frozen=True)
class ClientIdentity:
    """Credentials and server location of a client."""

    username: str
    password: str
    base_url: str

    @property
    def authenticated(self) -> bool:
        return bool(self.username) and bool(self.password)

    def authorization_header(self) -> str | None:
        """Return the Basic Authorization value, or None when anonymous."""
        if not self.authenticated:
            return None
        credentials = f"{self.username}:{self.password}".encode()
        return "Basic " + base64.b64encode(credentials).decode("ascii")

    def resolve(self, path: str) -> str:
        """Join ``path`` to the base URL with exactly one slash."""
        return self.base_url.rstrip("/") + "/" + path.lstrip("/")


@dataclass
class RawResponse:
    """Outcome of a single round trip."""

    status_code: int
    body: bytes | None
    headers: httpx.Headers = field(default_factory=httpx.Headers)
    error: Exception | None = None

    def raise_for_error(self) -> None:
        if self.error is not None:
            raise self.error


class HTTPTransport:
    """
    HTTP transport layer for the Stash REST API.

    Handles:
    - JSON payload serialization and the anti-CSRF header
    - HTTP Basic credentials
    - Full body reads with guaranteed connection release
    - Error envelope parsing into typed exceptions
    """

    def __init__(
        self,
        identity: ClientIdentity,
        config: TransportConfig | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """
        Initialize HTTP transport.

        Args:
            identity: Credentials and base URL (e.g., "https://stash.example.com")
            config: Timeout and TLS settings
            transport: Optional httpx transport, mainly for tests
        """
        self.identity = identity
        self.config = config or TransportConfig()

        if not self.config.verify_tls:
            logger.warning(
                "TLS certificate verification is disabled for %s",
                identity.base_url,
            )

        self._client = httpx.Client(
            timeout=self.config.timeout,
            verify=self.config.verify_tls,
            transport=transport,
        )

    def close(self) -> None:
        """Close the HTTP client."""
        self._client.close()

    def __enter__(self) -> "HTTPTransport":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def _base_headers(self) -> dict[str, str]:
        headers = {"X-Atlassian-Token": "no-check"}
        authorization = self.identity.authorization_header()
        if authorization is not None:
            headers["Authorization"] = authorization
        return headers

    def build_request(
        self,
        method: str,
        path: str,
        payload: Any = None,
        *,
        content_type: str = JSON_CONTENT_TYPE,
        accept: bool = True,
    ) -> httpx.Request:
        """
        Build a wire request.

        Args:
            method: HTTP method
            path: Path relative to the base URL (e.g., "/rest/api/1.0/repos")
            payload: JSON-serializable body, or None for no body
            content_type: Content-Type sent with a body
            accept: Whether to send ``Accept: application/json`` with a body

        Raises:
            EncodingError: If the payload cannot be serialized
        """
        headers = self._base_headers()

        content = None
        if payload is not None:
            try:
                content = json.dumps(payload).encode("utf-8")
            except (TypeError, ValueError, RecursionError) as e:
                raise EncodingError(f"unable to encode request payload: {e}") from e

            if accept:
                headers["Accept"] = JSON_CONTENT_TYPE
            headers["Content-Type"] = content_type

        request = self._client.build_request(
            method,
            self.identity.resolve(path),
            headers=headers,
            content=content,
        )
        if payload is not None and not accept:
            del request.headers["Accept"]
        return request

    def build_multipart_request(
        self,
        path: str,
        files: dict[str, Any],
        data: dict[str, str] | None = None,
    ) -> httpx.Request:
        """Build a multipart POST carrying the same credentials."""
        return self._client.build_request(
            "POST",
            self.identity.resolve(path),
            headers=self._base_headers(),
            files=files,
            data=data,
        )

    def consume(self, request: httpx.Request) -> RawResponse:
        """
        Execute a request and classify its outcome.

        Never raises for server or network failures; the failure is stored
        in ``RawResponse.error`` instead. A status below 400 is always a
        success regardless of what the body contains.
        """
        url = str(request.url)
        body_for_log = None
        if "json" in request.headers.get("Content-Type", ""):
            body_for_log = request.content
        log_http_request(request.method, url, request.headers, body_for_log)

        started = time.monotonic()
        try:
            response = self._client.send(request, stream=True)
        except httpx.TransportError as e:
            error = TransportError(f"{request.method} {url}: {e}")
            error.__cause__ = e
            log_http_response(0, url, error=error)
            return RawResponse(status_code=0, body=None, error=error)

        try:
            try:
                body = response.read()
            except (httpx.RequestError, httpx.StreamError) as e:
                read_error = BodyReadError(
                    f"unable to read response body: {e}", response.status_code
                )
                read_error.__cause__ = e
                log_http_response(response.status_code, url, error=read_error)
                return RawResponse(
                    status_code=response.status_code,
                    body=None,
                    headers=response.headers,
                    error=read_error,
                )
        finally:
            response.close()

        result = self._classify(response.status_code, body, response.headers)
        elapsed_ms = (time.monotonic() - started) * 1000
        log_http_response(result.status_code, url, elapsed_ms, result.error)
        return result

    def _classify(
        self, status_code: int, body: bytes, headers: httpx.Headers
    ) -> RawResponse:
        if status_code < 400:
            return RawResponse(status_code=status_code, body=body, headers=headers)

        try:
            errors = _parse_error_envelope(body)
        except (ValueError, RecursionError) as e:
            return RawResponse(
                status_code=status_code,
                body=None,
                headers=headers,
                error=UnparseableErrorBodyError(status_code, str(e)),
            )

        return RawResponse(
            status_code=status_code,
            body=body,
            headers=headers,
            error=APIError(status_code, errors, body),
        )

    def expect(self, request: httpx.Request, *statuses: int) -> bytes:
        """
        Execute a request and require one of ``statuses``.

        Returns:
            The raw response body

        Raises:
            StashError: The consumed error, or UnexpectedStatusError when the
                status is not accepted
        """
        response = self.consume(request)
        response.raise_for_error()

        if response.status_code in statuses:
            return response.body or b""

        raise UnexpectedStatusError(response.status_code)

    def request(
        self, method: str, path: str, payload: Any = None, *statuses: int
    ) -> bytes:
        """Build, execute and validate a request; return the raw body."""
        return self.expect(self.build_request(method, path, payload), *statuses)

    def request_json(
        self, method: str, path: str, payload: Any = None, *statuses: int
    ) -> Any:
        """Like :meth:`request` but decode the body as JSON."""
        body = self.request(method, path, payload, *statuses)
        return parse_json(body)


def _parse_error_envelope(body: bytes) -> list[ErrorEntry]:
    """
    Parse ``{"errors": [{"context", "message", "exceptionName"}]}``.

    Raises:
        ValueError: If the body is not JSON or does not have that shape
    """
    data = json.loads(body)
    if not isinstance(data, dict):
        raise ValueError(f"expected a JSON object, got {type(data).__name__}")

    raw_errors = data.get("errors") or []
    if not isinstance(raw_errors, list):
        raise ValueError("'errors' is not a list")

    entries = []
    for item in raw_errors:
        if not isinstance(item, dict):
            raise ValueError("error entry is not an object")
        message = item.get("message") or ""
        context = item.get("context")
        exception_name = item.get("exceptionName")
        for name, value in (
            ("message", message),
            ("context", context),
            ("exceptionName", exception_name),
        ):
            if value is not None and not isinstance(value, str):
                raise ValueError(f"'{name}' is not a string")
        entries.append(ErrorEntry(context, message, exception_name))

    return entries
