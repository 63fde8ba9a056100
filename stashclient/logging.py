"""
Loggers of the Stash client and masked HTTP logging.

Three loggers are used: ``stashclient`` (general), ``stashclient.http``
(one record per request and per response, DEBUG only) and
``stashclient.addons`` (UPM install/licensing progress). Credentials never
reach a record in clear: Basic authorization values, UPM tokens, passwords
and license keys are replaced with ``[REDACTED]``.
"""

import logging
import re
from collections.abc import Mapping

LOGGER_NAME = "stashclient"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
REDACTED = "[REDACTED]"

_REDACTIONS = [
    (re.compile(r"Basic\s+[A-Za-z0-9+/=]+"), f"Basic {REDACTED}"),
    (re.compile(r"([?&]token=)[^&\s]+"), rf"\1{REDACTED}"),
    (
        re.compile(
            r"(password|token|rawLicense|license)['\"]?\s*[:=]\s*['\"][^'\"]+['\"]",
            re.IGNORECASE,
        ),
        rf"\1: {REDACTED}",
    ),
]

_SECRET_HEADERS = {"authorization", "proxy-authorization", "cookie", "upm-token"}


def get_logger(name: str | None = None) -> logging.Logger:
    """
    Get a Stash client logger.

    Args:
        name: Suffix under ``stashclient`` (e.g., "http", "addons"), or None
            for the top-level logger
    """
    if name is None:
        return logging.getLogger(LOGGER_NAME)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


_http_logger = get_logger("http")


def configure_logging(
    level: int = logging.INFO,
    http_level: int | None = None,
    addons_level: int | None = None,
    handler: logging.Handler | None = None,
    format_string: str = DEFAULT_FORMAT,
) -> logging.Handler:
    """
    Attach a handler to the ``stashclient`` logger and set levels.

    ``http_level`` and ``addons_level`` default to ``level``. HTTP traffic is
    only logged at DEBUG, so pass ``http_level=logging.DEBUG`` to see it.

    Returns:
        The installed handler, so callers can remove it again

    Example:
        ```python
        import logging
        from stashclient import configure_logging

        configure_logging(http_level=logging.DEBUG)
        ```
    """
    handler = handler or logging.StreamHandler()
    handler.setFormatter(logging.Formatter(format_string))

    top = get_logger()
    top.setLevel(level)
    top.addHandler(handler)

    for suffix, override in (("http", http_level), ("addons", addons_level)):
        get_logger(suffix).setLevel(level if override is None else override)

    return handler


def redact(text: str) -> str:
    """Replace credentials, UPM tokens, passwords and licenses in ``text``."""
    for pattern, replacement in _REDACTIONS:
        text = pattern.sub(replacement, text)
    return text


def redact_headers(headers: Mapping[str, str]) -> dict[str, str]:
    """Copy ``headers`` with secret header values replaced."""
    return {
        name: REDACTED if name.lower() in _SECRET_HEADERS else redact(value)
        for name, value in headers.items()
    }


def log_http_request(
    method: str,
    url: str,
    headers: Mapping[str, str] | None = None,
    body: bytes | None = None,
) -> None:
    """Log an outgoing request at DEBUG level with secrets masked."""
    if not _http_logger.isEnabledFor(logging.DEBUG):
        return

    parts = [f"{method} {redact(url)}"]
    if headers:
        parts.append(f"headers={redact_headers(headers)}")
    if body:
        parts.append("body=" + redact(body.decode("utf-8", errors="replace")))
    _http_logger.debug(" | ".join(parts))


def log_http_response(
    status_code: int,
    url: str,
    elapsed_ms: float | None = None,
    error: Exception | None = None,
) -> None:
    """Log a response (status 0 for network failures) at DEBUG level."""
    if not _http_logger.isEnabledFor(logging.DEBUG):
        return

    parts = [f"Response {status_code} from {redact(url)}"]
    if elapsed_ms is not None:
        parts.append(f"elapsed={elapsed_ms:.2f}ms")
    if error is not None:
        parts.append(f"error={type(error).__name__}: {error}")
    _http_logger.debug(" | ".join(parts))


__all__ = [
    "configure_logging",
    "get_logger",
    "redact",
    "redact_headers",
    "log_http_request",
    "log_http_response",
]
