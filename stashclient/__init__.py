"""stashclient - typed Python client for the Atlassian Stash REST API."""

from stashclient.client import StashClient
from stashclient.exceptions import (
    APIError,
    BodyReadError,
    ConfigurationError,
    DecodingError,
    EncodingError,
    ErrorEntry,
    PaginationLimitError,
    StashError,
    TransportError,
    UnexpectedStatusError,
    UnparseableErrorBodyError,
    is_repository_exists,
    is_repository_not_found,
)
from stashclient.logging import configure_logging, get_logger
from stashclient.pagination import PAGE_LIMIT, Page, collect_keyed, collect_list, iter_pages
from stashclient.transport import ClientIdentity, HTTPTransport, RawResponse, TransportConfig
from stashclient.types.repos import find_repository_by_clone_url

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Main Client
    "StashClient",
    # Exceptions
    "StashError",
    "TransportError",
    "BodyReadError",
    "EncodingError",
    "DecodingError",
    "APIError",
    "ErrorEntry",
    "UnparseableErrorBodyError",
    "UnexpectedStatusError",
    "PaginationLimitError",
    "ConfigurationError",
    "is_repository_exists",
    "is_repository_not_found",
    # Transport
    "HTTPTransport",
    "TransportConfig",
    "ClientIdentity",
    "RawResponse",
    # Pagination
    "PAGE_LIMIT",
    "Page",
    "iter_pages",
    "collect_keyed",
    "collect_list",
    # Helpers
    "find_repository_by_clone_url",
    # Logging
    "configure_logging",
    "get_logger",
]
