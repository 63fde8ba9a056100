"""Stash client testing utilities.

Provides a mock server and payload factories for testing applications that
use the Stash client.
"""

from stashclient.testing.fixtures import (
    create_addon_payload,
    create_branch_payload,
    create_commit_payload,
    create_error_envelope,
    create_pull_request_payload,
    create_repository_payload,
    create_tag_payload,
)
from stashclient.testing.mock import MockRoute, MockStashServer

__all__ = [
    # Mock server
    "MockStashServer",
    "MockRoute",
    # Payload factories
    "create_repository_payload",
    "create_branch_payload",
    "create_tag_payload",
    "create_pull_request_payload",
    "create_commit_payload",
    "create_addon_payload",
    "create_error_envelope",
]
