"""
Pytest plugin for Stash client testing fixtures.

To use these fixtures in your tests, add this to your conftest.py:

    pytest_plugins = ["stashclient.testing.conftest"]
"""

# Re-export all fixtures for pytest auto-discovery
from stashclient.testing.fixtures import (
    mock_server,
    sample_pull_request_payload,
    sample_repository_payload,
    stash_client,
)

__all__ = [
    "mock_server",
    "stash_client",
    "sample_repository_payload",
    "sample_pull_request_payload",
]
