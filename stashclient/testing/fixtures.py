"""
Pytest fixtures and payload factories for Stash client testing.

The factories return JSON payloads shaped like the server's responses so
they can be registered on a MockStashServer.
"""

from collections.abc import Generator
from typing import Any

import pytest

from stashclient.client import StashClient
from stashclient.testing.mock import MockStashServer

# ============================================================================
# Payload Factories
# ============================================================================


def create_repository_payload(
    repo_id: int = 1,
    slug: str = "tools",
    project_key: str = "OPS",
    host: str = "stash.example.com",
) -> dict[str, Any]:
    """Create a repository payload with http and ssh clone links."""
    return {
        "id": repo_id,
        "name": slug,
        "slug": slug,
        "scmId": "git",
        "project": {"id": 10, "key": project_key, "name": project_key},
        "links": {
            "clone": [
                {
                    "href": f"https://{host}/scm/{project_key.lower()}/{slug}.git",
                    "name": "http",
                },
                {
                    "href": f"ssh://git@{host}:7999/{project_key.lower()}/{slug}.git",
                    "name": "ssh",
                },
            ]
        },
    }


def create_branch_payload(
    name: str = "master", commit: str = "a" * 40, is_default: bool = False
) -> dict[str, Any]:
    """Create a branch payload."""
    return {
        "id": f"refs/heads/{name}",
        "displayId": name,
        "latestChangeset": commit,
        "isDefault": is_default,
    }


def create_tag_payload(name: str = "v1.0.0", commit: str = "b" * 40) -> dict[str, Any]:
    """Create a tag payload."""
    return {"id": f"refs/tags/{name}", "displayId": name, "hash": commit}


def create_pull_request_payload(
    pr_id: int = 1,
    title: str = "Add feature",
    from_branch: str = "feature",
    to_branch: str = "master",
    version: int = 0,
    state: str = "OPEN",
    project_key: str = "OPS",
    slug: str = "tools",
) -> dict[str, Any]:
    """Create a pull request payload."""
    repository = create_repository_payload(slug=slug, project_key=project_key)
    return {
        "id": pr_id,
        "version": version,
        "title": title,
        "description": "",
        "state": state,
        "open": state == "OPEN",
        "closed": state != "OPEN",
        "createdDate": 1700000000000,
        "updatedDate": 1700000360000,
        "fromRef": {
            "id": f"refs/heads/{from_branch}",
            "displayId": from_branch,
            "latestCommit": "c" * 40,
            "repository": repository,
        },
        "toRef": {
            "id": f"refs/heads/{to_branch}",
            "displayId": to_branch,
            "latestCommit": "d" * 40,
            "repository": repository,
        },
        "author": {
            "user": {
                "name": "jdoe",
                "emailAddress": "jdoe@example.com",
                "displayName": "J. Doe",
            }
        },
        "reviewers": [],
    }


def create_commit_payload(commit: str = "e" * 40, jira_keys: list[str] | None = None) -> dict[str, Any]:
    """Create a commit payload."""
    return {
        "id": commit,
        "displayId": commit[:11],
        "author": {"name": "jdoe", "emailAddress": "jdoe@example.com"},
        "authorTimestamp": 1700000000000,
        "attributes": {"jira-key": jira_keys or []},
    }


def create_addon_payload(key: str = "com.example.hook", enabled: bool = True) -> dict[str, Any]:
    """Create a UPM add-on payload."""
    return {
        "key": key,
        "name": "Example Hook",
        "version": "1.2.0",
        "enabled": enabled,
        "enabledByDefault": True,
        "userInstalled": True,
        "usesLicensing": False,
        "description": "Pre-receive hook",
        "vendor": {"name": "Example", "link": "https://example.com"},
        "links": {"self": f"/rest/plugins/1.0/{key}-key"},
        "modules": [],
    }


def create_error_envelope(*messages: str) -> dict[str, Any]:
    """Create a Stash error envelope with one entry per message."""
    return {
        "errors": [
            {"context": None, "message": message, "exceptionName": None}
            for message in messages
        ]
    }


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def mock_server() -> Generator[MockStashServer, None, None]:
    """
    Provide a MockStashServer for testing.

    Example:
        ```python
        def test_my_feature(mock_server):
            mock_server.add("DELETE", "/rest/api/1.0/projects/OPS/repos/x", status_code=204)
            mock_server.client().repos.remove("OPS", "x")
        ```
    """
    server = MockStashServer()
    yield server
    server.reset()


@pytest.fixture
def stash_client(mock_server: MockStashServer) -> Generator[StashClient, None, None]:
    """Provide a StashClient wired to ``mock_server``."""
    client = mock_server.client()
    yield client
    client.close()


@pytest.fixture
def sample_repository_payload() -> dict[str, Any]:
    """Provide a repository payload."""
    return create_repository_payload()


@pytest.fixture
def sample_pull_request_payload() -> dict[str, Any]:
    """Provide a pull request payload."""
    return create_pull_request_payload()
