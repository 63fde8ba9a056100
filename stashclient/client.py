"""
Stash client.

Provides the primary interface for interacting with the Stash REST API.
"""

import os
from typing import Any

import httpx

from stashclient.clients import (
    AddonsClient,
    BranchPermissionsClient,
    CommitsClient,
    ProjectsClient,
    PullsClient,
    ReposClient,
)
from stashclient.exceptions import ConfigurationError
from stashclient.transport import ClientIdentity, HTTPTransport, TransportConfig

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"", "0", "false", "no", "off"}


class StashClient:
    """
    Main client for interacting with the Stash API.

    Aggregates all resource clients over one shared HTTP transport.

    Example:
        ```python
        from stashclient import StashClient, StashError, is_repository_exists

        with StashClient("admin", "secret", "https://stash.example.com") as client:
            try:
                client.repos.create("OPS", "deploy-scripts")
            except StashError as e:
                if not is_repository_exists(e):
                    raise

            for name, branch in client.repos.branches("OPS", "deploy-scripts").items():
                print(name, branch.latest_changeset)
        ```
    """

    DEFAULT_TIMEOUT = 10.0

    def __init__(
        self,
        username: str,
        password: str,
        base_url: str,
        config: TransportConfig | None = None,
        http_transport: httpx.BaseTransport | None = None,
    ) -> None:
        """
        Initialize the Stash client.

        Args:
            username: User name; empty for anonymous access
            password: Password; empty for anonymous access
            base_url: Server URL (e.g., "https://stash.example.com/")
            config: Timeout and TLS settings (default: 10s timeout, TLS verified)
            http_transport: Optional httpx transport (e.g., httpx.MockTransport)
        """
        if not base_url:
            raise ConfigurationError("base_url must not be empty")

        self.identity = ClientIdentity(username, password, base_url)
        self.config = config or TransportConfig(timeout=self.DEFAULT_TIMEOUT)

        self._transport = HTTPTransport(
            identity=self.identity,
            config=self.config,
            transport=http_transport,
        )

        self.projects = ProjectsClient(self._transport)
        self.repos = ReposClient(self._transport)
        self.branch_permissions = BranchPermissionsClient(self._transport)
        self.pulls = PullsClient(self._transport)
        self.commits = CommitsClient(self._transport)
        self.addons = AddonsClient(self._transport)

    @classmethod
    def from_env(
        cls, http_transport: httpx.BaseTransport | None = None
    ) -> "StashClient":
        """
        Create a client from environment variables.

        Environment variables:
            STASH_URL: Server URL (required)
            STASH_USERNAME: User name (optional, anonymous when unset)
            STASH_PASSWORD: Password (optional, anonymous when unset)
            STASH_TIMEOUT: Request timeout in seconds (optional, default: 10)
            STASH_INSECURE: "1"/"true"/"yes" disables TLS verification (optional)

        Raises:
            ConfigurationError: If a variable is missing or malformed
        """
        base_url = os.environ.get("STASH_URL")
        if not base_url:
            raise ConfigurationError("STASH_URL environment variable not set")

        timeout_str = os.environ.get("STASH_TIMEOUT")
        timeout = cls.DEFAULT_TIMEOUT
        if timeout_str:
            try:
                timeout = float(timeout_str)
            except ValueError:
                raise ConfigurationError(
                    f"Invalid STASH_TIMEOUT: {timeout_str}. Must be a number of seconds"
                ) from None
            if timeout <= 0:
                raise ConfigurationError("STASH_TIMEOUT must be positive")

        insecure = os.environ.get("STASH_INSECURE", "").strip().lower()
        if insecure not in _TRUE_VALUES | _FALSE_VALUES:
            raise ConfigurationError(
                f"Invalid STASH_INSECURE: {insecure}. Must be a boolean flag"
            )

        return cls(
            username=os.environ.get("STASH_USERNAME", ""),
            password=os.environ.get("STASH_PASSWORD", ""),
            base_url=base_url,
            config=TransportConfig(timeout=timeout, verify_tls=insecure not in _TRUE_VALUES),
            http_transport=http_transport,
        )

    @property
    def transport(self) -> HTTPTransport:
        """Get the underlying HTTP transport (for advanced use cases)."""
        return self._transport

    def close(self) -> None:
        """Close the client and release resources."""
        self._transport.close()

    def __enter__(self) -> "StashClient":
        """Context manager entry."""
        return self

    def __exit__(self, *args: Any) -> None:
        """Context manager exit - closes the client."""
        self.close()
