"""Commit data models."""

from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass
class Commit:
    """Commit information."""

    id: str
    display_id: str
    author_name: str
    author_email: str | None
    author_timestamp: int  # milliseconds since the epoch
    jira_keys: list[str] = field(default_factory=list)

    @property
    def authored_at(self) -> datetime:
        return datetime.fromtimestamp(self.author_timestamp / 1000, tz=timezone.utc)
