"""Stash client type definitions.

This module exports all data model types used by the client.
"""

from stashclient.types.addons import Addon, AddonVendor
from stashclient.types.commits import Commit
from stashclient.types.pulls import (
    Comment,
    MergeError,
    MergeResult,
    MergeVeto,
    PullRequest,
    Ref,
    User,
)
from stashclient.types.repos import (
    Branch,
    BranchRestriction,
    CloneLink,
    Project,
    Repository,
    Tag,
    find_repository_by_clone_url,
)

__all__ = [
    # Repository types
    "Project",
    "CloneLink",
    "Repository",
    "Branch",
    "Tag",
    "BranchRestriction",
    "find_repository_by_clone_url",
    # Pull request types
    "User",
    "Ref",
    "PullRequest",
    "MergeVeto",
    "MergeError",
    "MergeResult",
    "Comment",
    # Commit types
    "Commit",
    # Add-on types
    "Addon",
    "AddonVendor",
]
