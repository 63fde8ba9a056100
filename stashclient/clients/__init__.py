"""Stash resource clients."""

from stashclient.clients.addons import AddonsClient
from stashclient.clients.branch_permissions import BranchPermissionsClient
from stashclient.clients.commits import CommitsClient
from stashclient.clients.projects import ProjectsClient
from stashclient.clients.pulls import PullsClient
from stashclient.clients.repos import ReposClient

__all__ = [
    "ProjectsClient",
    "ReposClient",
    "BranchPermissionsClient",
    "PullsClient",
    "CommitsClient",
    "AddonsClient",
]
