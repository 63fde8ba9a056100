#!/usr/bin/env python3
"""
Basic stashclient usage example.

Runs against an in-process MockStashServer so that no Stash instance is
needed. Point STASH_URL/STASH_USERNAME/STASH_PASSWORD at a real server and
use StashClient.from_env() instead to try it for real.

Run with: python examples/basic_usage.py
"""

import logging

from stashclient import StashError, configure_logging, is_repository_exists
from stashclient.testing import (
    MockStashServer,
    create_branch_payload,
    create_error_envelope,
    create_pull_request_payload,
    create_repository_payload,
)

configure_logging(level=logging.INFO)

print("=== stashclient Basic Usage Example ===\n")

server = MockStashServer()
server.add(
    "POST",
    "/rest/api/1.0/projects/OPS/repos",
    status_code=201,
    json=create_repository_payload(slug="deploy-scripts"),
    times=1,
)
server.add(
    "POST",
    "/rest/api/1.0/projects/OPS/repos",
    status_code=409,
    json=create_error_envelope("This repository URL is already taken."),
)
server.add_pages(
    "/rest/api/1.0/projects/OPS/repos/deploy-scripts/branches",
    [
        [create_branch_payload("master", is_default=True), create_branch_payload("develop")],
        [create_branch_payload("feature/logging")],
    ],
)
server.add_pages(
    "/rest/api/1.0/projects/OPS/repos/deploy-scripts/pull-requests",
    [[create_pull_request_payload(1, slug="deploy-scripts")]],
    query={"state": "OPEN"},
)

with server.client() as client:
    # 1. Create a repository, tolerating one that already exists
    print("1. Creating repository...")
    for attempt in (1, 2):
        try:
            repo = client.repos.create("OPS", "deploy-scripts")
            print(f"   Created {repo.slug} (id={repo.id}), ssh: {repo.ssh_url}")
        except StashError as e:
            if not is_repository_exists(e):
                raise
            print(f"   Attempt {attempt}: already exists ({e.status_code}): {e}")

    # 2. Paged collection keyed by branch name
    print("\n2. Listing branches...")
    branches = client.repos.branches("OPS", "deploy-scripts")
    for name, branch in sorted(branches.items()):
        marker = "*" if branch.is_default else " "
        print(f"   {marker} {name} @ {branch.latest_changeset[:8]}")

    # 3. Pull requests in server order
    print("\n3. Listing open pull requests...")
    for pr in client.pulls.list("OPS", "deploy-scripts"):
        print(f"   #{pr.id} {pr.title} ({pr.from_ref.display_id} -> {pr.to_ref.display_id})")

print(f"\nRequests sent: {len(server.requests)}")
print("\n=== Done ===")
