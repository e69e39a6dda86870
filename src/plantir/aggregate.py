"""Fetching and reconciliation of PR query classes into one listing.

The review-requested ("pending") and reviewed-by-me ("reviewed") classes are
fetched sequentially and merged first-seen-wins on PR number, pending first.
A PR present in both therefore keeps the pending variant, which carries no
activity summary.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Set

from .config import QueryScope
from .github_client import GitHubClient
from .models import PullRequest
from .normalize import normalize_mentions, normalize_review_requested, normalize_reviewed

logger = logging.getLogger(__name__)


def merge_unique(*groups: Iterable[PullRequest]) -> List[PullRequest]:
    """Concatenate groups in order, keeping the first PR seen for each number."""
    seen: Set[int] = set()
    merged: List[PullRequest] = []
    duplicates = 0

    for group in groups:
        for pr in group:
            if pr.number in seen:
                duplicates += 1
                continue
            seen.add(pr.number)
            merged.append(pr)

    logger.debug("Merged PR groups", extra={"merged": len(merged), "duplicates": duplicates})
    return merged


def fetch_pending(client: GitHubClient, login: Optional[str] = None) -> List[PullRequest]:
    """Fetch PRs where the current user is a direct requested reviewer."""
    login = login or client.get_current_user()
    return normalize_review_requested(client.search_review_requested(), login)


def fetch_reviewed(client: GitHubClient, login: Optional[str] = None) -> List[PullRequest]:
    """Fetch PRs the current user has reviewed, annotated with new activity."""
    login = login or client.get_current_user()
    return normalize_reviewed(client.search_reviewed(), login)


def fetch_mentions(client: GitHubClient) -> List[PullRequest]:
    return normalize_mentions(client.search_mentions())


def fetch_all(client: GitHubClient) -> List[PullRequest]:
    """Fetch pending then reviewed PRs and merge them, pending first.

    Any failure aborts the whole aggregate; there is no partial result.
    """
    login = client.get_current_user()
    pending = fetch_pending(client, login)
    reviewed = fetch_reviewed(client, login)
    return merge_unique(pending, reviewed)


def fetch_for_scope(client: GitHubClient, scope: QueryScope) -> List[PullRequest]:
    if scope == QueryScope.PENDING:
        return fetch_pending(client)
    if scope == QueryScope.REVIEWED:
        return fetch_reviewed(client)
    if scope == QueryScope.MENTIONS:
        return fetch_mentions(client)
    return fetch_all(client)


def find_by_number(prs: Iterable[PullRequest], number: int) -> Optional[PullRequest]:
    for pr in prs:
        if pr.number == number:
            return pr
    return None
