"""Post-aggregation filtering, ordering and truncation of PR listings."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import List, Optional, Sequence

from .models import PullRequest


@dataclass(frozen=True)
class FilterOptions:
    """User-supplied predicates; empty or non-positive values disable a filter."""

    repo: str = ""
    pr_type: str = ""
    stale_days: int = 0


@dataclass(frozen=True)
class ListingResult:
    """Display-ready PRs plus the count they were truncated from."""

    prs: List[PullRequest]
    total: int
    truncated: bool


def apply_filters(
    prs: Sequence[PullRequest],
    options: FilterOptions,
    now: Optional[datetime] = None,
) -> List[PullRequest]:
    """Apply repository, type and staleness predicates, preserving order.

    - repository: exact, case-sensitive match on ``repo_name``
    - type: match on ``PullRequest.pr_type``
    - staleness: keep PRs created at least ``stale_days`` days before ``now``
    """
    filtered = list(prs)

    if options.repo:
        filtered = [pr for pr in filtered if pr.repo_name == options.repo]

    if options.pr_type:
        filtered = [pr for pr in filtered if pr.pr_type == options.pr_type]

    if options.stale_days > 0:
        current = now or datetime.now(timezone.utc)
        min_age = timedelta(days=options.stale_days)
        filtered = [pr for pr in filtered if current - pr.created_at >= min_age]

    return filtered


def sort_newest_first(prs: Sequence[PullRequest]) -> List[PullRequest]:
    """Sort by ``created_at`` descending; equal timestamps keep input order."""
    return sorted(prs, key=lambda pr: pr.created_at, reverse=True)


def apply_limit(prs: Sequence[PullRequest], limit: int) -> ListingResult:
    """Truncate to the first ``limit`` entries; ``limit <= 0`` means unlimited."""
    total = len(prs)
    if limit > 0 and total > limit:
        return ListingResult(prs=list(prs[:limit]), total=total, truncated=True)
    return ListingResult(prs=list(prs), total=total, truncated=False)


def rank(
    prs: Sequence[PullRequest],
    options: FilterOptions,
    limit: int,
    now: Optional[datetime] = None,
) -> ListingResult:
    """Filter, sort newest first, then apply the display limit."""
    return apply_limit(sort_newest_first(apply_filters(prs, options, now=now)), limit)
