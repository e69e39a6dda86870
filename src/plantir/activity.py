"""Activity-since-last-review computation.

For a PR the current user has already reviewed, this module reduces three
independent event streams into a short summary:
- the user's own reviews, which fix the cut-off time
- commits landed strictly after the cut-off
- comments posted strictly after the cut-off

Timestamps that fail to parse become ``ZERO_TIME`` and so never count as new
activity.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable

from .models import ZERO_TIME, ReviewEvent, parse_timestamp


@dataclass(frozen=True, slots=True)
class ActivityCounts:
    """Counts of events newer than the user's most recent review."""

    new_commits: int = 0
    new_comments: int = 0

    @property
    def summary(self) -> str:
        parts = []
        if self.new_commits > 0:
            parts.append(f"{self.new_commits} commits")
        if self.new_comments > 0:
            parts.append(f"{self.new_comments} comments")
        return ", ".join(parts)


def last_self_review(login: str, reviews: Iterable[ReviewEvent]) -> datetime:
    """Return the latest review time authored by ``login``, or ``ZERO_TIME``."""
    latest = ZERO_TIME
    for review in reviews:
        if review.author_login != login:
            continue
        submitted_at = parse_timestamp(review.submitted_at)
        if submitted_at > latest:
            latest = submitted_at
    return latest


def count_after(timestamps: Iterable[str], since: datetime) -> int:
    """Count timestamps strictly after ``since``."""
    return sum(1 for value in timestamps if parse_timestamp(value) > since)


def compute_activity(
    login: str,
    reviews: Iterable[ReviewEvent],
    commit_dates: Iterable[str],
    comment_dates: Iterable[str],
) -> ActivityCounts:
    """Count commits and comments newer than ``login``'s last review.

    When the user has no parsable review of their own, the cut-off is
    ``ZERO_TIME`` and every well-formed commit and comment counts.
    """
    since = last_self_review(login, reviews)
    return ActivityCounts(
        new_commits=count_after(commit_dates, since),
        new_comments=count_after(comment_dates, since),
    )


def summarize_activity(
    login: str,
    reviews: Iterable[ReviewEvent],
    commit_dates: Iterable[str],
    comment_dates: Iterable[str],
) -> str:
    return compute_activity(login, reviews, commit_dates, comment_dates).summary
