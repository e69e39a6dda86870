"""Mapping of typed search nodes into canonical ``PullRequest`` records."""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from .activity import summarize_activity
from .models import (
    MentionNode,
    PullRequest,
    ReviewedNode,
    ReviewRequestedNode,
    SearchNode,
    parse_timestamp,
)

logger = logging.getLogger(__name__)


def normalize_node(node: SearchNode, activity_summary: str = "") -> Optional[PullRequest]:
    """Build a ``PullRequest`` from one search node.

    Returns ``None`` when ``number``, ``title`` or ``url`` is missing so that a
    single malformed node is dropped instead of failing the batch. An
    unparsable ``createdAt`` becomes ``ZERO_TIME``.
    """
    if node.number is None or not node.title or not node.url:
        logger.debug(
            "Dropping search node missing required fields",
            extra={"number": node.number, "title": node.title, "url": node.url},
        )
        return None

    return PullRequest(
        number=node.number,
        title=node.title,
        url=node.url,
        author=node.author_login,
        repo_name=node.repo_name,
        owner_login=node.owner_login,
        created_at=parse_timestamp(node.created_at),
        is_draft=node.is_draft,
        labels=node.labels,
        activity_summary=activity_summary,
    )


def is_direct_reviewer(login: str, node: ReviewRequestedNode) -> bool:
    """Return whether ``login`` is named directly, not via a team, as a reviewer."""
    return login in node.requested_reviewers


def normalize_review_requested(nodes: Iterable[ReviewRequestedNode], login: str) -> List[PullRequest]:
    """Normalize review-requested nodes, keeping only direct review requests."""
    prs: List[PullRequest] = []
    skipped_indirect = 0

    for node in nodes:
        if not is_direct_reviewer(login, node):
            skipped_indirect += 1
            continue
        pr = normalize_node(node)
        if pr is not None:
            prs.append(pr)

    logger.debug(
        "Normalized review-requested nodes",
        extra={"kept": len(prs), "skipped_indirect": skipped_indirect},
    )
    return prs


def normalize_reviewed(nodes: Iterable[ReviewedNode], login: str) -> List[PullRequest]:
    """Normalize reviewed-by-me nodes, annotating each with post-review activity."""
    prs: List[PullRequest] = []
    for node in nodes:
        activity = summarize_activity(login, node.reviews, node.commit_dates, node.comment_dates)
        pr = normalize_node(node, activity_summary=activity)
        if pr is not None:
            prs.append(pr)
    return prs


def normalize_mentions(nodes: Iterable[MentionNode]) -> List[PullRequest]:
    prs: List[PullRequest] = []
    for node in nodes:
        pr = normalize_node(node)
        if pr is not None:
            prs.append(pr)
    return prs
