"""Tests for query-class aggregation and reconciliation."""

import sys
from datetime import datetime, timezone
from pathlib import Path
from unittest.mock import Mock

import pytest

# Add src directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from plantir.aggregate import fetch_all, fetch_for_scope, find_by_number, merge_unique
from plantir.config import QueryScope
from plantir.errors import FetchError, IdentityLookupError
from plantir.models import PullRequest, ReviewedNode, ReviewRequestedNode


def _make_pr(number: int, repo: str = "api", activity: str = "") -> PullRequest:
    return PullRequest(
        number=number,
        title=f"PR {number}",
        url=f"https://github.com/acme/{repo}/pull/{number}",
        author="alice",
        repo_name=repo,
        owner_login="acme",
        created_at=datetime(2026, 3, 1, tzinfo=timezone.utc),
        activity_summary=activity,
    )


def _node_payload(number: int) -> dict:
    return {
        "number": number,
        "title": f"PR {number}",
        "url": f"https://github.com/acme/api/pull/{number}",
        "createdAt": "2026-03-01T00:00:00Z",
        "author": {"login": "alice"},
        "repository": {"name": "api", "owner": {"login": "acme"}},
    }


def _client(pending_numbers, reviewed_payloads) -> Mock:
    client = Mock()
    client.get_current_user.return_value = "me"
    client.search_review_requested.return_value = [
        ReviewRequestedNode.from_payload(
            dict(_node_payload(n), reviewRequests={"nodes": [{"requestedReviewer": {"login": "me"}}]})
        )
        for n in pending_numbers
    ]
    client.search_reviewed.return_value = [ReviewedNode.from_payload(p) for p in reviewed_payloads]
    return client


def test_merge_unique_keeps_one_entry_per_number_first_seen_wins():
    """Verify overlapping numbers resolve to the earlier group's entry."""
    pending = [_make_pr(1), _make_pr(2)]
    reviewed = [_make_pr(2, activity="3 commits"), _make_pr(3)]

    merged = merge_unique(pending, reviewed)

    assert [pr.number for pr in merged] == [1, 2, 3]
    assert merged[1] is pending[1]


def test_merge_unique_deduplicates_within_a_group():
    """Verify duplicates inside a single group are also collapsed."""
    merged = merge_unique([_make_pr(4), _make_pr(4, repo="web")])

    assert len(merged) == 1
    assert merged[0].repo_name == "api"


def test_merge_unique_is_idempotent():
    """Verify merging an already merged listing with its inputs changes nothing."""
    a = [_make_pr(1), _make_pr(2)]
    b = [_make_pr(2, activity="1 comments"), _make_pr(5)]

    once = merge_unique(a, b)

    assert merge_unique(once, a, b) == once


def test_fetch_all_pending_variant_wins_over_reviewed():
    """Verify a PR in both classes keeps the pending variant without activity."""
    reviewed = dict(
        _node_payload(7),
        reviews={"nodes": [{"author": {"login": "me"}, "submittedAt": "2026-03-02T00:00:00Z"}]},
        comments={"nodes": [{"createdAt": "2026-03-03T00:00:00Z"}, {"createdAt": "2026-03-04T00:00:00Z"}]},
    )
    client = _client([7], [reviewed, _node_payload(8)])

    prs = fetch_all(client)

    assert [pr.number for pr in prs] == [7, 8]
    assert prs[0].activity_summary == ""
    client.get_current_user.assert_called_once_with()


def test_fetch_all_looks_up_identity_before_fetching():
    """Verify an identity failure aborts before any search is issued."""
    client = _client([1], [])
    client.get_current_user.side_effect = IdentityLookupError("no user")

    with pytest.raises(IdentityLookupError):
        fetch_all(client)

    client.search_review_requested.assert_not_called()
    client.search_reviewed.assert_not_called()


def test_fetch_all_aborts_when_reviewed_fetch_fails():
    """Verify a failure in either class fails the aggregate instead of returning partial data."""
    client = _client([1], [])
    client.search_reviewed.side_effect = FetchError("boom")

    with pytest.raises(FetchError):
        fetch_all(client)


def test_fetch_for_scope_dispatches_single_classes():
    """Verify scoped fetches call only the matching search."""
    client = _client([1], [_node_payload(2)])
    client.search_mentions.return_value = []

    pending = fetch_for_scope(client, QueryScope.PENDING)
    reviewed = fetch_for_scope(client, QueryScope.REVIEWED)
    mentions = fetch_for_scope(client, QueryScope.MENTIONS)

    assert [pr.number for pr in pending] == [1]
    assert [pr.number for pr in reviewed] == [2]
    assert mentions == []
    client.search_mentions.assert_called_once_with()


def test_find_by_number():
    """Verify lookup by PR number returns the match or None."""
    prs = [_make_pr(1), _make_pr(2)]

    assert find_by_number(prs, 2) is prs[1]
    assert find_by_number(prs, 3) is None
