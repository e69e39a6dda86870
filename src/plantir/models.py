"""Domain models for plantir.

``PullRequest`` is the canonical record handed to the presentation layer. The
``*Node`` dataclasses model only the subset of each GraphQL search node that a
given query class selects, decoded once via ``from_payload``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

ZERO_TIME = datetime.min.replace(tzinfo=timezone.utc)

DEPENDABOT_LOGIN = "dependabot"
TYPE_DEPENDABOT = "dependabot"
TYPE_FEATURE = "feature"

_RFC3339_PATTERN = re.compile(
    r"^(?P<date>\d{4}-\d{2}-\d{2})[Tt](?P<time>\d{2}:\d{2}:\d{2})"
    r"(?:\.(?P<fraction>\d+))?(?P<offset>[Zz]|[+-]\d{2}:\d{2})$"
)


def parse_timestamp(value: Optional[str]) -> datetime:
    """Parse an RFC 3339 timestamp into a UTC datetime.

    Only full date-time values with a ``Z`` or ``+HH:MM`` offset are accepted.
    Missing, partial or unparsable values map to ``ZERO_TIME`` instead of raising.
    """
    if not value or not isinstance(value, str):
        return ZERO_TIME

    match = _RFC3339_PATTERN.match(value.strip())
    if match is None:
        return ZERO_TIME

    offset = match.group("offset")
    if offset in ("Z", "z"):
        offset = "+00:00"
    # fromisoformat only takes 3 or 6 fractional digits before Python 3.11.
    fraction = (match.group("fraction") or "")[:6].ljust(6, "0")
    normalized = f"{match.group('date')}T{match.group('time')}.{fraction}{offset}"

    try:
        return datetime.fromisoformat(normalized).astimezone(timezone.utc)
    except (ValueError, OverflowError):
        return ZERO_TIME


def format_timestamp(value: datetime) -> str:
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def _mapping(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _login(value: Any) -> str:
    login = _mapping(value).get("login")
    return login if isinstance(login, str) else ""


def _text(value: Any) -> Optional[str]:
    return value if isinstance(value, str) and value else None


def _nodes(payload: Dict[str, Any], key: str) -> List[Dict[str, Any]]:
    """Return the dict entries of ``payload[key].nodes``; anything else is skipped."""
    nodes = _mapping(payload.get(key)).get("nodes")
    if not isinstance(nodes, list):
        return []
    return [node for node in nodes if isinstance(node, dict) and node]


def _optional_int(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return None


@dataclass(frozen=True, slots=True)
class PullRequest:
    """Canonical, presentation-ready pull request record."""

    number: int
    title: str
    url: str
    author: str
    repo_name: str
    owner_login: str
    created_at: datetime
    is_draft: bool = False
    labels: Tuple[str, ...] = ()
    activity_summary: str = ""

    @property
    def pr_type(self) -> str:
        if self.author == DEPENDABOT_LOGIN:
            return TYPE_DEPENDABOT
        return TYPE_FEATURE

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "number": self.number,
            "title": self.title,
            "url": self.url,
            "author": self.author,
            "repo": self.repo_name,
            "owner": self.owner_login,
            "createdAt": format_timestamp(self.created_at),
            "isDraft": self.is_draft,
            "labels": list(self.labels),
        }
        if self.activity_summary:
            data["activity"] = self.activity_summary
        return data


@dataclass(frozen=True, slots=True)
class ReviewEvent:
    """A submitted review on a pull request."""

    author_login: str
    submitted_at: str


@dataclass(frozen=True, slots=True)
class SearchNode:
    """Fields every PR search query selects.

    ``number``, ``title`` and ``url`` stay optional here; completeness is
    judged by the normalizer so one bad node cannot fail a whole batch.
    """

    number: Optional[int] = None
    title: Optional[str] = None
    url: Optional[str] = None
    is_draft: bool = False
    created_at: str = ""
    author_login: str = ""
    repo_name: str = ""
    owner_login: str = ""
    labels: Tuple[str, ...] = ()

    @staticmethod
    def _common_fields(payload: Dict[str, Any]) -> Dict[str, Any]:
        repository = _mapping(payload.get("repository"))
        return {
            "number": _optional_int(payload.get("number")),
            "title": _text(payload.get("title")),
            "url": _text(payload.get("url")),
            "is_draft": payload.get("isDraft") is True,
            "created_at": _text(payload.get("createdAt")) or "",
            "author_login": _login(payload.get("author")),
            "repo_name": _text(repository.get("name")) or "",
            "owner_login": _login(repository.get("owner")),
            "labels": tuple(
                label["name"] for label in _nodes(payload, "labels") if isinstance(label.get("name"), str)
            ),
        }

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "SearchNode":
        return cls(**cls._common_fields(payload))


@dataclass(frozen=True, slots=True)
class MentionNode(SearchNode):
    """Node shape of the mentions/commenter query."""


@dataclass(frozen=True, slots=True)
class ReviewRequestedNode(SearchNode):
    """Node shape of the review-requested query."""

    requested_reviewers: Tuple[str, ...] = ()

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "ReviewRequestedNode":
        # Team requests carry no login and are skipped.
        reviewers = tuple(
            login
            for login in (_login(request.get("requestedReviewer")) for request in _nodes(payload, "reviewRequests"))
            if login
        )
        return cls(**cls._common_fields(payload), requested_reviewers=reviewers)


@dataclass(frozen=True, slots=True)
class ReviewedNode(SearchNode):
    """Node shape of the reviewed-by-me query, including its event streams."""

    reviews: Tuple[ReviewEvent, ...] = ()
    commit_dates: Tuple[str, ...] = ()
    comment_dates: Tuple[str, ...] = ()

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "ReviewedNode":
        reviews = tuple(
            ReviewEvent(
                author_login=_login(review.get("author")),
                submitted_at=_text(review.get("submittedAt")) or "",
            )
            for review in _nodes(payload, "reviews")
        )
        commit_dates = tuple(
            _text(_mapping(commit.get("commit")).get("committedDate")) or ""
            for commit in _nodes(payload, "commits")
        )
        comment_dates = tuple(_text(comment.get("createdAt")) or "" for comment in _nodes(payload, "comments"))
        return cls(
            **cls._common_fields(payload),
            reviews=reviews,
            commit_dates=commit_dates,
            comment_dates=comment_dates,
        )
