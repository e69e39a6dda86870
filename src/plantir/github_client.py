"""GitHub REST/GraphQL client for pull request search queries."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Type, TypeVar

import requests

from .config import Config
from .errors import FetchError, IdentityLookupError, ResponseParseError
from .models import MentionNode, ReviewedNode, ReviewRequestedNode, SearchNode

logger = logging.getLogger(__name__)

NodeT = TypeVar("NodeT", bound=SearchNode)

_PR_FIELDS = """
        number
        title
        url
        isDraft
        createdAt
        author { login }
        repository {
          name
          owner { login }
        }
        labels(first: 10) {
          nodes { name }
        }
"""

REVIEW_REQUESTED_QUERY = (
    """
query {
  search(query: "is:pr is:open review-requested:@me", type: ISSUE, first: 100) {
    nodes {
      ... on PullRequest {"""
    + _PR_FIELDS
    + """        reviewRequests(first: 20) {
          nodes {
            requestedReviewer {
              ... on User { login }
            }
          }
        }
      }
    }
  }
}
"""
)

REVIEWED_QUERY = (
    """
query {
  search(query: "is:pr is:open reviewed-by:@me -review-requested:@me -author:@me", type: ISSUE, first: 100) {
    nodes {
      ... on PullRequest {"""
    + _PR_FIELDS
    + """        reviews(last: 100) {
          nodes {
            author { login }
            submittedAt
          }
        }
        commits(last: 100) {
          nodes {
            commit { committedDate }
          }
        }
        comments(last: 100) {
          nodes { createdAt }
        }
      }
    }
  }
}
"""
)

MENTIONS_QUERY = (
    """
query {
  search(query: "is:pr is:open (mentions:@me OR commenter:@me) -author:@me", type: ISSUE, first: 100) {
    nodes {
      ... on PullRequest {"""
    + _PR_FIELDS
    + """      }
    }
  }
}
"""
)


class GitHubClient:
    """Small, typed client for the GitHub search queries plantir needs.

    Every request is attempted exactly once; failures surface as ``ApiError``
    subclasses naming the stage that failed.
    """

    def __init__(self, config: Config) -> None:
        """Initialize an authenticated GitHub API client.

        Args:
            config: Validated runtime configuration including token and API URL.
        """
        self._config = config
        self._timeout_seconds = config.timeout_seconds
        self._base_url = config.api_url

        self._session = requests.Session()
        self._session.headers.update(
            {
                "Accept": "application/json",
                "Authorization": f"Bearer {config.token}",
            }
        )

    def _build_url(self, path: str) -> str:
        return f"{self._base_url}/{path.lstrip('/')}"

    def _decode_json(self, response: requests.Response, label: str) -> Dict[str, Any]:
        try:
            payload = response.json()
        except ValueError as exc:
            raise ResponseParseError(f"GitHub API returned invalid JSON: {label}") from exc

        if not isinstance(payload, dict):
            raise ResponseParseError(f"GitHub API returned unexpected payload shape: {label}")
        return payload

    def get_current_user(self) -> str:
        """Return the login of the authenticated user.

        Raises:
            IdentityLookupError: If the request fails or the response carries no login.
        """
        url = self._build_url("user")
        try:
            response = self._session.get(url, timeout=self._timeout_seconds)
        except requests.RequestException as exc:
            raise IdentityLookupError(f"Failed to get current user: GET {url}") from exc

        if response.status_code >= 400:
            raise IdentityLookupError(
                f"Failed to get current user: GET {url} returned {response.status_code} - {response.text}"
            )

        try:
            payload = self._decode_json(response, f"GET {url}")
        except ResponseParseError as exc:
            raise IdentityLookupError(f"Failed to get current user: {exc}") from exc

        login = str(payload.get("login") or "").strip()
        if not login:
            raise IdentityLookupError(f"Failed to get current user: GET {url} returned no login")
        return login

    def _post_graphql(self, query: str) -> Dict[str, Any]:
        """Execute one GraphQL query and return its ``data`` object.

        Raises:
            FetchError: If the transport fails, returns HTTP >= 400, or the
                response reports GraphQL errors without data.
            ResponseParseError: If the body is not a JSON object.
        """
        url = self._build_url("graphql")
        try:
            response = self._session.post(url, json={"query": query}, timeout=self._timeout_seconds)
        except requests.RequestException as exc:
            raise FetchError(f"GitHub API request failed: POST {url}") from exc

        if response.status_code >= 400:
            raise FetchError(
                f"GitHub API request failed: POST {url} returned {response.status_code} - {response.text}"
            )

        payload = self._decode_json(response, f"POST {url}")

        data = payload.get("data")
        errors = payload.get("errors")
        if errors and not data:
            messages = "; ".join(str((error or {}).get("message") or error) for error in errors)
            raise FetchError(f"GitHub GraphQL query failed: {messages}")
        if errors:
            logger.warning("GitHub GraphQL returned partial errors", extra={"errors": errors})

        if not isinstance(data, dict):
            raise ResponseParseError(f"GitHub API response is missing 'data': POST {url}")
        return data

    def _search(self, query: str, node_type: Type[NodeT]) -> List[NodeT]:
        data = self._post_graphql(query)
        nodes: Optional[Any] = (data.get("search") or {}).get("nodes")
        if not isinstance(nodes, list):
            raise ResponseParseError("GitHub API response is missing 'data.search.nodes'")

        # Search results that are not pull requests come back as empty objects.
        decoded = [node_type.from_payload(node) for node in nodes if isinstance(node, dict) and node]

        logger.info(
            "Fetched search results",
            extra={"node_type": node_type.__name__, "nodes": len(decoded)},
        )
        return decoded

    def search_review_requested(self) -> List[ReviewRequestedNode]:
        """List open PRs where review from the current user is requested."""
        return self._search(REVIEW_REQUESTED_QUERY, ReviewRequestedNode)

    def search_reviewed(self) -> List[ReviewedNode]:
        """List open PRs the current user has reviewed and is no longer requested on."""
        return self._search(REVIEWED_QUERY, ReviewedNode)

    def search_mentions(self) -> List[MentionNode]:
        """List open PRs that mention the current user or that they commented on."""
        return self._search(MENTIONS_QUERY, MentionNode)
