"""Configuration parsing and validation for plantir."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum

from .errors import AuthenticationError, ConfigurationError
from .filters import FilterOptions

DEFAULT_API_URL = "https://api.github.com"
DEFAULT_LIMIT = 20
_TOKEN_ENV_VARS = ("GITHUB_TOKEN", "GH_TOKEN")


class OutputMode(str, Enum):
    """How the final PR listing is presented."""

    TABLE = "table"
    JSON = "json"


class QueryScope(str, Enum):
    """Which query classes feed the listing."""

    ALL = "all"
    PENDING = "pending"
    REVIEWED = "reviewed"
    MENTIONS = "mentions"


@dataclass(frozen=True)
class Config:
    """Validated runtime settings used by the aggregation engine."""

    token: str
    repo: str = ""
    pr_type: str = ""
    stale_days: int = 0
    limit: int = DEFAULT_LIMIT
    output_mode: OutputMode = OutputMode.TABLE
    scope: QueryScope = QueryScope.ALL
    api_url: str = DEFAULT_API_URL
    timeout_seconds: int = 30

    @property
    def filter_options(self) -> FilterOptions:
        return FilterOptions(repo=self.repo, pr_type=self.pr_type, stale_days=self.stale_days)


def _read_token() -> str:
    for name in _TOKEN_ENV_VARS:
        value = os.getenv(name, "").strip()
        if value:
            return value
    return ""


def load_config(
    repo: str = "",
    pr_type: str = "",
    stale_days: int = 0,
    limit: int = DEFAULT_LIMIT,
    as_json: bool = False,
    scope: QueryScope = QueryScope.ALL,
) -> Config:
    """Build and validate application configuration.

    Args:
        repo: Exact repository name to keep; empty keeps all repositories.
        pr_type: PR classification to keep (``feature`` or ``dependabot``);
            empty keeps all types.
        stale_days: Only keep PRs at least this many days old; ``<= 0`` disables.
        limit: Maximum number of PRs to display; ``<= 0`` means unlimited.
        as_json: Render JSON instead of a table.
        scope: Query classes to fetch.

    Returns:
        A validated ``Config`` instance.

    Raises:
        ConfigurationError: If ``scope`` is not a known query scope.
        AuthenticationError: If neither ``GITHUB_TOKEN`` nor ``GH_TOKEN`` is set.
    """
    try:
        scope = QueryScope(scope)
    except ValueError as exc:
        raise ConfigurationError(f"Invalid value for 'scope': {scope!r}.") from exc

    token = _read_token()
    if not token:
        raise AuthenticationError(
            "Missing required GitHub token. "
            "Set the 'GITHUB_TOKEN' or 'GH_TOKEN' environment variable before running plantir."
        )

    api_url = os.getenv("GITHUB_API_URL", "").strip() or DEFAULT_API_URL

    return Config(
        token=token,
        repo=repo.strip(),
        pr_type=pr_type.strip(),
        stale_days=stale_days,
        limit=limit,
        output_mode=OutputMode.JSON if as_json else OutputMode.TABLE,
        scope=scope,
        api_url=api_url.rstrip("/"),
    )
