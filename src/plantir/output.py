"""Table and JSON presentation of PR listings.

This module provides utilities for:
- Formatting PR age relative to now as ``Nd``, ``Nh`` or ``Nm``.
- Building a Rich table for a PR listing, with an Activity column only when
  some PR carries post-review activity.
- Rendering a listing as an indented JSON array.
- Printing the scope-specific header, count line and empty-state message.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from .config import OutputMode, QueryScope
from .filters import ListingResult
from .models import PullRequest

MAX_TITLE_LENGTH = 45

HEADER_MESSAGES: Dict[QueryScope, str] = {
    QueryScope.ALL: "🔮 All PRs (pending + reviewed)...",
    QueryScope.PENDING: "🔍 PRs waiting for your review...",
    QueryScope.REVIEWED: "👀 PRs you've reviewed...",
    QueryScope.MENTIONS: "💬 PRs mentioning you...",
}

EMPTY_MESSAGES: Dict[QueryScope, str] = {
    QueryScope.ALL: "✨ No PRs related to you!",
    QueryScope.PENDING: "✨ No PRs waiting for your review!",
    QueryScope.REVIEWED: "✨ No PRs you've reviewed!",
    QueryScope.MENTIONS: "✨ No PRs mentioning you!",
}


def format_age(created_at: datetime, now: Optional[datetime] = None) -> str:
    """Format time since ``created_at`` as whole days, hours or minutes."""
    elapsed = (now or datetime.now(timezone.utc)) - created_at
    hours = elapsed.total_seconds() / 3600

    if hours >= 24:
        return f"{int(hours // 24)}d"
    if hours >= 1:
        return f"{int(hours)}h"
    return f"{int(elapsed.total_seconds() // 60)}m"


def truncate_title(title: str) -> str:
    if len(title) > MAX_TITLE_LENGTH:
        return title[: MAX_TITLE_LENGTH - 3] + "..."
    return title


def build_pr_table(prs: Sequence[PullRequest], now: Optional[datetime] = None) -> Table:
    """Build a Rich table for a PR listing."""
    has_activity = any(pr.activity_summary for pr in prs)

    table = Table(
        box=box.MINIMAL_HEAVY_HEAD,
        header_style="bold white",
        border_style="grey50",
        show_header=True,
        pad_edge=False,
    )
    table.add_column("Repo", style="cyan")
    table.add_column("PR#", style="cyan", justify="right")
    table.add_column("Title", style="green")
    table.add_column("Author", style="yellow")
    table.add_column("Age", style="magenta", justify="right")
    table.add_column("Type", style="white")
    if has_activity:
        table.add_column("Activity", style="bold blue")

    for pr in prs:
        row = [
            pr.repo_name,
            f"#{pr.number}",
            truncate_title(pr.title),
            pr.author,
            format_age(pr.created_at, now=now),
            pr.pr_type,
        ]
        if has_activity:
            row.append(pr.activity_summary or "-")
        # Text cells are not parsed as Rich markup.
        table.add_row(*(Text(value) for value in row))

    return table


def render_json(prs: Sequence[PullRequest]) -> str:
    """Render PRs as an indented JSON array."""
    records: List[dict] = [pr.to_dict() for pr in prs]
    return json.dumps(records, indent=2, ensure_ascii=False)


def print_listing(
    result: ListingResult,
    scope: QueryScope,
    output_mode: OutputMode,
    console: Optional[Console] = None,
) -> None:
    """Print a ranked listing in the requested output mode."""
    console = console or Console()

    if output_mode == OutputMode.JSON:
        # Plain print keeps JSON free of Rich markup and wrapping.
        print(render_json(result.prs))
        return

    if result.total == 0:
        console.print(EMPTY_MESSAGES[scope])
        return

    console.print(HEADER_MESSAGES[scope])
    if result.truncated:
        console.print(
            f"\nShowing {len(result.prs)} of {result.total} PRs (use --limit to see more):\n",
            markup=False,
        )
    else:
        console.print(f"\nFound {result.total} PRs:\n")
    console.print(build_pr_table(result.prs))
