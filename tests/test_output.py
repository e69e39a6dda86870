"""Tests for listing presentation."""

import json
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

from rich.console import Console

# Add src directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from plantir.config import OutputMode, QueryScope
from plantir.filters import ListingResult
from plantir.models import PullRequest
from plantir.output import build_pr_table, format_age, print_listing, render_json, truncate_title

NOW = datetime(2026, 3, 31, 12, 0, tzinfo=timezone.utc)


def _make_pr(number: int = 1, activity: str = "", title: str = "Short title") -> PullRequest:
    return PullRequest(
        number=number,
        title=title,
        url=f"https://github.com/acme/api/pull/{number}",
        author="alice",
        repo_name="api",
        owner_login="acme",
        created_at=datetime(2026, 3, 1, 8, 30, tzinfo=timezone.utc),
        labels=("bug",),
        activity_summary=activity,
    )


def _console() -> Console:
    return Console(width=200, record=True, force_terminal=False, color_system=None)


def test_format_age_units():
    """Verify age formatting in days, hours and minutes."""
    assert format_age(NOW - timedelta(days=3, hours=5), now=NOW) == "3d"
    assert format_age(NOW - timedelta(hours=5, minutes=59), now=NOW) == "5h"
    assert format_age(NOW - timedelta(minutes=42), now=NOW) == "42m"


def test_truncate_title():
    """Verify long titles are cut to 42 characters plus an ellipsis."""
    long_title = "x" * 46

    assert truncate_title("x" * 45) == "x" * 45
    assert truncate_title(long_title) == "x" * 42 + "..."


def test_build_pr_table_adds_activity_column_only_when_needed():
    """Verify the Activity column appears only with activity present."""
    plain = build_pr_table([_make_pr(1)], now=NOW)
    annotated = build_pr_table([_make_pr(1), _make_pr(2, activity="2 comments")], now=NOW)

    assert [column.header for column in plain.columns] == ["Repo", "PR#", "Title", "Author", "Age", "Type"]
    assert annotated.columns[-1].header == "Activity"
    assert annotated.row_count == 2


def test_render_json_omits_empty_activity():
    """Verify JSON output uses the documented keys and omits empty activity."""
    records = json.loads(render_json([_make_pr(1), _make_pr(2, activity="1 commits")]))

    assert records[0] == {
        "number": 1,
        "title": "Short title",
        "url": "https://github.com/acme/api/pull/1",
        "author": "alice",
        "repo": "api",
        "owner": "acme",
        "createdAt": "2026-03-01T08:30:00Z",
        "isDraft": False,
        "labels": ["bug"],
    }
    assert records[1]["activity"] == "1 commits"


def test_print_listing_json_empty_prints_empty_array(capsys):
    """Verify an empty JSON listing prints []."""
    print_listing(ListingResult(prs=[], total=0, truncated=False), QueryScope.ALL, OutputMode.JSON)

    assert capsys.readouterr().out.strip() == "[]"


def test_print_listing_table_empty_prints_scope_message():
    """Verify an empty table listing prints the scope-specific message."""
    console = _console()

    print_listing(ListingResult(prs=[], total=0, truncated=False), QueryScope.PENDING, OutputMode.TABLE, console)

    assert "No PRs waiting for your review!" in console.export_text()


def test_print_listing_table_reports_truncation():
    """Verify truncated listings report shown and total counts."""
    console = _console()
    result = ListingResult(prs=[_make_pr(1, title="[WIP] Add parser")], total=4, truncated=True)

    print_listing(result, QueryScope.ALL, OutputMode.TABLE, console)

    text = console.export_text()
    assert "All PRs (pending + reviewed)" in text
    assert "Showing 1 of 4 PRs (use --limit to see more):" in text
    assert "[WIP] Add parser" in text
    assert "#1" in text


def test_print_listing_table_reports_found_count():
    """Verify untruncated listings report the total found."""
    console = _console()

    print_listing(
        ListingResult(prs=[_make_pr(1), _make_pr(2)], total=2, truncated=False),
        QueryScope.REVIEWED,
        OutputMode.TABLE,
        console,
    )

    assert "Found 2 PRs:" in console.export_text()
