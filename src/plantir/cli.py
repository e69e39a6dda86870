"""Command-line argument parsing for plantir."""

from __future__ import annotations

import argparse
from typing import Optional, Sequence

from .config import DEFAULT_LIMIT, QueryScope


def _positive_int(value: str) -> int:
    """Parse and validate a positive integer CLI value.

    Args:
        value: Raw command-line argument value.

    Returns:
        The validated positive integer.

    Raises:
        argparse.ArgumentTypeError: If value is not a positive integer.
    """
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"'{value}' is not a valid PR number") from exc

    if parsed <= 0:
        raise argparse.ArgumentTypeError("must be greater than 0")

    return parsed


def _scope_from_args(args: argparse.Namespace) -> QueryScope:
    if getattr(args, "pending", False):
        return QueryScope.PENDING
    if getattr(args, "reviewed", False):
        return QueryScope.REVIEWED
    if getattr(args, "mentions", False):
        return QueryScope.MENTIONS
    return QueryScope.ALL


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="plantir",
        description="List open pull requests waiting for your review or changed since you reviewed them.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    list_parser = subparsers.add_parser(
        "list",
        help="List PRs related to your reviews.",
        description="Fetches all open pull requests where you are requested as reviewer or have reviewed.",
    )
    list_parser.add_argument("-r", "--repo", default="", help="Filter by repository name.")
    list_parser.add_argument(
        "-t",
        "--type",
        dest="pr_type",
        default="",
        help="Filter by PR type (feature, dependabot).",
    )
    list_parser.add_argument("--json", dest="as_json", action="store_true", help="Output as JSON.")
    list_parser.add_argument(
        "-n",
        "--limit",
        type=int,
        default=DEFAULT_LIMIT,
        help=f"Maximum number of PRs to show, 0 for unlimited (default: {DEFAULT_LIMIT}).",
    )
    list_parser.add_argument(
        "-s",
        "--stale",
        dest="stale_days",
        type=int,
        default=0,
        help="Only show PRs older than N days.",
    )
    scope_group = list_parser.add_mutually_exclusive_group()
    scope_group.add_argument(
        "-p",
        "--pending",
        action="store_true",
        help="Show only PRs waiting for your review.",
    )
    scope_group.add_argument(
        "--reviewed",
        action="store_true",
        help="Show only PRs you've already reviewed.",
    )
    scope_group.add_argument(
        "--mentions",
        action="store_true",
        help="Show only PRs that mention you or that you commented on.",
    )

    open_parser = subparsers.add_parser(
        "open",
        help="Open a PR in your browser.",
        description="Opens the specified pull request in your default browser.",
    )
    open_parser.add_argument("number", type=_positive_int, metavar="PR_NUMBER", help="Pull request number.")

    return parser


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Parsed CLI arguments. ``list`` invocations also carry a derived
        ``scope`` attribute.
    """
    args = build_parser().parse_args(argv)
    args.scope = _scope_from_args(args)
    return args
