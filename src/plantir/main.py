"""Entry point orchestrating fetch, reconciliation, ranking and presentation."""

from __future__ import annotations

import logging
import sys
import webbrowser
from argparse import Namespace
from typing import Optional, Sequence

from .aggregate import fetch_all, fetch_for_scope, find_by_number
from .cli import parse_args
from .config import Config, load_config
from .errors import (
    AuthenticationError,
    ConfigurationError,
    FetchError,
    IdentityLookupError,
    ResponseParseError,
)
from .filters import rank
from .github_client import GitHubClient
from .output import print_listing

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_UNEXPECTED = 1
EXIT_CONFIG = 2
EXIT_AUTH = 3
EXIT_IDENTITY = 4
EXIT_FETCH = 5
EXIT_PARSE = 6


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def run_list(config: Config) -> int:
    client = GitHubClient(config=config)
    prs = fetch_for_scope(client, config.scope)
    result = rank(prs, config.filter_options, config.limit)

    logger.info(
        "Ranked PR listing",
        extra={"fetched": len(prs), "matched": result.total, "shown": len(result.prs)},
    )
    print_listing(result, scope=config.scope, output_mode=config.output_mode)
    return EXIT_OK


def run_open(config: Config, number: int) -> int:
    client = GitHubClient(config=config)
    pr = find_by_number(fetch_all(client), number)
    if pr is None:
        print(f"PR #{number} not found in your PRs")
        return EXIT_UNEXPECTED

    print(f"Opening {pr.repo_name}#{pr.number} in browser...")
    webbrowser.open(pr.url)
    return EXIT_OK


def _load_config_from_args(args: Namespace) -> Config:
    if args.command == "list":
        return load_config(
            repo=args.repo,
            pr_type=args.pr_type,
            stale_days=args.stale_days,
            limit=args.limit,
            as_json=args.as_json,
            scope=args.scope,
        )
    return load_config()


def run(argv: Optional[Sequence[str]] = None) -> int:
    """Run one plantir command and map failures to exit codes.

    Each failure prints a single message naming the failing stage; no listing
    is printed once a stage fails.
    """
    try:
        args = parse_args(argv)
        configure_logging(args.verbose)
        config = _load_config_from_args(args)

        if args.command == "open":
            return run_open(config, args.number)
        return run_list(config)
    except ConfigurationError as exc:
        print(f"Error: invalid configuration: {exc}", file=sys.stderr)
        return EXIT_CONFIG
    except AuthenticationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_AUTH
    except IdentityLookupError as exc:
        print(f"Error: identity lookup failed: {exc}", file=sys.stderr)
        return EXIT_IDENTITY
    except ResponseParseError as exc:
        print(f"Error: failed to parse response: {exc}", file=sys.stderr)
        return EXIT_PARSE
    except FetchError as exc:
        print(f"Error: fetch failed: {exc}", file=sys.stderr)
        return EXIT_FETCH
    except Exception as exc:
        logger.exception("Unexpected error")
        print(f"Error: unexpected failure: {exc}", file=sys.stderr)
        return EXIT_UNEXPECTED


def main() -> None:
    sys.exit(run())


if __name__ == "__main__":
    main()
