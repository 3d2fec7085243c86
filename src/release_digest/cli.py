"""Command-line entry point for rendering a release digest.

Usage:
    release-digest --input releases.json
    cat releases.json | release-digest --days 14
    release-digest -i releases.json --head 2020-04-24T00:00:00Z --no-filter

The input is the JSON list returned by a release-listing API (or an object
wrapping that list under "data"). The digest is printed to stdout; logs go
to stderr.
"""

from __future__ import annotations

import argparse
import json
import sys
from collections.abc import Sequence
from datetime import datetime, timezone
from typing import Any

from release_digest.config import load_config
from release_digest.formatter import markdown_releases
from release_digest.logging_config import get_logger, setup_logging
from release_digest.schemas import partition_releases
from release_digest.window import DigestWindow, filter_releases

logger = get_logger(__name__)


def _parse_instant(value: str) -> datetime:
    try:
        return datetime.fromisoformat(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"not an ISO-8601 timestamp: {value!r}") from exc


def _positive_days(value: str) -> int:
    try:
        days = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"not a whole number of days: {value!r}") from exc
    if days < 1:
        raise argparse.ArgumentTypeError(f"days must be at least 1, got {days}")
    return days


def _unwrap(document: Any) -> Any:
    if isinstance(document, dict) and "data" in document:
        return document["data"]
    return document


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="release-digest",
        description="Render the weekly RELEASES Markdown digest",
    )
    parser.add_argument(
        "--input", "-i",
        type=str,
        help="Path to JSON file with release data (reads stdin if omitted)",
    )
    parser.add_argument(
        "--config", "-c",
        type=str,
        help="Path to YAML config (defaults to $RELEASE_DIGEST_CONFIG)",
    )
    parser.add_argument(
        "--head",
        type=_parse_instant,
        help="End of the reporting window, ISO-8601 (default: now, UTC)",
    )
    parser.add_argument(
        "--days",
        type=_positive_days,
        help="Length of the reporting window in days (overrides config)",
    )
    parser.add_argument(
        "--no-filter",
        action="store_true",
        help="Include every release in the input regardless of its date",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Read releases, build the window, print the digest."""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging()
    config = load_config(args.config)

    if not args.input and sys.stdin.isatty():
        parser.print_usage()
        print("Provide --input FILE or pipe JSON via stdin.")
        return 0

    if args.input:
        with open(args.input) as f:
            document = json.load(f)
    else:
        document = json.load(sys.stdin)

    releases = _unwrap(document)
    days = args.days if args.days is not None else config.lookback_days
    window = DigestWindow.ending_at(args.head or datetime.now(timezone.utc), days)
    logger.info(
        "digest_started",
        source=args.input or "<stdin>",
        head_date=window.head_date.isoformat(),
        tail_date=window.tail_date.isoformat(),
    )

    records, rejections = partition_releases(releases)
    for rejection in rejections:
        logger.debug("records_rejected", index=rejection.index, reason=rejection.reason)

    if config.filter_window and not args.no_filter:
        in_window = filter_releases(records, window)
        logger.info(
            "window_applied",
            candidates=len(records),
            kept=len(in_window),
        )
        records = in_window

    digest = markdown_releases(records, window.head_date, window.tail_date)
    logger.info(
        "digest_rendered",
        release_count=len(records),
        rejected_count=len(rejections),
    )
    print(digest)
    return 0


if __name__ == "__main__":
    sys.exit(main())
