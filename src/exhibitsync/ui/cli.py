from __future__ import annotations

import argparse
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from exhibitsync.app import add_venue, list_venues, scrape_exhibition_feed, scrape_exhibitions
from exhibitsync.config import configure_logging
from exhibitsync.config.reconciliation import DEFAULT_GROUP_SIZE, get_reconciliation_config

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from exhibitsync.app import ScrapeSummary

log = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Invalid integer: {value}") from exc
    if parsed < 1:
        raise argparse.ArgumentTypeError(f"Must be at least 1: {value}")
    return parsed


def _add_group_size(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--group-size",
        type=_positive_int,
        default=None,
        help=f"Records reconciled per transaction (default: {DEFAULT_GROUP_SIZE})",
    )


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Synchronise scraped exhibitions")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    scrape = subparsers.add_parser("scrape", help="Scrape the pages of enabled venues")
    _add_group_size(scrape)

    feed = subparsers.add_parser("scrape-feed", help="Scrape the exhibition aggregator feed")
    _add_group_size(feed)

    venue = subparsers.add_parser("venue", help="Venue registry commands")
    venue_sub = venue.add_subparsers(dest="venue_command", required=True)
    venue_add = venue_sub.add_parser("add", help="Register a venue")
    venue_add.add_argument("--id", dest="venue_id", required=True, help="Museum id")
    venue_add.add_argument("--name", required=True, help="Canonical venue name")
    venue_add.add_argument(
        "--alias",
        dest="aliases",
        action="append",
        default=[],
        help="Alternative name the extractor may emit (repeatable)",
    )
    venue_add.add_argument("--scrape-url", help="Exhibition listing page to scrape")
    venue_add.add_argument(
        "--scrape-enabled",
        action="store_true",
        help="Include the venue in scrape runs",
    )
    venue_add.add_argument("--official-url", help="Venue website")
    venue_add.add_argument("--address", help="Postal address")
    venue_add.add_argument("--area", help="Area or ward")

    venue_list = venue_sub.add_parser("list", help="List registered venues")
    venue_list.add_argument(
        "--scrape-enabled",
        action="store_true",
        default=None,
        help="Only list venues included in scrape runs",
    )

    return parser.parse_args(list(argv))


def _log_summary(label: str, summary: ScrapeSummary) -> None:
    log.info(
        "%s finished: total=%s, created=%s, updated=%s, skipped=%s, errors=%s",
        label,
        summary.total,
        summary.created,
        summary.updated,
        summary.skipped,
        summary.errors,
    )


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)
    try:
        if parsed_args.command in {"scrape", "scrape-feed"}:
            get_reconciliation_config(group_size=parsed_args.group_size)
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        if parsed_args.command == "scrape":
            _log_summary("Scrape", scrape_exhibitions(group_size=parsed_args.group_size))
        elif parsed_args.command == "scrape-feed":
            _log_summary(
                "Feed scrape", scrape_exhibition_feed(group_size=parsed_args.group_size)
            )
        elif parsed_args.command == "venue" and parsed_args.venue_command == "add":
            venue = add_venue(
                venue_id=parsed_args.venue_id,
                name=parsed_args.name,
                aliases=parsed_args.aliases,
                scrape_url=parsed_args.scrape_url,
                scrape_enabled=parsed_args.scrape_enabled,
                official_url=parsed_args.official_url,
                address=parsed_args.address,
                area=parsed_args.area,
            )
            log.info("Registered venue %s", venue.id)
        elif parsed_args.command == "venue" and parsed_args.venue_command == "list":
            for venue in list_venues(scrape_enabled=parsed_args.scrape_enabled):
                aliases = ", ".join(venue.aliases) or "-"
                log.info(
                    "%s %s (aliases: %s, scrape: %s)",
                    venue.id,
                    venue.name,
                    aliases,
                    "on" if venue.scrape_enabled else "off",
                )
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301

    except Exception:
        log.exception("Fatal error during exhibition sync")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    """Console script entry point."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
