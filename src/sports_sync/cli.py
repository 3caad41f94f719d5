"""Command-line interface for sports schedule sync."""

import argparse
import logging
import sys

from sports_sync import __version__
from sports_sync.auth.google import load_credentials
from sports_sync.calendar.google_calendar import GoogleCalendarClient
from sports_sync.config import load_settings
from sports_sync.errors import SyncError
from sports_sync.runner import run_sync
from sports_sync.sheets.google_sheets import GoogleSheetsClient

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sports-sync",
        description="Sports Schedule Sync - Keep a Google Calendar in step with the schedule spreadsheet",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    sync_parser = subparsers.add_parser(
        "sync", help="Reconcile the calendar with the spreadsheet"
    )
    sync_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show planned changes without modifying the calendar",
    )
    sync_parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Override the configured log level",
    )

    return parser


def sync_command(args: argparse.Namespace) -> int:
    overrides = {"log_level": args.log_level} if args.log_level else {}
    try:
        settings = load_settings(**overrides)
    except SyncError as e:
        logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
        logger.error(str(e))
        return 1

    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)

    try:
        credentials = load_credentials(settings)
        sheets = GoogleSheetsClient(credentials, settings.read_retry_attempts)
        calendar = GoogleCalendarClient(credentials, settings.read_retry_attempts)
        result = run_sync(settings, sheets, calendar, dry_run=args.dry_run)
    except SyncError as e:
        logger.error(f"Sync aborted, nothing was written: {e}")
        return 1

    # Per-operation failures are reported in the summary, not the exit status.
    print(result.summary())
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    if args.command == "sync":
        return sync_command(args)

    parser.error(f"Unknown command: {args.command}")
    return 2


if __name__ == "__main__":
    sys.exit(main())
