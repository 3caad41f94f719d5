"""Spreadsheet extraction: schedule tabs to sporting events.

## Spreadsheet Layout

Each monthly tab starts with a header row. The first three columns are
required and fixed:

| Date | Time | Sport | Umpire | Scorekeeper | ... |
|------|------|-------|--------|-------------|-----|
| Monday, September 9, 2024 | 1 p.m. | Baseball | Alice | x | ... |

Every column after "Sport" is a role. A cell holding a name assigns that
person to the role; "x" or an empty cell means nobody is assigned.

A separate contact tab maps worker names to emails. A role whose assignee
is not in the contact tab is dropped from the event and counted in the
missing-contact report.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime, tzinfo
from typing import Any

from sports_sync.config import Settings
from sports_sync.errors import HeaderError, RowParseError, TimeParseError
from sports_sync.models.event import SportingEvent
from sports_sync.models.rows import (
    REQUIRED_HEADERS,
    ScheduleRow,
    cell_text,
    is_blank_row,
)
from sports_sync.schedule.contacts import ContactDirectory
from sports_sync.schedule.timeparse import resolve_datetime
from sports_sync.sheets.base import SpreadsheetBackend

logger = logging.getLogger(__name__)


@dataclass
class ExtractionReport:
    """Row-level problems found while extracting events."""

    missing_contacts: Counter[str] = field(default_factory=Counter)
    ragged_rows: list[str] = field(default_factory=list)
    row_errors: list[str] = field(default_factory=list)
    duplicate_keys: list[str] = field(default_factory=list)

    def log_summary(self) -> None:
        """Log the accumulated problems."""
        for name, count in sorted(self.missing_contacts.items()):
            logger.warning(f"No contact info for '{name}' ({count} assignments dropped)")
        if self.ragged_rows:
            logger.warning(
                f"{len(self.ragged_rows)} rows do not match their header width: "
                f"{', '.join(self.ragged_rows)}"
            )
        if self.row_errors:
            logger.warning(f"{len(self.row_errors)} rows skipped due to errors")


def validate_headers(headers: list[str], tab: str) -> None:
    """Ensure the tab starts with the required Date/Time/Sport columns.

    Raises:
        HeaderError: If the required headers are missing or out of order
    """
    found = headers[: len(REQUIRED_HEADERS)]
    if found != REQUIRED_HEADERS:
        raise HeaderError(tab, expected=REQUIRED_HEADERS, found=found)


def build_event(
    row: ScheduleRow,
    role_headers: list[str],
    directory: ContactDirectory,
    tz: tzinfo,
    report: ExtractionReport,
) -> SportingEvent:
    """Build a sporting event from a typed schedule row.

    Raises:
        TimeParseError: If the row's date and time cannot be parsed
    """
    timestamp = resolve_datetime(row.date_text, row.time_text, tz)

    assignments = []
    contacts = set()
    for role, name in row.assignees(role_headers):
        email = directory.lookup(name)
        if email is None:
            report.missing_contacts[name] += 1
            continue
        contacts.add(email)
        assignments.append(f"{role}: {name}")

    return SportingEvent(
        timestamp=timestamp,
        category=row.category,
        assignments=assignments,
        contacts=contacts,
    )


def parse_schedule_rows(
    rows: list[list[Any]],
    tab: str,
    directory: ContactDirectory,
    tz: tzinfo,
    report: ExtractionReport | None = None,
) -> list[SportingEvent]:
    """Convert the raw rows of one schedule tab into events.

    Args:
        rows: All rows of the tab, header row first
        tab: Tab name, for error reporting
        directory: Name to email lookup
        tz: Civil time zone of the schedule
        report: Report to accumulate row-level problems into

    Returns:
        Events in sheet order

    Raises:
        HeaderError: If the header row is missing or malformed
    """
    if report is None:
        report = ExtractionReport()

    if not rows:
        raise HeaderError(tab, expected=REQUIRED_HEADERS, found=[])

    headers = [cell_text(value) for value in rows[0]]
    validate_headers(headers, tab)
    role_headers = headers[len(REQUIRED_HEADERS):]

    events = []
    for offset, raw in enumerate(rows[1:]):
        row_number = offset + 2
        location = f"{tab}!{row_number}"

        # Some rows are left blank between games.
        if is_blank_row(raw):
            continue

        if len(raw) != len(headers):
            logger.debug(
                f"Row {location} has {len(raw)} cells, header has {len(headers)}"
            )
            report.ragged_rows.append(location)

        try:
            row = ScheduleRow.from_cells(raw, row_number)
            event = build_event(row, role_headers, directory, tz, report)
        except (RowParseError, TimeParseError) as e:
            logger.warning(f"Skipping row {location}: {e}")
            report.row_errors.append(f"{location}: {e}")
            continue

        events.append(event)

    return events


class ScheduleExtractor:
    """Reads every configured schedule tab from the spreadsheet.

    Example:
        ```python
        extractor = ScheduleExtractor(sheets_client, settings)
        events = extractor.get_future_events(now)
        ```
    """

    def __init__(self, backend: SpreadsheetBackend, settings: Settings):
        self.backend = backend
        self.settings = settings
        self.report = ExtractionReport()

    def load_contact_directory(self) -> ContactDirectory:
        """Read the contact tab into a name to email lookup.

        Raises:
            BackendError: If the contact range cannot be read
        """
        rows = self.backend.list_rows(
            self.settings.spreadsheet_id, self.settings.contacts_range
        )
        directory = ContactDirectory.from_rows(
            rows, organization_domain=self.settings.organization_domain
        )
        logger.info(f"Loaded {len(directory)} contact names")
        return directory

    def load_tab(self, tab: str, directory: ContactDirectory) -> list[SportingEvent]:
        """Read and parse a single schedule tab.

        Raises:
            BackendError: If the tab cannot be read
            HeaderError: If the tab headers are malformed
        """
        range_spec = f"{tab}!{self.settings.schedule_columns}"
        rows = self.backend.list_rows(self.settings.spreadsheet_id, range_spec)
        events = parse_schedule_rows(rows, tab, directory, self.settings.tz, self.report)
        logger.debug(f"Tab {tab}: {len(events)} events")
        return events

    def get_future_events(self, now: datetime) -> dict[str, SportingEvent]:
        """Get all events starting strictly after `now`, keyed by identity key.

        Args:
            now: Reference instant shared with the calendar side

        Raises:
            BackendError: If any range cannot be read
            HeaderError: If any tab headers are malformed
        """
        directory = self.load_contact_directory()

        events: dict[str, SportingEvent] = {}
        for tab in self.settings.schedule_tabs:
            for event in self.load_tab(tab, directory):
                if event.timestamp <= now:
                    continue
                if event.key in events:
                    logger.warning(f"Duplicate schedule entry for {event.key}; using the later row")
                    self.report.duplicate_keys.append(event.key)
                events[event.key] = event

        self.report.log_summary()
        logger.info(f"Found {len(events)} future events in the spreadsheet")
        return events
