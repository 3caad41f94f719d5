"""Conversion between calendar entries and sporting events.

Only entries whose description contains the automation marker are managed by
this tool. Every other entry on the calendar is foreign and is never read
into the sync, updated or deleted.

The entry body written for an event is the exact inverse of what is read
back: assignments become description lines followed by the marker, so an
unchanged event compares equal on the next run.
"""

from __future__ import annotations

import logging
from datetime import datetime, tzinfo
from typing import Any

from sports_sync.calendar.base import CalendarBackend, CalendarEntry
from sports_sync.calendar.locations import get_sport_location
from sports_sync.config import Settings
from sports_sync.errors import EntryParseError
from sports_sync.models.event import SportingEvent

logger = logging.getLogger(__name__)

# Description lines this short are stray blank lines, not assignments.
MIN_ASSIGNMENT_LENGTH = 3


def is_managed_entry(entry: CalendarEntry, marker: str) -> bool:
    """Check if an entry was created by this tool."""
    return marker.strip() in entry.description


def entry_to_event(entry: CalendarEntry, tz: tzinfo, marker: str) -> SportingEvent:
    """Rebuild the sporting event an entry was created from.

    Args:
        entry: A managed calendar entry
        tz: Civil time zone to normalize the start time to
        marker: Automation marker to strip from the description

    Raises:
        EntryParseError: If the entry has no start time (all-day entry)
    """
    if entry.is_all_day:
        raise EntryParseError(entry.id, "all-day entry has no start time")
    if entry.start is None:
        raise EntryParseError(entry.id, "entry has no start time")

    description = entry.description.replace(marker.strip(), "")
    assignments = [
        line.strip()
        for line in description.split("\n")
        if len(line.strip()) >= MIN_ASSIGNMENT_LENGTH
    ]

    return SportingEvent(
        timestamp=entry.start.astimezone(tz),
        category=entry.summary,
        assignments=assignments,
        contacts=set(entry.attendees),
    )


def event_to_entry_body(event: SportingEvent, settings: Settings) -> dict[str, Any]:
    """Build the full calendar entry body for an event."""
    description = "".join(f"{line}\n" for line in event.assignments)
    description += settings.automation_marker

    start = event.timestamp.astimezone(settings.tz)
    end = start + settings.event_duration

    body: dict[str, Any] = {
        "summary": event.category,
        "location": get_sport_location(event.category, settings.location_overrides),
        "description": description,
        "start": {"dateTime": start.isoformat(), "timeZone": settings.timezone},
        "end": {"dateTime": end.isoformat(), "timeZone": settings.timezone},
    }

    if settings.invite_assignees:
        body["attendees"] = [{"email": email} for email in sorted(event.contacts)]

    return body


class CalendarExtractor:
    """Reads the managed, future events from the calendar.

    Example:
        ```python
        extractor = CalendarExtractor(client, settings)
        events, entry_ids = extractor.get_future_events(now)
        ```
    """

    def __init__(self, backend: CalendarBackend, settings: Settings):
        self.backend = backend
        self.settings = settings
        self.foreign_count = 0
        self.skipped_entries: list[str] = []

    def get_future_events(
        self, now: datetime
    ) -> tuple[dict[str, SportingEvent], dict[str, str]]:
        """Get managed events starting strictly after `now`.

        The listing includes entries already in progress at `now` (their end
        is after the bound). Those are dropped here so that they are neither
        deleted nor duplicated while they are running.

        Args:
            now: Reference instant shared with the spreadsheet side

        Returns:
            Tuple of (events by key, entry ids by key)

        Raises:
            BackendError: If the calendar cannot be listed
        """
        entries = self.backend.list_entries(self.settings.calendar_id, now)
        marker = self.settings.automation_marker
        tz = self.settings.tz

        events: dict[str, SportingEvent] = {}
        entry_ids: dict[str, str] = {}

        for entry in entries:
            if not is_managed_entry(entry, marker):
                self.foreign_count += 1
                continue

            try:
                event = entry_to_event(entry, tz, marker)
            except EntryParseError as e:
                logger.warning(f"Skipping calendar entry: {e}")
                self.skipped_entries.append(entry.id)
                continue

            if event.timestamp <= now:
                logger.debug(f"Skipping in-progress entry {entry.id} ({event.key})")
                continue

            key = event.key
            if key in events:
                logger.warning(
                    f"Duplicate calendar entry {entry.id} for {key}; "
                    f"keeping {entry_ids[key]}"
                )
                self.skipped_entries.append(entry.id)
                continue

            events[key] = event
            entry_ids[key] = entry.id

        logger.info(
            f"Found {len(events)} future managed events on the calendar "
            f"({self.foreign_count} foreign entries ignored)"
        )
        return events, entry_ids
