"""Calendar integration module.

Reads the managed events from a Google Calendar and reconciles them with the
schedule spreadsheet.

## Managed Entries

Entries created by this tool carry an automation marker at the end of their
description. Entries without the marker belong to someone else and are never
touched.

## Google Calendar API

Uses the Google Calendar API v3:
- https://developers.google.com/calendar/api/v3/reference
"""

from sports_sync.calendar.base import CalendarBackend, CalendarEntry
from sports_sync.calendar.entries import (
    CalendarExtractor,
    entry_to_event,
    event_to_entry_body,
    is_managed_entry,
)
from sports_sync.calendar.google_calendar import GoogleCalendarClient
from sports_sync.calendar.sync import (
    CalendarSyncService,
    SyncPlan,
    SyncResult,
    plan_sync,
)

__all__ = [
    "CalendarBackend",
    "CalendarEntry",
    "CalendarExtractor",
    "entry_to_event",
    "event_to_entry_body",
    "is_managed_entry",
    "GoogleCalendarClient",
    "CalendarSyncService",
    "SyncPlan",
    "SyncResult",
    "plan_sync",
]
