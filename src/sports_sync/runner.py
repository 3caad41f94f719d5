"""A single synchronization run.

Both snapshots are filtered against one reference instant captured at the
start of the run. Capturing "now" separately for each side would let an
event that starts between the two reads be seen as future on one side and
past on the other, which turns it into a spurious create or delete.
"""

from __future__ import annotations

import logging
from datetime import datetime

from sports_sync.calendar.base import CalendarBackend
from sports_sync.calendar.entries import CalendarExtractor
from sports_sync.calendar.sync import CalendarSyncService, SyncResult
from sports_sync.config import Settings
from sports_sync.schedule.extractor import ScheduleExtractor
from sports_sync.sheets.base import SpreadsheetBackend

logger = logging.getLogger(__name__)


def run_sync(
    settings: Settings,
    sheets: SpreadsheetBackend,
    calendar: CalendarBackend,
    now: datetime | None = None,
    dry_run: bool = False,
) -> SyncResult:
    """Read both sources and reconcile the calendar with the spreadsheet.

    Args:
        settings: Run settings
        sheets: Spreadsheet backend
        calendar: Calendar backend
        now: Reference instant (defaults to the current time)
        dry_run: Plan and log operations without writing

    Returns:
        SyncResult for the run

    Raises:
        BackendError: If either snapshot cannot be read
        HeaderError: If a schedule tab is malformed
    """
    if now is None:
        now = datetime.now(settings.tz)

    logger.info(f"Starting sync of calendar {settings.calendar_id} as of {now.isoformat()}")

    sheet_events = ScheduleExtractor(sheets, settings).get_future_events(now)
    calendar_events, entry_ids = CalendarExtractor(calendar, settings).get_future_events(now)

    service = CalendarSyncService(calendar, settings, dry_run=dry_run)
    return service.synchronize(sheet_events, calendar_events, entry_ids)
