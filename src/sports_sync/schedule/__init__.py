"""Schedule spreadsheet parsing.

Turns the hand-maintained schedule spreadsheet into canonical sporting
events:

1. Build the name to email lookup from the contact tab
2. For each monthly tab, validate the Date/Time/Sport headers
3. Parse each row's date and time, resolve assignees, and build events
4. Keep only events after the run's reference instant
"""

from sports_sync.schedule.contacts import ContactDirectory
from sports_sync.schedule.extractor import (
    ExtractionReport,
    ScheduleExtractor,
    parse_schedule_rows,
)
from sports_sync.schedule.timeparse import normalize_time_string, resolve_datetime

__all__ = [
    "ContactDirectory",
    "ExtractionReport",
    "ScheduleExtractor",
    "parse_schedule_rows",
    "normalize_time_string",
    "resolve_datetime",
]
