"""Date/time normalization for hand-typed schedule cells.

Schedule times are typed free-form, so the same time shows up as "1 p.m.",
"1PM", "1:00 P.M." or "1pm". Before parsing, the time text is normalized:

- periods and spaces are removed and meridiem markers lower-cased
- "TBA" becomes midnight
- the doubleheader marker "(DH)" is removed
- a missing minutes component is filled in ("1pm" -> "1:00pm")

The "(DH)" marker logically belongs with the sport, not the time. It is
removed here and not carried anywhere else.
"""

from __future__ import annotations

import re
from datetime import datetime, tzinfo

from sports_sync.errors import TimeParseError

TBA_PATTERN = re.compile(r"tba", re.IGNORECASE)
DOUBLEHEADER_PATTERN = re.compile(r"\(dh\)", re.IGNORECASE)
MERIDIEM_PATTERN = re.compile(r"(am|pm)$")

MIDNIGHT = "12:00am"

# Tried in order against "<date> <time>".
DATETIME_FORMATS = [
    "%A, %B %d, %Y %I:%M%p",  # Monday, September 9, 2024 1:00pm
    "%A, %B %d, %Y %H:%M",  # Monday, September 9, 2024 13:00
]


def normalize_time_string(time_text: str) -> str:
    """Normalize a hand-typed time to the "h:mmam" form.

    Examples:
        '1 P.M.' -> '1:00pm'
        '7:30 PM (DH)' -> '7:30pm'
        'TBA' -> '12:00am'
    """
    text = DOUBLEHEADER_PATTERN.sub("", time_text)
    text = TBA_PATTERN.sub(MIDNIGHT, text)
    text = text.replace(".", "").replace(" ", "").lower()

    if ":" not in text:
        text = MERIDIEM_PATTERN.sub(r":00\1", text)

    return text


def resolve_datetime(date_text: str, time_text: str, tz: tzinfo) -> datetime:
    """Combine a schedule date and time into an aware, minute-precision datetime.

    Args:
        date_text: Date cell, e.g. 'Monday, September 9, 2024'
        time_text: Time cell, e.g. '1 p.m.'
        tz: Civil time zone the schedule is kept in

    Returns:
        Datetime in `tz` with the correct DST offset, truncated to the minute

    Raises:
        TimeParseError: If the combined text matches no known format
    """
    normalized_time = normalize_time_string(time_text)
    combined = f"{' '.join(date_text.split())} {normalized_time}"

    for fmt in DATETIME_FORMATS:
        try:
            parsed = datetime.strptime(combined, fmt)
        except ValueError:
            continue
        return parsed.replace(tzinfo=tz, second=0, microsecond=0)

    raise TimeParseError(date_text, time_text, normalized=combined)
