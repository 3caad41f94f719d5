"""Calendar backend abstraction.

The reconciler only needs four operations from a calendar: list entries from
a start boundary, and create, update or delete a single entry. Entry bodies
use the Google Calendar v3 event resource shape:

```python
{
    "summary": "Baseball",
    "description": "Umpire: Alice\\n\\n\\nCreated by ... automation.\\n",
    "location": "Terrence Murray Baseball Stadium",
    "start": {"dateTime": "2024-09-09T13:00:00-04:00", "timeZone": "America/New_York"},
    "end": {"dateTime": "2024-09-09T15:00:00-04:00", "timeZone": "America/New_York"},
}
```
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass
class CalendarEntry:
    """An entry read from a calendar."""

    id: str
    summary: str
    description: str = ""
    start: datetime | None = None
    start_date: str | None = None  # For all-day entries (YYYY-MM-DD)
    attendees: list[str] = field(default_factory=list)

    @property
    def is_all_day(self) -> bool:
        return self.start is None and self.start_date is not None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> CalendarEntry:
        """Create from a Google Calendar API event resource."""
        start_data = data.get("start", {})

        start = None
        start_str = start_data.get("dateTime")
        if start_str:
            start = datetime.fromisoformat(start_str.replace("Z", "+00:00"))

        return cls(
            id=data["id"],
            summary=data.get("summary", ""),
            description=data.get("description") or "",
            start=start,
            start_date=start_data.get("date"),
            attendees=[
                attendee["email"]
                for attendee in data.get("attendees", [])
                if attendee.get("email")
            ],
        )


class CalendarBackend(ABC):
    """Abstract calendar read/write operations.

    Implementations raise `sports_sync.errors.BackendError` on failure.
    """

    name: str = "calendar"

    @abstractmethod
    def list_entries(self, calendar_id: str, start: datetime) -> list[CalendarEntry]:
        """List single (non-recurring) entries ending after `start`, ordered by start time."""

    @abstractmethod
    def create_entry(self, calendar_id: str, body: dict[str, Any]) -> str:
        """Create an entry and return its id."""

    @abstractmethod
    def update_entry(self, calendar_id: str, entry_id: str, body: dict[str, Any]) -> None:
        """Replace an entry's body."""

    @abstractmethod
    def delete_entry(self, calendar_id: str, entry_id: str) -> None:
        """Delete an entry."""
