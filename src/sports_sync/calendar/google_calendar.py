"""Google Calendar API client.

Implements `CalendarBackend` on top of the Google Calendar API v3:
- List entries from a start boundary
- Insert, update (full replace) and delete entries

## API Documentation

https://developers.google.com/calendar/api/v3/reference

## Listing Semantics

`events.list` with `timeMin` returns every event whose *end* is after
`timeMin`, so events already in progress are included. Callers filter on the
parsed start time.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from google.auth.credentials import Credentials
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from sports_sync.calendar.base import CalendarBackend, CalendarEntry
from sports_sync.google_api import backend_error, execute_read

logger = logging.getLogger(__name__)


class GoogleCalendarClient(CalendarBackend):
    """Client for the Google Calendar API.

    Example:
        ```python
        client = GoogleCalendarClient(credentials)

        entries = client.list_entries("primary", datetime.now(timezone.utc))
        entry_id = client.create_entry("primary", body)
        client.delete_entry("primary", entry_id)
        ```
    """

    name = "calendar"

    def __init__(
        self,
        credentials: Credentials,
        read_retry_attempts: int = 3,
        max_results: int = 250,
    ):
        """Initialize the client.

        Args:
            credentials: Authorized Google credentials
            read_retry_attempts: Attempts for list calls on transient errors
            max_results: Page size for list calls
        """
        self.read_retry_attempts = read_retry_attempts
        self.max_results = max_results
        self._service = build(
            "calendar", "v3", credentials=credentials, cache_discovery=False
        )

    def list_entries(self, calendar_id: str, start: datetime) -> list[CalendarEntry]:
        """List single entries ending after `start`, ordered by start time.

        Args:
            calendar_id: Calendar ID (use 'primary' for primary calendar)
            start: Lower time bound (compared against entry end times)

        Returns:
            List of CalendarEntry objects

        Raises:
            BackendError: If the listing fails after retries
        """
        entries = []
        page_token = None

        params: dict[str, Any] = {
            "calendarId": calendar_id,
            "timeMin": start.isoformat(),
            "maxResults": self.max_results,
            "singleEvents": True,  # Expand recurring events
            "orderBy": "startTime",
            "showDeleted": False,
        }

        while True:
            if page_token:
                params["pageToken"] = page_token

            try:
                result = execute_read(
                    self._service.events().list(**params),
                    attempts=self.read_retry_attempts,
                )
            except (HttpError, TimeoutError, ConnectionError) as e:
                raise backend_error(e, self.name, f"list events for {calendar_id}") from e

            for item in result.get("items", []):
                entries.append(CalendarEntry.from_api(item))

            page_token = result.get("nextPageToken")
            if not page_token:
                break

        logger.debug(f"Listed {len(entries)} entries from calendar {calendar_id}")
        return entries

    def create_entry(self, calendar_id: str, body: dict[str, Any]) -> str:
        try:
            result = (
                self._service.events()
                .insert(calendarId=calendar_id, body=body)
                .execute()
            )
        except (HttpError, TimeoutError, ConnectionError) as e:
            raise backend_error(e, self.name, "create event") from e
        return result["id"]

    def update_entry(self, calendar_id: str, entry_id: str, body: dict[str, Any]) -> None:
        try:
            (
                self._service.events()
                .update(calendarId=calendar_id, eventId=entry_id, body=body)
                .execute()
            )
        except (HttpError, TimeoutError, ConnectionError) as e:
            raise backend_error(e, self.name, f"update event {entry_id}") from e

    def delete_entry(self, calendar_id: str, entry_id: str) -> None:
        try:
            (
                self._service.events()
                .delete(calendarId=calendar_id, eventId=entry_id)
                .execute()
            )
        except (HttpError, TimeoutError, ConnectionError) as e:
            raise backend_error(e, self.name, f"delete event {entry_id}") from e
