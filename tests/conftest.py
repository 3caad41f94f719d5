"""Pytest fixtures for sports schedule sync tests.

This module provides test fixtures that ensure:
1. No external API calls are made (Google Sheets, Google Calendar)
2. Every test sees the same reference instant and settings
3. Backends are in-memory implementations of the abstract interfaces
"""

from __future__ import annotations

import itertools
from datetime import datetime
from typing import Any
from zoneinfo import ZoneInfo

import pytest

from sports_sync.calendar.base import CalendarBackend, CalendarEntry
from sports_sync.calendar.entries import event_to_entry_body
from sports_sync.config import Settings
from sports_sync.errors import BackendError
from sports_sync.models.event import SportingEvent
from sports_sync.sheets.base import SpreadsheetBackend

EASTERN = ZoneInfo("America/New_York")


# =============================================================================
# In-memory backends
# =============================================================================


class FakeSpreadsheet(SpreadsheetBackend):
    """Spreadsheet serving fixed rows per range."""

    def __init__(self, ranges: dict[str, list[list[Any]]] | None = None):
        self.ranges = ranges or {}
        self.reads: list[str] = []

    def list_rows(self, spreadsheet_id: str, range_spec: str) -> list[list[Any]]:
        self.reads.append(range_spec)
        if range_spec not in self.ranges:
            raise BackendError(
                f"Unable to parse range: {range_spec}",
                backend=self.name,
                status_code=400,
            )
        return [list(row) for row in self.ranges[range_spec]]


class FakeCalendar(CalendarBackend):
    """Calendar storing entry bodies by id and recording write calls."""

    def __init__(self):
        self.entries: dict[str, dict[str, Any]] = {}
        self.calls: list[tuple[str, str]] = []
        self.failing_ids: set[str] = set()
        self.fail_creates = False
        self.fail_list = False
        self._ids = itertools.count(1)

    def add(self, body: dict[str, Any], entry_id: str | None = None) -> str:
        entry_id = entry_id or f"evt-{next(self._ids)}"
        self.entries[entry_id] = {**body, "id": entry_id}
        return entry_id

    def list_entries(self, calendar_id: str, start: datetime) -> list[CalendarEntry]:
        if self.fail_list:
            raise BackendError("calendar unavailable", backend=self.name, status_code=503)
        entries = []
        for body in self.entries.values():
            end = body.get("end", {}).get("dateTime")
            if end and datetime.fromisoformat(end) <= start:
                continue
            entries.append(CalendarEntry.from_api(body))
        return sorted(entries, key=lambda e: e.start or start)

    def create_entry(self, calendar_id: str, body: dict[str, Any]) -> str:
        self.calls.append(("create", body["summary"]))
        if self.fail_creates:
            raise BackendError("insert failed", backend=self.name, status_code=500)
        return self.add(body)

    def update_entry(self, calendar_id: str, entry_id: str, body: dict[str, Any]) -> None:
        self.calls.append(("update", entry_id))
        if entry_id in self.failing_ids:
            raise BackendError("update failed", backend=self.name, status_code=500)
        self.entries[entry_id] = {**body, "id": entry_id}

    def delete_entry(self, calendar_id: str, entry_id: str) -> None:
        self.calls.append(("delete", entry_id))
        if entry_id in self.failing_ids:
            raise BackendError("delete failed", backend=self.name, status_code=500)
        del self.entries[entry_id]


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def settings() -> Settings:
    """Settings with two schedule tabs and no invitations."""
    return Settings(
        spreadsheet_id="test-spreadsheet",
        calendar_id="test-calendar",
        schedule_tabs=["August", "September"],
    )


@pytest.fixture
def now() -> datetime:
    """Reference instant for every run."""
    return datetime(2024, 9, 1, 12, 0, tzinfo=EASTERN)


@pytest.fixture
def contact_rows() -> list[list[Any]]:
    """Rows of the worker contact tab (header row excluded)."""
    return [
        ["Alice Smith", "401-555-0100", "alice_smith@brown.edu"],
        ["Bob Jones", "", "bob.jones@example.com"],
        ["Carol White", "401-555-0101", "carol_white@brown.edu"],
    ]


@pytest.fixture
def september_rows() -> list[list[Any]]:
    """A September schedule tab."""
    return [
        ["Date", "Time", "Sport", "Umpire", "Scorekeeper"],
        ["Monday, September 9, 2024", "1 p.m.", "Baseball", "Alice", "x"],
        ["Tuesday, September 10, 2024", "7:30 PM", "Men's Ice Hockey", "Bob Jones", "Carol"],
        [],
        ["Saturday, September 14, 2024", "TBA", "Softball", "Dave", ""],
    ]


@pytest.fixture
def august_rows() -> list[list[Any]]:
    """An August tab whose games are all before the reference instant."""
    return [
        ["Date", "Time", "Sport", "Umpire", "Scorekeeper"],
        ["Saturday, August 31, 2024", "1pm", "Baseball", "Alice", "Carol"],
    ]


@pytest.fixture
def spreadsheet(contact_rows, august_rows, september_rows) -> FakeSpreadsheet:
    return FakeSpreadsheet(
        {
            "Worker Contact Info!A2:C": contact_rows,
            "August!A:ZZ": august_rows,
            "September!A:ZZ": september_rows,
        }
    )


@pytest.fixture
def calendar() -> FakeCalendar:
    return FakeCalendar()


@pytest.fixture
def baseball_event() -> SportingEvent:
    """The Baseball game from the September tab, as extracted."""
    return SportingEvent(
        timestamp=datetime(2024, 9, 9, 13, 0, tzinfo=EASTERN),
        category="Baseball",
        assignments=["Umpire: Alice"],
        contacts={"alice_smith@brown.edu"},
    )


def managed_body(
    settings: Settings,
    summary: str,
    start: datetime,
    assignments: list[str],
) -> dict[str, Any]:
    """Build an entry body the way the sync service writes it."""
    event = SportingEvent(timestamp=start, category=summary, assignments=assignments)
    return event_to_entry_body(event, settings)


def foreign_body(summary: str, start: datetime, end: datetime) -> dict[str, Any]:
    """An entry someone else put on the calendar."""
    return {
        "summary": summary,
        "description": "Bring snacks",
        "start": {"dateTime": start.isoformat(), "timeZone": "America/New_York"},
        "end": {"dateTime": end.isoformat(), "timeZone": "America/New_York"},
    }
