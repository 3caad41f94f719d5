"""Exception hierarchy for schedule synchronization.

Errors fall into three tiers:

- **Fatal**: the run cannot produce a complete snapshot of either source
  (`BackendError` during a read, `HeaderError`, `ConfigurationError`).
  Nothing is written.
- **Row-level**: a single spreadsheet row or calendar entry cannot be
  normalized (`TimeParseError`, `RowParseError`, `EntryParseError`). The row
  is skipped and the run continues.
- **Operation-level**: a single create/update/delete call fails
  (`BackendError` during reconciliation). The failure is counted and the run
  continues.
"""

from __future__ import annotations


class SyncError(Exception):
    """Base exception for all synchronization errors."""


class ConfigurationError(SyncError):
    """Raised when settings or credentials are unusable."""


class BackendError(SyncError):
    """Raised when a call to the spreadsheet or calendar backend fails."""

    def __init__(
        self,
        message: str,
        backend: str,
        status_code: int | None = None,
    ):
        super().__init__(message)
        self.backend = backend
        self.status_code = status_code


class HeaderError(SyncError):
    """Raised when a schedule tab does not start with the required headers."""

    def __init__(self, tab: str, expected: list[str], found: list[str]):
        super().__init__(
            f"Unexpected headers in tab '{tab}': expected {expected}, found {found}"
        )
        self.tab = tab
        self.expected = expected
        self.found = found


class TimeParseError(SyncError, ValueError):
    """Raised when a date/time pair cannot be parsed."""

    def __init__(self, date_text: str, time_text: str, normalized: str | None = None):
        detail = f" (normalized to '{normalized}')" if normalized else ""
        super().__init__(
            f"Unable to parse date '{date_text}' with time '{time_text}'{detail}"
        )
        self.date_text = date_text
        self.time_text = time_text
        self.normalized = normalized


class RowParseError(SyncError, ValueError):
    """Raised when a spreadsheet row cannot be converted to a typed row."""

    def __init__(self, row_number: int, reason: str):
        super().__init__(f"Row {row_number}: {reason}")
        self.row_number = row_number
        self.reason = reason


class EntryParseError(SyncError, ValueError):
    """Raised when a calendar entry cannot be converted to an event."""

    def __init__(self, entry_id: str, reason: str):
        super().__init__(f"Calendar entry {entry_id}: {reason}")
        self.entry_id = entry_id
        self.reason = reason
