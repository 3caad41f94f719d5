"""Typed spreadsheet rows.

The Sheets API returns rows as lists of loosely-typed cells with trailing
empty cells omitted. These models convert raw rows into typed records up
front so the extractor never works with raw cells.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from sports_sync.errors import RowParseError

# Column positions of the required schedule columns.
DATE_COLUMN = 0
TIME_COLUMN = 1
SPORT_COLUMN = 2

REQUIRED_HEADERS = ["Date", "Time", "Sport"]

# Cell values meaning "nobody assigned to this role".
UNASSIGNED_VALUES = frozenset({"", "x"})


def cell_text(value: Any) -> str:
    """Convert a raw cell value to text with whitespace runs collapsed."""
    if value is None:
        return ""
    return " ".join(str(value).split())


def is_blank_row(raw: list[Any]) -> bool:
    return all(cell_text(value) == "" for value in raw)


@dataclass
class ScheduleRow:
    """A data row from a monthly schedule tab."""

    row_number: int
    date_text: str
    time_text: str
    category: str
    role_cells: list[str] = field(default_factory=list)

    @classmethod
    def from_cells(cls, raw: list[Any], row_number: int) -> ScheduleRow:
        """Build a typed row from raw cells.

        Args:
            raw: Cell values as returned by the spreadsheet backend
            row_number: 1-based row number in the tab, for error reporting

        Raises:
            RowParseError: If a required column is missing or empty
        """
        cells = [cell_text(value) for value in raw]
        if len(cells) <= SPORT_COLUMN:
            raise RowParseError(
                row_number, f"expected at least {len(REQUIRED_HEADERS)} cells, found {len(cells)}"
            )

        for index, header in enumerate(REQUIRED_HEADERS):
            if not cells[index]:
                raise RowParseError(row_number, f"empty {header} cell")

        return cls(
            row_number=row_number,
            date_text=cells[DATE_COLUMN],
            time_text=cells[TIME_COLUMN],
            category=cells[SPORT_COLUMN],
            role_cells=cells[len(REQUIRED_HEADERS):],
        )

    def assignees(self, role_headers: list[str]) -> list[tuple[str, str]]:
        """Pair role headers with assigned names, skipping unassigned roles.

        Cells beyond the last header have no role and are ignored.
        """
        pairs = []
        for role, name in zip(role_headers, self.role_cells):
            if name in UNASSIGNED_VALUES:
                continue
            pairs.append((role, name))
        return pairs


@dataclass
class ContactRow:
    """A row from the worker contact tab (name in column A, email in column C)."""

    name: str
    email: str

    @classmethod
    def from_cells(cls, raw: list[Any], row_number: int) -> ContactRow:
        cells = [cell_text(value) for value in raw]
        if len(cells) < 3:
            raise RowParseError(row_number, "contact row has no email column")
        name, email = cells[0], cells[2]
        if not name or not email:
            raise RowParseError(row_number, "contact row is missing a name or email")
        return cls(name=name, email=email)
