"""Spreadsheet backend abstraction."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class SpreadsheetBackend(ABC):
    """Abstract spreadsheet read operation.

    Implementations raise `sports_sync.errors.BackendError` on failure.
    """

    name: str = "spreadsheet"

    @abstractmethod
    def list_rows(self, spreadsheet_id: str, range_spec: str) -> list[list[Any]]:
        """Read a range in A1 notation (e.g. "September!A:ZZ").

        Returns:
            Rows in sheet order, each a list of cell values. Trailing empty
            cells and trailing empty rows may be omitted.
        """
