"""Google Sheets API client.

Implements `SpreadsheetBackend` with `spreadsheets.values.get`. Values are
read as formatted strings, which is how the schedule is typed by hand.

https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets.values/get
"""

from __future__ import annotations

import logging
from typing import Any

from google.auth.credentials import Credentials
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from sports_sync.google_api import backend_error, execute_read
from sports_sync.sheets.base import SpreadsheetBackend

logger = logging.getLogger(__name__)


class GoogleSheetsClient(SpreadsheetBackend):
    """Read-only client for the Google Sheets API."""

    name = "spreadsheet"

    def __init__(self, credentials: Credentials, read_retry_attempts: int = 3):
        self.read_retry_attempts = read_retry_attempts
        self._service = build(
            "sheets", "v4", credentials=credentials, cache_discovery=False
        )

    def list_rows(self, spreadsheet_id: str, range_spec: str) -> list[list[Any]]:
        """Read a range of rows.

        Raises:
            BackendError: If the read fails after retries
        """
        request = (
            self._service.spreadsheets()
            .values()
            .get(
                spreadsheetId=spreadsheet_id,
                range=range_spec,
                valueRenderOption="FORMATTED_VALUE",
            )
        )
        try:
            result = execute_read(request, attempts=self.read_retry_attempts)
        except (HttpError, TimeoutError, ConnectionError) as e:
            raise backend_error(e, self.name, f"read range '{range_spec}'") from e

        rows = result.get("values", [])
        logger.debug(f"Read {len(rows)} rows from '{range_spec}'")
        return rows
