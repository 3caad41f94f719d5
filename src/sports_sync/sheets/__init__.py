"""Spreadsheet backends."""

from sports_sync.sheets.base import SpreadsheetBackend
from sports_sync.sheets.google_sheets import GoogleSheetsClient

__all__ = [
    "SpreadsheetBackend",
    "GoogleSheetsClient",
]
