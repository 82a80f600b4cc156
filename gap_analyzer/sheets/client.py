"""Google Sheets client for writing gap analysis tables."""

from typing import Any

import gspread
from google.oauth2.service_account import Credentials

from ..config import SheetsConfig


SCOPES = [
    "https://www.googleapis.com/auth/spreadsheets",
    "https://www.googleapis.com/auth/drive",
]


class SheetsClient:
    """Client for Google Sheets operations."""

    def __init__(self, config: SheetsConfig):
        self.config = config
        self._client: gspread.Client | None = None
        self._spreadsheet: gspread.Spreadsheet | None = None

    def _get_client(self) -> gspread.Client:
        """Get or create authenticated gspread client."""
        if self._client is None:
            credentials = Credentials.from_service_account_file(
                self.config.credentials_path,
                scopes=SCOPES,
            )
            self._client = gspread.authorize(credentials)
        return self._client

    def _get_spreadsheet(self) -> gspread.Spreadsheet:
        """Get or open the spreadsheet."""
        if self._spreadsheet is None:
            client = self._get_client()
            self._spreadsheet = client.open_by_key(self.config.spreadsheet_id)
        return self._spreadsheet

    def _get_or_create_worksheet(
        self, name: str, rows: int = 1000, cols: int = 26
    ) -> gspread.Worksheet:
        """Get existing worksheet or create new one."""
        spreadsheet = self._get_spreadsheet()
        try:
            return spreadsheet.worksheet(name)
        except gspread.WorksheetNotFound:
            return spreadsheet.add_worksheet(title=name, rows=rows, cols=cols)

    def write_table(
        self,
        tab_name: str,
        headers: list[str],
        rows: list[list[Any]],
    ) -> None:
        """Replace a tab's contents with a table.

        Args:
            tab_name: Tab name (e.g., 'Gap Analysis')
            headers: Header row
            rows: Data rows
        """
        worksheet = self._get_or_create_worksheet(
            tab_name, rows=len(rows) + 50, cols=max(len(headers), 26)
        )
        worksheet.clear()
        worksheet.update(values=[headers] + rows, range_name="A1")

    def write_delimited_text(
        self, tab_name: str, text: str, delimiter: str = ","
    ) -> int:
        """Write exported delimited text to a tab.

        Returns:
            Number of data rows written
        """
        lines = text.split("\n")
        headers = lines[0].split(delimiter)
        rows = [line.split(delimiter) for line in lines[1:]]
        self.write_table(tab_name, headers, rows)
        return len(rows)

    def test_connection(self) -> bool:
        """Test connection to Google Sheets."""
        try:
            spreadsheet = self._get_spreadsheet()
            _ = spreadsheet.title
            return True
        except Exception:
            return False
