"""
Spreadsheet readers.

Both readers return a range the way the Google Sheets values API does:
a list of rows, each a list of formatted cell strings, with trailing empty
cells and rows omitted.
"""

import logging
import re
from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import Any, List, Optional

from googleapiclient.discovery import build
from googleapiclient.errors import HttpError
from google.oauth2 import service_account
from openpyxl import load_workbook

from workout_publisher_api.config import settings

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/spreadsheets.readonly"]
TOKEN_URI = "https://oauth2.googleapis.com/token"


class SheetsReadError(RuntimeError):
    """Raised when a range cannot be read."""


class SheetsConfigError(RuntimeError):
    """Raised when the spreadsheet source is not configured."""


class SpreadsheetReader(ABC):
    """Reads A1 ranges from a tab."""

    @abstractmethod
    def read_range(self, tab: str, a1_range: str) -> List[List[str]]:
        """
        Read a range from a tab.

        Args:
            tab: Tab (sheet) name, e.g. "Monday: Upper Body Push"
            a1_range: Range such as "A71" or "B71:B76"

        Returns:
            Rows of formatted cell values; empty list if the range is blank
        """
        pass


def quote_tab(tab: str) -> str:
    """Quote a tab name for A1 notation ('Monday: Upper Body Push')."""
    return "'" + tab.replace("'", "''") + "'"


WORKBOOK_TITLE_MAX_LENGTH = 31
_WORKBOOK_TITLE_INVALID = re.compile(r"[\\/?*\[\]]")


def workbook_title(tab: str) -> str:
    """
    Excel sheet title for a tab name.

    Excel rejects ":" and a few other characters in sheet titles, so
    "Monday: Upper Body Push" is stored as "Monday - Upper Body Push".
    Titles are capped at 31 characters.
    """
    title = tab.replace(":", " -")
    title = _WORKBOOK_TITLE_INVALID.sub("-", title)
    return title[:WORKBOOK_TITLE_MAX_LENGTH]


def _trim(rows: List[List[str]]) -> List[List[str]]:
    trimmed = []
    for row in rows:
        row = list(row)
        while row and row[-1] == "":
            row.pop()
        trimmed.append(row)
    while trimmed and not trimmed[-1]:
        trimmed.pop()
    return trimmed


class GoogleSheetsReader(SpreadsheetReader):
    """Reads ranges through the Google Sheets API v4 with a service account."""

    def __init__(
        self,
        spreadsheet_id: str,
        client_email: Optional[str] = None,
        private_key: Optional[str] = None,
        project_id: Optional[str] = None,
        service: Any = None,
    ):
        self.spreadsheet_id = spreadsheet_id
        self.client_email = client_email
        self.private_key = private_key
        self.project_id = project_id
        self._service = service

    def _get_service(self):
        """Build the Sheets API service on first use."""
        if self._service is not None:
            return self._service

        if not (self.spreadsheet_id and self.client_email and self.private_key and self.project_id):
            raise SheetsConfigError("Missing required Google Sheets environment variables")

        logger.info(
            f"Using Google service account: {self.client_email} for project: {self.project_id}"
        )
        credentials = service_account.Credentials.from_service_account_info(
            {
                "type": "service_account",
                "project_id": self.project_id,
                "client_email": self.client_email,
                "private_key": self.private_key,
                "token_uri": TOKEN_URI,
            },
            scopes=SCOPES,
        )
        self._service = build("sheets", "v4", credentials=credentials, cache_discovery=False)
        return self._service

    @classmethod
    def from_settings(cls) -> "GoogleSheetsReader":
        return cls(
            spreadsheet_id=settings.SPREADSHEET_ID,
            client_email=settings.GOOGLE_CLIENT_EMAIL,
            private_key=settings.GOOGLE_PRIVATE_KEY,
            project_id=settings.GOOGLE_PROJECT_ID,
        )

    def read_range(self, tab: str, a1_range: str) -> List[List[str]]:
        if not self.spreadsheet_id:
            raise SheetsConfigError("Missing required Google Sheets environment variables")

        service = self._get_service()
        full_range = f"{quote_tab(tab)}!{a1_range}"
        try:
            result = service.spreadsheets().values().get(
                spreadsheetId=self.spreadsheet_id,
                range=full_range,
                valueRenderOption="FORMATTED_VALUE",
            ).execute()
        except HttpError as e:
            raise SheetsReadError(
                f"Google Sheets read failed for {full_range}: HTTP {e.resp.status}"
            ) from e
        except Exception as e:
            raise SheetsReadError(f"Google Sheets read failed for {full_range}: {e}") from e

        rows = result.get("values", [])
        return _trim([["" if c is None else str(c) for c in row] for row in rows])


class WorkbookReader(SpreadsheetReader):
    """Reads ranges from a local .xlsx workbook, one sheet per workout day titled by workbook_title()."""

    def __init__(self, path: str):
        self.path = path
        self._workbook = None

    def _load(self):
        if self._workbook is None:
            try:
                self._workbook = load_workbook(self.path, data_only=True)
            except Exception as e:
                raise SheetsReadError(f"Failed to open workbook {self.path}: {e}") from e
        return self._workbook

    def read_range(self, tab: str, a1_range: str) -> List[List[str]]:
        wb = self._load()
        title = workbook_title(tab)
        if title not in wb.sheetnames:
            raise SheetsReadError(f"Tab '{title}' not found in workbook {self.path}")
        ws = wb[title]

        try:
            cells = ws[a1_range]
        except ValueError as e:
            raise SheetsReadError(f"Invalid range {a1_range}: {e}") from e

        # A single cell comes back bare, a range as a tuple of row tuples
        if not isinstance(cells, tuple):
            cells = ((cells,),)
        elif cells and not isinstance(cells[0], tuple):
            cells = (cells,)

        return _trim([[self._format_value(cell.value) for cell in row] for row in cells])

    @staticmethod
    def _format_value(value: Any) -> str:
        """Render a cell value like the Sheets API's formatted value."""
        if value is None:
            return ""
        if isinstance(value, datetime):
            return value.date().isoformat()
        if isinstance(value, date):
            return value.isoformat()
        if isinstance(value, bool):
            return "TRUE" if value else "FALSE"
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        return str(value).strip()


def get_sheet_reader() -> SpreadsheetReader:
    """Workbook reader when WORKBOOK_PATH is set, Google Sheets otherwise."""
    if settings.WORKBOOK_PATH:
        return WorkbookReader(settings.WORKBOOK_PATH)
    return GoogleSheetsReader.from_settings()
