"""Google Sheets API client for recording job listings."""

import logging
from datetime import datetime, timedelta
from typing import Optional, Union

from googleapiclient.discovery import build

from .auth import get_credentials
from .models import DateTriple

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]
TOKEN_NAME = "sheets_token.json"

HEADERS = [
    "Company",
    "Title",
    "Date",
    "Application No.",
    "Status",
    "Link",
    "Location",
]

# Day zero of the Sheets serial date system
SERIAL_EPOCH = datetime(1899, 12, 30)


def cell_to_date(value: Union[int, float, str]) -> DateTriple:
    """Convert an unformatted date cell into a DateTriple.

    Date cells come back as serial day numbers. Text cells are parsed as
    MM/DD/YYYY with any time part after the first space dropped.
    """
    if isinstance(value, (int, float)):
        return DateTriple.from_datetime(SERIAL_EPOCH + timedelta(days=int(value)))
    text = str(value).strip().split(" ", 1)[0]
    return DateTriple.parse(text)


class SheetsRecordSink:
    """Append-only listing table backed by one sheet tab."""

    def __init__(
        self,
        spreadsheet_id: str,
        sheet_name: str,
        result_range: str = "B2:BF",
        date_column: str = "C",
        service=None,
    ):
        if service is None:
            creds = get_credentials(SCOPES, TOKEN_NAME)
            service = build("sheets", "v4", credentials=creds)
        self.service = service
        self.spreadsheet_id = spreadsheet_id
        self.sheet_name = sheet_name
        self.result_range = result_range
        self.date_column = date_column
        self._state: Optional[tuple[bool, Optional[DateTriple]]] = None
        self._headers_checked = False

    def _get_values(self, cell_range: str, **render_options) -> list[list]:
        result = (
            self.service.spreadsheets()
            .values()
            .get(
                spreadsheetId=self.spreadsheet_id,
                range=f"{self.sheet_name}!{cell_range}",
                **render_options,
            )
            .execute()
        )
        return result.get("values", [])

    def ensure_headers(self) -> None:
        """Write the header row if row 1 is blank. Existing headers are kept."""
        existing = self._get_values("A1:G1")
        if any(str(cell).strip() for row in existing for cell in row):
            return

        self.service.spreadsheets().values().update(
            spreadsheetId=self.spreadsheet_id,
            range=f"{self.sheet_name}!A1:G1",
            valueInputOption="RAW",
            body={"values": [HEADERS]},
        ).execute()
        logger.info("Added headers to spreadsheet")

    def _load_state(self) -> tuple[bool, Optional[DateTriple]]:
        """Read the result range and date column once per run."""
        if self._state is not None:
            return self._state

        rows = self._get_values(self.result_range)
        empty = not any(str(cell).strip() for row in rows for cell in row)
        last_date = None

        if not empty:
            column = self.date_column
            cells = self._get_values(
                f"{column}2:{column}",
                valueRenderOption="UNFORMATTED_VALUE",
                dateTimeRenderOption="SERIAL_NUMBER",
            )
            values = [row[0] for row in cells if row and str(row[0]).strip()]
            if values:
                last_date = cell_to_date(values[-1])

        self._state = (empty, last_date)
        return self._state

    def is_result_range_empty(self) -> bool:
        return self._load_state()[0]

    def last_recorded_date(self) -> Optional[DateTriple]:
        """Date of the last listing row, or None when nothing is recorded."""
        return self._load_state()[1]

    def append_record(
        self,
        company: str,
        title: str,
        date: str,
        application_number: str,
        status: str,
        url_directive: str,
        location: str,
    ) -> None:
        """Append a listing row; the link cell is entered as a formula."""
        if not self._headers_checked:
            self.ensure_headers()
            self._headers_checked = True

        row = [company, title, date, application_number, status, url_directive, location]

        self.service.spreadsheets().values().append(
            spreadsheetId=self.spreadsheet_id,
            range=f"{self.sheet_name}!A:G",
            valueInputOption="USER_ENTERED",
            insertDataOption="INSERT_ROWS",
            body={"values": [row]},
        ).execute()
        self._state = (False, DateTriple.parse(date))

        logger.info(f"Appended row to spreadsheet: {title} - {company}")
