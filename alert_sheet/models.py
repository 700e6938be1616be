"""Data models and collaborator interfaces for job alert listings."""

from datetime import datetime, timezone
from typing import Optional, Protocol, Sequence
from zoneinfo import ZoneInfo

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_LINK = "Link not Found"
DEFAULT_NO = "Unknown"
DEFAULT_STATUS = "Not Applied"

DATE_DELIMITER = "/"


class DateTriple(BaseModel):
    """A calendar day as (month, day, year) integers."""

    model_config = ConfigDict(frozen=True)

    month: int
    day: int
    year: int

    @classmethod
    def parse(cls, text: str) -> "DateTriple":
        """Parse a ``MM/DD/YYYY`` string. Raises ValueError on any other shape."""
        parts = str(text).strip().split(DATE_DELIMITER)
        if len(parts) != 3:
            raise ValueError(f"Expected MM/DD/YYYY date, got {text!r}")
        month, day, year = (int(part) for part in parts)
        return cls(month=month, day=day, year=year)

    @classmethod
    def from_datetime(cls, value: datetime, time_zone: Optional[str] = None) -> "DateTriple":
        """Take the calendar day of value in time_zone. Naive values are UTC."""
        if time_zone:
            if value.tzinfo is None:
                value = value.replace(tzinfo=timezone.utc)
            value = value.astimezone(ZoneInfo(time_zone))
        return cls(month=value.month, day=value.day, year=value.year)

    def __str__(self) -> str:
        return f"{self.month:02d}/{self.day:02d}/{self.year:04d}"


class ListingRecord(BaseModel):
    """A single job listing pulled out of an alert email."""

    title: str = Field(min_length=1)
    company: str = ""
    location: str = ""
    url: str = DEFAULT_LINK
    application_number: str = DEFAULT_NO
    date: str
    status: str = DEFAULT_STATUS

    def to_row(self, url_directive: str) -> list[str]:
        """Convert to spreadsheet row format.

        Columns: Company, Title, Date, Application No., Status, Link, Location.
        """
        return [
            self.company,
            self.title,
            self.date,
            self.application_number,
            self.status,
            url_directive,
            self.location,
        ]


class Message(Protocol):
    def sent_date(self) -> datetime: ...

    def sender(self) -> str: ...

    def raw_body(self) -> str: ...


class Thread(Protocol):
    def messages(self) -> Sequence[Message]: ...


class MailSource(Protocol):
    """Mailbox returning its most recent threads, newest first."""

    def list_recent_threads(self, max_threads: int) -> Sequence[Thread]: ...


class RecordSink(Protocol):
    """Append-only table of listing rows."""

    def is_result_range_empty(self) -> bool: ...

    def last_recorded_date(self) -> Optional[DateTriple]: ...

    def append_record(
        self,
        company: str,
        title: str,
        date: str,
        application_number: str,
        status: str,
        url_directive: str,
        location: str,
    ) -> None: ...
