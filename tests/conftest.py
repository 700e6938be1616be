"""Shared fakes for the alert_sheet test suite."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

import pytest

from alert_sheet import config as config_module
from alert_sheet.models import DateTriple

ALERT_SENDER = "LinkedIn Job Alerts <jobalerts-noreply@linkedin.com>"
SENDER_PATTERN = r"jobalerts-noreply@linkedin.com|jobs-listings@linkedin.com"
TIME_ZONE = "America/Los_Angeles"


def alert_email(*listings: str, header: str = "Your Job Alert for Software Engineer") -> str:
    """Wrap listing blocks in the header and footer of a LinkedIn alert."""
    body = "".join(listings)
    return (
        "From: jobalerts-noreply@linkedin.com\n"
        "Subject: New jobs for you\n\n"
        f"{header}\n"
        f"{body}"
        "See all jobs on LinkedIn\n"
        "Unsubscribe\n"
    )


def listing(title: str, company: str, location: str, *url_lines: str) -> str:
    lines = [title, company, location, *url_lines, "-" * 40, ""]
    return "\n".join(lines)


@dataclass
class FakeMessage:
    sent: datetime
    from_address: str = ALERT_SENDER
    body: str = ""

    def sent_date(self) -> datetime:
        return self.sent

    def sender(self) -> str:
        return self.from_address

    def raw_body(self) -> str:
        return self.body


@dataclass
class FakeThread:
    newest_first: list[FakeMessage]

    def messages(self) -> list[FakeMessage]:
        return self.newest_first


@dataclass
class FakeMailSource:
    threads: list[FakeThread] = field(default_factory=list)
    requested: list[int] = field(default_factory=list)

    def list_recent_threads(self, max_threads: int) -> list[FakeThread]:
        self.requested.append(max_threads)
        return self.threads[:max_threads]


@dataclass
class FakeSink:
    last_date: Optional[DateTriple] = None
    rows: list[list[str]] = field(default_factory=list)
    fail_on_append: bool = False

    def is_result_range_empty(self) -> bool:
        return self.last_date is None and not self.rows

    def last_recorded_date(self) -> Optional[DateTriple]:
        if self.rows:
            return DateTriple.parse(self.rows[-1][2])
        return self.last_date

    def append_record(self, company, title, date, application_number, status, url_directive, location):
        if self.fail_on_append:
            raise RuntimeError("sheet unavailable")
        self.rows.append([company, title, date, application_number, status, url_directive, location])


def utc(year: int, month: int, day: int, hour: int = 18) -> datetime:
    return datetime(year, month, day, hour, 0, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def reset_config():
    """Each test starts without a cached configuration."""
    config_module.reset_config()
    yield
    config_module.reset_config()


@pytest.fixture
def mail_source():
    return FakeMailSource()


@pytest.fixture
def sink():
    return FakeSink()
