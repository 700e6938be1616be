"""Job alert email parsing and listing extraction."""

import enum
import logging
import re
from typing import Iterator, Optional

from .models import DEFAULT_LINK, ListingRecord

logger = logging.getLogger(__name__)

HEADER_SLICER = re.compile(r"Your Job Alert for Software Engineer|Top job picks for you", re.IGNORECASE)
FOOTER_SLICER = re.compile(r"See all jobs", re.IGNORECASE)

JOB_TITLE_REGEX = re.compile(r"Software Engineer(.*)|Software Dev(.*)|Developer(.*)")
JOB_LINK_REGEX = re.compile(r"View Job:\s+https:", re.IGNORECASE)
JOB_LINK_END = re.compile(r"-{4,}")
JOB_LINK_FRONT = re.compile(r"View Job:\s+", re.IGNORECASE | re.DOTALL)

LINK_DISPLAY_TEXT = "View Job on LinkedIn"


class LineKind(enum.Enum):
    TITLE = "title"
    LINK_START = "link_start"
    RULE = "rule"
    OTHER = "other"


class ExtractorState(enum.Enum):
    IDLE = "idle"
    RECORD_OPEN = "record_open"
    ACCUMULATING_URL = "accumulating_url"


def slice_section(raw_text: str) -> Optional[str]:
    """Cut the listing section out of an alert email.

    Returns None when either the header or the footer marker is missing.
    """
    parts = HEADER_SLICER.split(raw_text, maxsplit=1)
    if len(parts) < 2:
        logger.warning("Expected header not found, must skip this email")
        return None

    parts = FOOTER_SLICER.split(parts[1], maxsplit=1)
    if len(parts) < 2:
        logger.warning("Expected footer not found, must skip this email")
        return None

    return parts[0]


def classify_line(line: str) -> LineKind:
    """Classify a body line. A line matches if it contains the pattern anywhere."""
    if JOB_TITLE_REGEX.search(line):
        return LineKind.TITLE
    if JOB_LINK_REGEX.search(line):
        return LineKind.LINK_START
    if JOB_LINK_END.search(line):
        return LineKind.RULE
    return LineKind.OTHER


def clean_url(accumulated: str) -> str:
    """Drop everything up to and including the "View Job:" prefix, then trailing space."""
    parts = JOB_LINK_FRONT.split(accumulated, maxsplit=1)
    url = parts[1] if len(parts) > 1 else parts[0]
    return url.rstrip()


def hyperlink_directive(url: str) -> str:
    """Build a sheet formula showing the link as friendly text."""
    escaped = url.replace('"', '""')
    return f'=HYPERLINK("{escaped}", "{LINK_DISPLAY_TEXT}")'


def split_lines(body: str) -> list[str]:
    return [line.rstrip("\r") for line in body.split("\n")]


class ListingExtractor:
    """State machine turning body lines into listing records.

    One record is open at a time. A record is only emitted once its link block
    is closed by a rule line; anything left open at the end is dropped.
    """

    def __init__(self, email_date: str):
        self.email_date = email_date
        self.state = ExtractorState.IDLE
        self.current: Optional[ListingRecord] = None
        self.completed: list[ListingRecord] = []

    def _open_record(self, lines: list[str], index: int) -> None:
        if self.current is not None:
            logger.debug(f"Dropping unterminated listing: {self.current.title}")

        self.current = ListingRecord(
            title=lines[index],
            company=lines[index + 1] if index + 1 < len(lines) else "",
            location=lines[index + 2] if index + 2 < len(lines) else "",
            url=DEFAULT_LINK,
            date=self.email_date,
        )
        self.state = ExtractorState.RECORD_OPEN

    def _close_record(self) -> ListingRecord:
        record = self.current.model_copy(update={"url": clean_url(self.current.url)})
        self.completed.append(record)
        self.current = None
        self.state = ExtractorState.IDLE
        return record

    def feed(self, lines: list[str], index: int) -> Optional[ListingRecord]:
        """Process one line. Returns the record completed by this line, if any."""
        line = lines[index]
        kind = classify_line(line)

        if kind is LineKind.TITLE:
            self._open_record(lines, index)
            return None

        if self.state is ExtractorState.IDLE:
            return None

        if kind is LineKind.LINK_START:
            self.current = self.current.model_copy(update={"url": line})
            self.state = ExtractorState.ACCUMULATING_URL
            return None

        if self.state is ExtractorState.ACCUMULATING_URL:
            if kind is LineKind.RULE:
                return self._close_record()
            self.current = self.current.model_copy(update={"url": self.current.url + line})

        return None

    def finish(self) -> None:
        if self.current is not None:
            logger.debug(f"Listing never closed, skipping: {self.current.title}")
        self.current = None
        self.state = ExtractorState.IDLE


def extract_listings(body: str, email_date: str) -> Iterator[ListingRecord]:
    """Yield listing records in the order their titles appear."""
    lines = split_lines(body)
    extractor = ListingExtractor(email_date)

    for index in range(len(lines)):
        record = extractor.feed(lines, index)
        if record is not None:
            yield record

    extractor.finish()


def parse_email_body(raw_text: str, email_date: str) -> list[ListingRecord]:
    """Slice an alert email and extract every complete listing from it."""
    section = slice_section(raw_text)
    if section is None:
        return []

    listings = list(extract_listings(section, email_date))
    logger.info(f"Parsed {len(listings)} listings from email dated {email_date}")
    return listings
