"""Day-granularity date handling.

Comparison works on (month, day, year) integers only so it can be swapped for
a calendar library later without touching callers.
"""

from datetime import datetime, timezone
from typing import Optional
from zoneinfo import ZoneInfo

from .models import DateTriple

DATE_FORMAT = "%m/%d/%Y"


def is_newer(candidate: DateTriple, reference: Optional[DateTriple]) -> bool:
    """Return True if candidate is strictly after reference at day granularity."""
    if reference is None:
        return True

    if candidate.year > reference.year:
        return True
    if candidate.year < reference.year:
        return False

    if candidate.month > reference.month:
        return True
    if candidate.month == reference.month and candidate.day > reference.day:
        return True

    return False


def format_date(value: datetime, time_zone: str) -> str:
    """Format a datetime as MM/DD/YYYY in the given time zone.

    Naive datetimes are assumed to be UTC.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(ZoneInfo(time_zone)).strftime(DATE_FORMAT)


def today(time_zone: str, now: Optional[datetime] = None) -> DateTriple:
    """Get the current calendar day in the given time zone."""
    current = now or datetime.now(timezone.utc)
    return DateTriple.from_datetime(current, time_zone)
