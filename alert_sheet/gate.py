"""Decide whether a run (or a single message) needs to touch the sheet."""

import logging
from typing import Optional

from .dates import is_newer
from .models import DateTriple, RecordSink

logger = logging.getLogger(__name__)


def needs_initial_update(sink: RecordSink, today: DateTriple) -> bool:
    """Cheap sheet-level check run before walking the mailbox."""
    if sink.is_result_range_empty():
        logger.info("No listings recorded yet, update needed")
        return True

    if is_newer(today, sink.last_recorded_date()):
        return True

    logger.info("Initial update not needed")
    return False


def needs_message_update(message_date: DateTriple, last_known: Optional[DateTriple]) -> bool:
    return is_newer(message_date, last_known)
