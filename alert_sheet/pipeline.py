"""Ingestion of job alert emails into the listing sheet."""

import logging
import re
from datetime import datetime
from typing import Optional

from .dates import format_date, today
from .gate import needs_initial_update, needs_message_update
from .models import DateTriple, MailSource, RecordSink
from .parser import hyperlink_directive, parse_email_body

logger = logging.getLogger(__name__)


def run_extraction(
    mail_source: MailSource,
    sink: RecordSink,
    *,
    max_threads: int,
    sender_pattern: str,
    time_zone: str,
    now: Optional[datetime] = None,
) -> dict:
    """Append listings from every alert email newer than the sheet's last date.

    Threads and their messages are walked oldest first so rows land in time
    order. Failures from the mailbox or the sheet propagate to the caller.
    """
    stats = {
        "update_needed": False,
        "threads_scanned": 0,
        "messages_scanned": 0,
        "messages_matched": 0,
        "messages_skipped": 0,
        "messages_parsed": 0,
        "listings_added": 0,
    }

    current = today(time_zone, now)
    if not needs_initial_update(sink, current):
        return stats
    stats["update_needed"] = True

    last_known = sink.last_recorded_date()
    logger.info(f"Extracting emails newer than {last_known or 'the beginning'}")

    sender_regex = re.compile(sender_pattern)
    threads = mail_source.list_recent_threads(max_threads)

    for thread in reversed(list(threads)):
        stats["threads_scanned"] += 1

        for message in reversed(list(thread.messages())):
            stats["messages_scanned"] += 1
            sender = message.sender()
            logger.debug(f"Sender address: {sender}")

            if not sender_regex.search(sender):
                continue
            stats["messages_matched"] += 1

            email_date = format_date(message.sent_date(), time_zone)
            if not needs_message_update(DateTriple.parse(email_date), last_known):
                logger.debug(f"Email from {email_date} already recorded")
                stats["messages_skipped"] += 1
                continue

            logger.info(f"Needs an update: alert email from {email_date}")
            listings = parse_email_body(message.raw_body(), email_date)
            stats["messages_parsed"] += 1

            for listing in listings:
                sink.append_record(*listing.to_row(hyperlink_directive(listing.url)))
                stats["listings_added"] += 1

    logger.info(
        f"Email extraction complete: {stats['messages_matched']} alert emails, "
        f"{stats['messages_parsed']} parsed, {stats['listings_added']} listings added"
    )
    return stats
