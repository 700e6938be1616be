"""Gmail API client for reading job alert threads."""

import base64
import logging
from datetime import datetime, timezone
from typing import Any, Optional

from googleapiclient.discovery import build

from .auth import get_credentials

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/gmail.readonly"]
TOKEN_NAME = "token.json"


def _decode(data: str) -> str:
    return base64.urlsafe_b64decode(data).decode("utf-8", errors="replace")


def get_email_body(message: dict[str, Any]) -> str:
    """Extract email body text from message, preferring text/plain."""
    payload = message.get("payload", {})

    def find_part(part: dict, mime_type: str) -> Optional[str]:
        if part.get("mimeType") == mime_type:
            data = part.get("body", {}).get("data", "")
            if data:
                return _decode(data)
        for subpart in part.get("parts", []):
            text = find_part(subpart, mime_type)
            if text:
                return text
        return None

    for mime_type in ("text/plain", "text/html"):
        text = find_part(payload, mime_type)
        if text:
            return text

    body_data = payload.get("body", {}).get("data", "")
    if body_data:
        return _decode(body_data)

    return ""


def get_email_headers(message: dict[str, Any]) -> dict[str, str]:
    """Extract common headers from email message."""
    headers = {}
    payload = message.get("payload", {})

    for header in payload.get("headers", []):
        name = header.get("name", "").lower()
        if name in ("from", "to", "subject", "date"):
            headers[name] = header.get("value", "")

    return headers


class GmailMessage:
    """A single message from a ``threads.get`` response."""

    def __init__(self, message: dict[str, Any]):
        self._message = message
        self._headers = get_email_headers(message)

    @property
    def id(self) -> str:
        return self._message.get("id", "")

    def sent_date(self) -> datetime:
        millis = int(self._message.get("internalDate", "0"))
        return datetime.fromtimestamp(millis / 1000, tz=timezone.utc)

    def sender(self) -> str:
        return self._headers.get("from", "")

    def raw_body(self) -> str:
        return get_email_body(self._message)


class GmailThread:
    def __init__(self, thread: dict[str, Any]):
        self.id = thread.get("id", "")
        self._messages = [GmailMessage(m) for m in thread.get("messages", [])]

    def messages(self) -> list[GmailMessage]:
        """Messages newest first, matching the order threads are listed in."""
        return sorted(self._messages, key=lambda m: m.sent_date(), reverse=True)


class GmailMailSource:
    """Inbox threads read through the Gmail API."""

    def __init__(self, service=None):
        if service is None:
            creds = get_credentials(SCOPES, TOKEN_NAME)
            service = build("gmail", "v1", credentials=creds)
        self.service = service

    def list_recent_threads(self, max_threads: int) -> list[GmailThread]:
        """Fetch up to max_threads inbox threads, newest first."""
        results = (
            self.service.users()
            .threads()
            .list(userId="me", labelIds=["INBOX"], maxResults=max_threads)
            .execute()
        )
        refs = results.get("threads", [])[:max_threads]
        logger.info(f"Found {len(refs)} inbox threads")

        threads = []
        for ref in refs:
            thread = (
                self.service.users()
                .threads()
                .get(userId="me", id=ref["id"], format="full")
                .execute()
            )
            threads.append(GmailThread(thread))

        return threads
