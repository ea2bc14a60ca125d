"""MIME Parser for mailbox messages.

Handles parsing of raw RFC 822 messages into Message entities: headers,
plain-text and HTML bodies, and attachment parts. Supports RFC 2047 encoded
headers and filenames and nested multipart messages.
"""

import email
import email.policy
import logging
from datetime import datetime, timezone
from email.message import EmailMessage
from email.utils import parsedate_to_datetime
from typing import List, Optional

from ...domain.messages.models import (
    Attachment,
    Message,
    UNKNOWN_MIME_TYPE,
    UNNAMED_ATTACHMENT,
)

logger = logging.getLogger(__name__)

DEFAULT_SUBJECT = "(no subject)"
DEFAULT_SENDER = "(unknown sender)"


def parse_mime_message(raw_mime: bytes) -> EmailMessage:
    """Parse raw MIME bytes into an EmailMessage object.

    Args:
        raw_mime: Raw MIME message bytes

    Returns:
        EmailMessage: Parsed MIME message

    Raises:
        ValueError: If MIME parsing fails
    """
    try:
        return email.message_from_bytes(raw_mime, policy=email.policy.default)
    except Exception as e:
        logger.error(f"Failed to parse MIME message: {e}")
        raise ValueError(f"Invalid MIME message: {e}")


def parse_received_at(date_header: Optional[str]) -> datetime:
    """Parse a Date header into an aware UTC datetime.

    Missing or unparseable dates fall back to the current time.
    """
    if date_header:
        try:
            parsed = parsedate_to_datetime(str(date_header))
            if parsed.tzinfo is None:
                parsed = parsed.replace(tzinfo=timezone.utc)
            return parsed.astimezone(timezone.utc)
        except (TypeError, ValueError, IndexError):
            logger.warning(f"Unparseable Date header {date_header!r}, using current time")
    return datetime.now(timezone.utc)


def extract_body(msg: EmailMessage, subtype: str) -> str:
    """Return the preferred text/<subtype> body, or '' if there is none."""
    part = msg.get_body(preferencelist=(subtype,))
    if part is None:
        return ""
    try:
        return part.get_content()
    except (LookupError, UnicodeDecodeError) as e:
        logger.warning(f"Could not decode text/{subtype} body: {e}")
        payload = part.get_payload(decode=True) or b""
        return payload.decode("utf-8", errors="replace")


def _is_attachment_part(part: EmailMessage, body_parts: set) -> bool:
    if part.is_multipart() or id(part) in body_parts:
        return False
    if part.get_content_disposition() == "attachment" or part.get_filename():
        return True
    # Inline images, audio etc. without a filename still count
    return part.get_content_maintype() not in ("text", "multipart", "message")


def extract_attachments(msg: EmailMessage) -> List[Attachment]:
    """Extract all attachment parts from a MIME message.

    Walks the entire MIME tree. The chosen text/plain and text/html bodies are
    not attachments. Parts without a filename are named "unnamed", parts
    without a declared Content-Type are typed "unknown".

    Args:
        msg: Parsed email message

    Returns:
        List[Attachment]: Attachments in MIME order
    """
    body_parts = {
        id(body) for body in (
            msg.get_body(preferencelist=("plain",)),
            msg.get_body(preferencelist=("html",)),
        ) if body is not None
    }

    attachments = []
    for part in msg.walk():
        if not _is_attachment_part(part, body_parts):
            continue

        filename = part.get_filename() or UNNAMED_ATTACHMENT
        mime_type = part.get_content_type() if part.get("Content-Type") else UNKNOWN_MIME_TYPE

        content = part.get_payload(decode=True)
        attachments.append(Attachment(
            name=filename,
            mime_type=mime_type,
            size_bytes=len(content) if content else 0,
            content=content or None,
        ))

        logger.debug(f"Extracted attachment: {filename} ({mime_type})")

    return attachments


def parse_message(sequence_number: int, raw_mime: bytes) -> Message:
    """Parse one raw mailbox message into a Message entity.

    Args:
        sequence_number: IMAP sequence number (becomes Message.id)
        raw_mime: Full RFC 822 source

    Returns:
        Message with bodies and attachments

    Raises:
        ValueError: If the message cannot be parsed
    """
    msg = parse_mime_message(raw_mime)

    return Message(
        id=sequence_number,
        subject=str(msg.get("Subject") or "").strip() or DEFAULT_SUBJECT,
        sender=str(msg.get("From") or "").strip() or DEFAULT_SENDER,
        received_at=parse_received_at(msg.get("Date")),
        body_text=extract_body(msg, "plain"),
        body_html=extract_body(msg, "html"),
        attachments=extract_attachments(msg),
    )
