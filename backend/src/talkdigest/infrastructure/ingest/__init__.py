"""Message ingestion - MIME parsing and the mailbox fetch cycle"""

from .mime_parser import parse_message, parse_mime_message, extract_attachments
from .message_fetcher import MessageFetcher

__all__ = [
    "parse_message",
    "parse_mime_message",
    "extract_attachments",
    "MessageFetcher",
]
