"""Domain error taxonomy.

Only errors that make a request meaningless (no mailbox session, unknown
message id) reach callers. Extraction and generation failures are absorbed
into degraded results by the components that raise them.
"""

from typing import Optional


class TalkDigestError(Exception):
    """Base exception for all domain errors"""
    code = "talkdigest_error"


# Mailbox lifecycle

class MailboxConnectionError(TalkDigestError):
    """Establishing (or keeping) the mailbox session failed"""
    code = "mailbox_connection_failed"


class AlreadyConnectingError(TalkDigestError):
    """connect() called while a connection attempt is running or established"""
    code = "already_connecting"


class NotConnectedError(TalkDigestError):
    """Operation requires an established mailbox session"""
    code = "not_connected"


# Messages

class MessageNotFoundError(TalkDigestError):
    """No stored message carries the requested id"""
    code = "message_not_found"

    def __init__(self, message_id: int):
        super().__init__(f"Message {message_id} not found")
        self.message_id = message_id


# Attachment analysis (raised by extractor readers, turned into empty results by the extractors)

class ExtractionError(TalkDigestError):
    """An extractor could not produce a result for one attachment"""
    code = "extraction_failed"


# Summary generation (never surfaced past the orchestrator)

class SummaryGenerationError(TalkDigestError):
    """The AI endpoint failed or returned a non-success status"""
    code = "summary_generation_failed"

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class SummaryParseError(SummaryGenerationError):
    """The AI response did not contain both labeled sections"""
    code = "summary_parse_failed"
