"""Message and Attachment entities held in the in-memory store."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from ..analysis.models import AggregatedAnalysis
from ..summaries.models import SummaryResult

UNNAMED_ATTACHMENT = "unnamed"
UNKNOWN_MIME_TYPE = "unknown"


@dataclass
class Attachment:
    """One file belonging to a message or uploaded with a processing request.

    Attributes:
        name: Original filename ("unnamed" if the part had none)
        mime_type: Declared MIME type ("unknown" if the part had none)
        size_bytes: Size of the content in bytes
        content: Raw bytes; None if not materialized
    """
    name: str
    mime_type: str
    size_bytes: int = 0
    content: Optional[bytes] = field(default=None, repr=False)


@dataclass
class Message:
    """A parsed mailbox message.

    `id` is the IMAP sequence number and the store's dedup key. The processing
    fields are written together by MessageStore.mark_processed().
    """
    id: int
    subject: str
    sender: str
    received_at: datetime
    body_text: str = ""
    body_html: str = ""
    attachments: List[Attachment] = field(default_factory=list)
    processed: bool = False
    summaries: Optional[SummaryResult] = None
    attachment_analysis: Optional[AggregatedAnalysis] = None
    processed_at: Optional[datetime] = None
