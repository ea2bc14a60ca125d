"""In-memory message store with insert-if-absent semantics.

Messages are keyed by IMAP sequence number and never removed. The store is
kept sorted by `received_at` (newest first) after every insertion.
"""

import asyncio
import logging
from datetime import datetime
from typing import Dict, Iterable, List, Optional

from ..analysis.models import AggregatedAnalysis
from ..errors import MessageNotFoundError
from ..summaries.models import SummaryResult
from .models import Message

logger = logging.getLogger(__name__)


class MessageStore:
    """Process-lifetime collection of fetched messages.

    merge() and mark_processed() run under one asyncio.Lock so the manual
    and periodic fetch triggers can never interleave their
    read-check-insert sequences.
    """

    def __init__(self):
        self._messages: List[Message] = []
        self._index: Dict[int, Message] = {}
        self._lock = asyncio.Lock()

    async def merge(self, new_messages: Iterable[Message]) -> List[Message]:
        """Insert messages whose id is not yet stored.

        A message with an id that is already present is discarded; the stored
        message is never overwritten.

        Args:
            new_messages: Messages from one fetch cycle

        Returns:
            The messages that were actually inserted
        """
        async with self._lock:
            inserted = []
            for message in new_messages:
                if message.id in self._index:
                    continue
                self._index[message.id] = message
                self._messages.append(message)
                inserted.append(message)

            if inserted:
                self._messages.sort(key=lambda m: m.received_at, reverse=True)
                logger.info(f"Stored {len(inserted)} new messages ({len(self._messages)} total)")

            return inserted

    async def mark_processed(
        self,
        message_id: int,
        summaries: SummaryResult,
        analysis: AggregatedAnalysis,
        processed_at: datetime,
    ) -> Message:
        """Write processing results onto a stored message in one step.

        Raises:
            MessageNotFoundError: If no message carries this id
        """
        async with self._lock:
            message = self._index.get(message_id)
            if message is None:
                raise MessageNotFoundError(message_id)

            message.summaries = summaries
            message.attachment_analysis = analysis
            message.processed_at = processed_at
            message.processed = True
            return message

    def get(self, message_id: int) -> Optional[Message]:
        return self._index.get(message_id)

    def list(self) -> List[Message]:
        """Stored messages, newest first."""
        return list(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    def __contains__(self, message_id: object) -> bool:
        return message_id in self._index
