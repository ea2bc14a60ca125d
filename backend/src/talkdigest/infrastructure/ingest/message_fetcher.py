"""Message fetcher - one search-and-retrieve cycle against the mailbox."""

import asyncio
import logging
from datetime import date, timedelta
from typing import Callable, List, Optional

from ...domain.errors import MailboxConnectionError
from ...domain.mailbox import (
    ConnectionManager,
    MailboxClientError,
    MailboxClientPort,
    MailboxSessionLostError,
)
from ...domain.messages.models import Message
from .mime_parser import parse_message

logger = logging.getLogger(__name__)


class MessageFetcher:
    """Retrieves the most recent messages of the search window.

    Selection is by sequence number: when more than `fetch_limit` messages
    match, the highest sequence numbers are kept regardless of their Date
    headers. The returned list is sorted by received_at, newest first.

    Cycles never overlap: the mailbox session carries selected-mailbox state
    and one command at a time, so a second caller waits for the first cycle.
    """

    def __init__(
        self,
        connection_manager: ConnectionManager,
        mailbox: str = "INBOX",
        search_days: int = 7,
        fetch_limit: int = 10,
        today: Optional[Callable[[], date]] = None,
    ):
        if fetch_limit < 1:
            raise ValueError(f"fetch_limit must be positive, got {fetch_limit}")

        self.connection_manager = connection_manager
        self.mailbox = mailbox
        self.search_days = search_days
        self.fetch_limit = fetch_limit
        self._today = today or date.today
        self._lock = asyncio.Lock()

    async def fetch(self) -> List[Message]:
        """Search, retrieve and parse recent messages.

        Returns:
            Parsed messages, newest first (empty list if nothing matched)

        Raises:
            NotConnectedError: If there is no established session
            MailboxConnectionError: If the session broke during the cycle
        """
        async with self._lock:
            messages = await self._fetch_locked()

        messages.sort(key=lambda m: m.received_at, reverse=True)
        return messages

    async def _fetch_locked(self) -> List[Message]:
        client = self.connection_manager.require_client()

        try:
            await client.select_readonly(self.mailbox)
            since = self._today() - timedelta(days=self.search_days)
            sequence_numbers = await client.search_since(since)

            if not sequence_numbers:
                logger.info(f"No messages since {since.isoformat()}")
                return []

            selected = sequence_numbers[-self.fetch_limit:]
            logger.info(
                f"Found {len(sequence_numbers)} messages since {since.isoformat()}, "
                f"retrieving {len(selected)}"
            )

            messages = []
            for seq in selected:
                raw = await self._fetch_raw(client, seq)
                if raw is None:
                    continue
                message = self._parse(seq, raw)
                if message is not None:
                    messages.append(message)

        except MailboxSessionLostError as e:
            await self.connection_manager.session_ended(str(e))
            raise MailboxConnectionError(str(e)) from e
        except MailboxClientError as e:
            raise MailboxConnectionError(str(e)) from e

        return messages

    @staticmethod
    async def _fetch_raw(client: MailboxClientPort, sequence_number: int) -> Optional[bytes]:
        """Retrieve one message; a per-message failure drops only that message."""
        try:
            return await client.fetch_raw(sequence_number)
        except MailboxSessionLostError:
            raise
        except MailboxClientError as e:
            logger.warning(
                f"Dropping message {sequence_number}: fetch failed: {e}",
                extra={"message_id": sequence_number},
            )
            return None

    @staticmethod
    def _parse(sequence_number: int, raw: bytes) -> Optional[Message]:
        try:
            return parse_message(sequence_number, raw)
        except Exception as e:
            logger.warning(
                f"Dropping message {sequence_number}: parse failed: {e}",
                extra={"message_id": sequence_number},
            )
            return None
