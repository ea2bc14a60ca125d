"""Mailbox client port - abstract interface for mailbox access.

Hexagonal Architecture: the connection manager and message fetcher depend on
this port, not on a concrete IMAP library.
"""

from abc import ABC, abstractmethod
from datetime import date
from typing import List


class MailboxClientPort(ABC):
    """Abstract interface for one authenticated mailbox session.

    A fresh client is created for every connect attempt; a closed client is
    never reused.
    """

    @abstractmethod
    async def connect(self) -> None:
        """Open and authenticate the session.

        Raises:
            MailboxClientError: Network, TLS or authentication failure
        """
        pass

    @abstractmethod
    async def select_readonly(self, mailbox: str) -> int:
        """Open a mailbox without modifying flags.

        Returns:
            Number of messages in the mailbox
        """
        pass

    @abstractmethod
    async def search_since(self, since: date) -> List[int]:
        """Search the selected mailbox for messages received on/after a date.

        Returns:
            Sequence numbers in server order
        """
        pass

    @abstractmethod
    async def fetch_raw(self, sequence_number: int) -> bytes:
        """Retrieve the full RFC 822 source of one message."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Log out and release the connection."""
        pass


# Custom exceptions for mailbox client operations
class MailboxClientError(Exception):
    """Base exception for mailbox client operations"""
    pass


class MailboxSessionLostError(MailboxClientError):
    """The server dropped the session"""
    pass
