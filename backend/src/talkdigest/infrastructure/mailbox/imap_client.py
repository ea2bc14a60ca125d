"""IMAP adapter for MailboxClientPort.

Wraps the blocking stdlib imaplib client; every server round trip runs in a
worker thread via asyncio.to_thread.
"""

import asyncio
import imaplib
import logging
import ssl
from datetime import date
from typing import List, Optional

from ...domain.mailbox.ports import (
    MailboxClientError,
    MailboxClientPort,
    MailboxSessionLostError,
)

logger = logging.getLogger(__name__)

# IMAP dates use English month abbreviations regardless of locale
_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
           "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def format_imap_date(value: date) -> str:
    """Format a date as an IMAP search date ('1-Mar-2025')."""
    return f"{value.day}-{_MONTHS[value.month - 1]}-{value.year}"


class ImapMailboxClient(MailboxClientPort):
    """One IMAP4-over-TLS session.

    Example:
        client = ImapMailboxClient("imap.example.org", 993, "user", "secret")
        await client.connect()
        await client.select_readonly("INBOX")
        seqs = await client.search_since(date(2025, 3, 1))
    """

    def __init__(
        self,
        host: str,
        port: int,
        user: str,
        password: str,
        timeout: float = 60.0,
        verify_tls: bool = True,
    ):
        self.host = host
        self.port = port
        self.user = user
        self._password = password
        self.timeout = timeout
        self.verify_tls = verify_tls
        self._conn: Optional[imaplib.IMAP4_SSL] = None

    def _ssl_context(self) -> ssl.SSLContext:
        context = ssl.create_default_context()
        if not self.verify_tls:
            context.check_hostname = False
            context.verify_mode = ssl.CERT_NONE
        return context

    def _open(self) -> imaplib.IMAP4_SSL:
        conn = imaplib.IMAP4_SSL(
            self.host,
            self.port,
            ssl_context=self._ssl_context(),
            timeout=self.timeout,
        )
        try:
            conn.login(self.user, self._password)
        except Exception:
            conn.shutdown()
            raise
        return conn

    async def connect(self) -> None:
        logger.info(f"Connecting to IMAP server {self.host}:{self.port} as {self.user}")
        try:
            self._conn = await asyncio.to_thread(self._open)
        except (imaplib.IMAP4.error, OSError) as e:
            raise MailboxClientError(f"IMAP connection to {self.host}:{self.port} failed: {e}") from e

    async def select_readonly(self, mailbox: str) -> int:
        status, data = await self._call("select", mailbox, readonly=True)
        if status != "OK":
            raise MailboxClientError(f"Unable to select mailbox '{mailbox}'")
        try:
            return int(data[0])
        except (TypeError, ValueError, IndexError):
            return 0

    async def search_since(self, since: date) -> List[int]:
        status, data = await self._call("search", None, "SINCE", format_imap_date(since))
        if status != "OK":
            raise MailboxClientError(f"IMAP search failed: {data!r}")
        if not data or not data[0]:
            return []
        return [int(seq) for seq in data[0].split()]

    async def fetch_raw(self, sequence_number: int) -> bytes:
        status, data = await self._call("fetch", str(sequence_number), "(RFC822)")
        if status != "OK" or not data:
            raise MailboxClientError(f"IMAP fetch of message {sequence_number} failed")

        # data is [(b'1 (RFC822 {n}', b'<raw>'), b')']
        for item in data:
            if isinstance(item, tuple) and len(item) >= 2 and item[1]:
                return item[1]
        raise MailboxClientError(f"Message {sequence_number} returned no body")

    async def close(self) -> None:
        conn, self._conn = self._conn, None
        if conn is None:
            return
        try:
            await asyncio.to_thread(conn.logout)
        except (imaplib.IMAP4.error, OSError) as e:
            raise MailboxClientError(f"IMAP logout failed: {e}") from e

    async def _call(self, command: str, *args, **kwargs):
        if self._conn is None:
            raise MailboxSessionLostError("IMAP session is not open")

        method = getattr(self._conn, command)
        try:
            return await asyncio.to_thread(method, *args, **kwargs)
        except imaplib.IMAP4.abort as e:
            raise MailboxSessionLostError(f"IMAP session lost during {command}: {e}") from e
        except OSError as e:
            raise MailboxSessionLostError(f"IMAP connection error during {command}: {e}") from e
        except imaplib.IMAP4.error as e:
            raise MailboxClientError(f"IMAP {command} failed: {e}") from e
