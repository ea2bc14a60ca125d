"""Mailbox adapters"""

from .imap_client import ImapMailboxClient, format_imap_date

__all__ = ["ImapMailboxClient", "format_imap_date"]
