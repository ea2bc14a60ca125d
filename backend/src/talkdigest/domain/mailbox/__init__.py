"""Mailbox domain module - session state, lifecycle management, client port"""

from .connection_state import (
    ConnectionState,
    ALLOWED_TRANSITIONS,
    can_transition,
    get_allowed_transitions,
)
from .session import MailboxSession
from .ports import MailboxClientPort, MailboxClientError, MailboxSessionLostError
from .connection_manager import ConnectionManager

__all__ = [
    "ConnectionState",
    "ALLOWED_TRANSITIONS",
    "can_transition",
    "get_allowed_transitions",
    "MailboxSession",
    "MailboxClientPort",
    "MailboxClientError",
    "MailboxSessionLostError",
    "ConnectionManager",
]
