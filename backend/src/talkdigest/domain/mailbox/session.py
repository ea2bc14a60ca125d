"""MailboxSession - the single owned record of mailbox connection health."""

from dataclasses import dataclass, replace
from typing import Optional

from .connection_state import ConnectionState


@dataclass
class MailboxSession:
    """Connection bookkeeping for the one mailbox this process reads.

    Mutated only by the ConnectionManager; everything else reads snapshots.

    Attributes:
        state: Current lifecycle state
        consecutive_failures: Failed connect attempts since the last success
        last_error: Message of the most recent connect failure
    """
    state: ConnectionState = ConnectionState.DISCONNECTED
    consecutive_failures: int = 0
    last_error: Optional[str] = None

    @property
    def is_connected(self) -> bool:
        return self.state == ConnectionState.CONNECTED

    def snapshot(self) -> "MailboxSession":
        return replace(self)
