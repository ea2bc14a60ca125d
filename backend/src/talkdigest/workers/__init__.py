"""Background workers started by the application lifespan"""

from .mail_poller import auto_connect, poll_mailbox, run_fetch_cycle

__all__ = ["auto_connect", "poll_mailbox", "run_fetch_cycle"]
