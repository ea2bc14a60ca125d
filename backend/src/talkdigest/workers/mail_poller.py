"""Background tasks run inside the application lifespan.

- auto_connect: one delayed connect() after startup
- poll_mailbox: periodic fetch-and-merge while the mailbox is connected

A failing cycle is logged and the loop carries on; only cancellation stops it.
"""

import asyncio
import logging

from ..container import TalkDigestService
from ..domain.errors import AlreadyConnectingError, TalkDigestError
from ..observability.request_id import generate_request_id, request_context

logger = logging.getLogger(__name__)


async def auto_connect(service: TalkDigestService, delay_seconds: float) -> None:
    """Connect to the mailbox once, after a startup delay."""
    await asyncio.sleep(delay_seconds)
    with request_context(generate_request_id("connect")):
        logger.info("Auto-connecting to mailbox")
        try:
            await service.connection_manager.connect()
        except AlreadyConnectingError:
            logger.info("Mailbox connection already in progress, skipping auto-connect")
        except TalkDigestError as e:
            # Retry scheduling lives in the connection manager
            logger.warning(f"Auto-connect failed: {e}")


async def run_fetch_cycle(service: TalkDigestService) -> int:
    """One periodic cycle. Returns the number of newly stored messages."""
    if not service.connection_manager.session.is_connected:
        logger.debug("Mailbox not connected, skipping periodic fetch")
        return 0

    try:
        inserted = await service.fetch_and_merge()
    except TalkDigestError as e:
        logger.error(f"Periodic fetch failed: {e}")
        return 0

    if inserted:
        logger.info(f"Periodic fetch stored {len(inserted)} new messages")
    return len(inserted)


async def poll_mailbox(service: TalkDigestService, interval_seconds: float) -> None:
    """Run fetch cycles forever at a fixed interval."""
    logger.info(f"Mail poller started (interval {interval_seconds}s)")
    while True:
        await asyncio.sleep(interval_seconds)
        with request_context(generate_request_id("poll")):
            try:
                await run_fetch_cycle(service)
            except Exception:
                logger.exception("Unexpected error in mail poller")
