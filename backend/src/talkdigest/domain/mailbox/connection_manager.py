"""Connection manager - owns the mailbox session and its retry policy.

Lifecycle:
    DISCONNECTED → CONNECTING → CONNECTED
    CONNECTING → BACKOFF → CONNECTING   (automatic retry after a fixed delay)
    CONNECTED → DISCONNECTED            (session end or disconnect())

A failed connect() schedules a fire-and-forget retry while fewer than
`max_attempts` consecutive failures have been recorded. Once the cap is
reached the manager stays DISCONNECTED until connect() is called manually.
"""

import asyncio
import logging
from typing import Callable, Optional

from ..errors import AlreadyConnectingError, MailboxConnectionError, NotConnectedError
from .connection_state import ConnectionState, can_transition
from .ports import MailboxClientPort
from .session import MailboxSession

logger = logging.getLogger(__name__)

DEFAULT_RETRY_DELAY_SECONDS = 30.0
DEFAULT_MAX_ATTEMPTS = 5


class ConnectionManager:
    """Owns the process-wide MailboxSession and the live mailbox client.

    State transitions happen under an asyncio.Lock. The network round trip
    of a connect attempt runs outside the lock; the CONNECTING state keeps a
    second attempt out in the meantime. Each attempt carries the generation
    it started in; disconnect() starts a new generation, so the outcome of an
    attempt that outlived a disconnect never touches the session.

    Example:
        manager = ConnectionManager(lambda: ImapMailboxClient(settings))
        await manager.connect()
        client = manager.require_client()
    """

    def __init__(
        self,
        client_factory: Callable[[], MailboxClientPort],
        retry_delay_seconds: float = DEFAULT_RETRY_DELAY_SECONDS,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ):
        """Initialize connection manager.

        Args:
            client_factory: Builds a fresh, unconnected mailbox client
            retry_delay_seconds: Fixed delay before an automatic retry
            max_attempts: Consecutive failures after which retries stop
        """
        self._client_factory = client_factory
        self.retry_delay_seconds = retry_delay_seconds
        self.max_attempts = max_attempts

        self._session = MailboxSession()
        self._client: Optional[MailboxClientPort] = None
        self._lock = asyncio.Lock()
        self._retry_task: Optional[asyncio.Task] = None
        self._generation = 0

    @property
    def session(self) -> MailboxSession:
        """Read-only snapshot of the current session."""
        return self._session.snapshot()

    @property
    def pending_retry(self) -> Optional[asyncio.Task]:
        """The scheduled automatic retry, if one is waiting."""
        return self._retry_task

    def require_client(self) -> MailboxClientPort:
        """Return the live client.

        Raises:
            NotConnectedError: If the session is not CONNECTED
        """
        if self._session.state != ConnectionState.CONNECTED or self._client is None:
            raise NotConnectedError("Not connected to mailbox. Connect first.")
        return self._client

    async def connect(self) -> None:
        """Establish the mailbox session.

        Raises:
            AlreadyConnectingError: If a session exists or an attempt is running
            MailboxConnectionError: If the attempt failed (a retry may be scheduled)
                or was superseded by disconnect() while in flight
        """
        async with self._lock:
            if self._session.state in (ConnectionState.CONNECTING, ConnectionState.CONNECTED):
                raise AlreadyConnectingError(
                    f"Mailbox is already {self._session.state.value.lower()}"
                )
            # A manual connect during BACKOFF replaces the scheduled retry
            self._cancel_retry()
            self._transition(ConnectionState.CONNECTING)
            self._generation += 1
            attempt = self._generation

        client = self._client_factory()
        try:
            await client.connect()
        except Exception as e:
            await self._record_failure(e, attempt)
            raise MailboxConnectionError(str(e)) from e

        async with self._lock:
            superseded = attempt != self._generation
            if not superseded:
                self._client = client
                self._session.consecutive_failures = 0
                self._session.last_error = None
                self._transition(ConnectionState.CONNECTED)

        if superseded:
            logger.info("Discarding mailbox session opened during disconnect")
            await self._close_quietly(client)
            raise MailboxConnectionError("Connection attempt superseded by disconnect")

        logger.info("Mailbox connection established")

    async def disconnect(self) -> None:
        """Tear down the session. Idempotent and never raises."""
        async with self._lock:
            self._cancel_retry()
            self._generation += 1
            client, self._client = self._client, None
            if self._session.state != ConnectionState.DISCONNECTED:
                self._transition(ConnectionState.DISCONNECTED)

        if client is not None:
            await self._close_quietly(client)
            logger.info("Mailbox connection closed")

    async def session_ended(self, reason: Optional[str] = None) -> None:
        """Record that the server ended an established session.

        No automatic retry is scheduled; the next connect() is manual (or
        comes from application startup).
        """
        async with self._lock:
            client, self._client = self._client, None
            if self._session.state == ConnectionState.CONNECTED:
                self._transition(ConnectionState.DISCONNECTED)
                logger.warning(f"Mailbox session ended: {reason or 'closed by server'}")

        if client is not None:
            await self._close_quietly(client)

    async def _record_failure(self, error: Exception, attempt: int) -> None:
        async with self._lock:
            if attempt != self._generation:
                logger.info(f"Ignoring failure of superseded connection attempt: {error}")
                return

            self._session.consecutive_failures += 1
            self._session.last_error = str(error)
            failures = self._session.consecutive_failures

            logger.error(
                f"Mailbox connection failed ({failures}/{self.max_attempts}): {error}",
                extra={"attempt": failures},
            )

            if failures < self.max_attempts:
                self._transition(ConnectionState.BACKOFF)
                self._retry_task = asyncio.create_task(self._retry_after_delay())
            else:
                self._transition(ConnectionState.DISCONNECTED)
                logger.error(
                    f"Giving up after {failures} consecutive failures; manual connect required"
                )

    async def _retry_after_delay(self) -> None:
        await asyncio.sleep(self.retry_delay_seconds)
        # Detach before connect() so it does not cancel the running task
        self._retry_task = None

        logger.info(
            f"Reconnect attempt {self._session.consecutive_failures}/{self.max_attempts}",
            extra={"attempt": self._session.consecutive_failures},
        )
        try:
            await self.connect()
        except (MailboxConnectionError, AlreadyConnectingError) as e:
            logger.warning(f"Automatic reconnect did not succeed: {e}")

    def _cancel_retry(self) -> None:
        if self._retry_task is not None and not self._retry_task.done():
            self._retry_task.cancel()
        self._retry_task = None

    def _transition(self, to_state: ConnectionState) -> None:
        from_state = self._session.state
        if not can_transition(from_state, to_state):
            raise RuntimeError(f"Illegal mailbox state transition {from_state.value} → {to_state.value}")
        self._session.state = to_state
        logger.debug(
            f"Mailbox state {from_state.value} → {to_state.value}",
            extra={"state": to_state.value},
        )

    @staticmethod
    async def _close_quietly(client: MailboxClientPort) -> None:
        try:
            await client.close()
        except Exception as e:
            logger.warning(f"Error while closing mailbox client: {e}")
