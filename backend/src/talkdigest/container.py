"""Service container - wires the components for one application instance."""

import logging
import time
from dataclasses import dataclass, field
from typing import List, Optional

from .config import Settings
from .domain.ai import LLMProviderPort
from .domain.mailbox import ConnectionManager
from .domain.messages import Message, MessageStore
from .domain.summaries import SummaryOrchestrator
from .infrastructure.ai import create_llm_provider
from .infrastructure.extractors import (
    AttachmentAnalysisDispatcher,
    ExtractorRegistry,
    build_default_registry,
)
from .infrastructure.ingest import MessageFetcher
from .infrastructure.mailbox import ImapMailboxClient
from .processing import MessageProcessingService

logger = logging.getLogger(__name__)


@dataclass
class TalkDigestService:
    """All long-lived components, shared by the API and the mail poller."""
    settings: Settings
    connection_manager: ConnectionManager
    fetcher: MessageFetcher
    store: MessageStore
    processing: MessageProcessingService
    started_at: float = field(default_factory=time.monotonic)

    @property
    def uptime_seconds(self) -> float:
        return time.monotonic() - self.started_at

    async def fetch_and_merge(self) -> List[Message]:
        """Run one fetch cycle and merge the result into the store.

        Returns:
            Newly stored messages

        Raises:
            NotConnectedError: If the mailbox is not connected
            MailboxConnectionError: If the session broke during the fetch
        """
        messages = await self.fetcher.fetch()
        return await self.store.merge(messages)


def build_service(
    settings: Settings,
    connection_manager: Optional[ConnectionManager] = None,
    registry: Optional[ExtractorRegistry] = None,
    provider: Optional[LLMProviderPort] = None,
) -> TalkDigestService:
    """Build the service graph from settings.

    Components passed in replace the ones built from settings (tests use this
    to substitute fakes for IMAP, OCR and the LLM).
    """
    if connection_manager is None:
        connection_manager = ConnectionManager(
            lambda: ImapMailboxClient(
                host=settings.IMAP_HOST,
                port=settings.IMAP_PORT,
                user=settings.IMAP_USER,
                password=settings.IMAP_PASSWORD,
                timeout=settings.IMAP_TIMEOUT_SECONDS,
                verify_tls=settings.IMAP_VERIFY_TLS,
            ),
            retry_delay_seconds=settings.MAIL_RETRY_DELAY_SECONDS,
            max_attempts=settings.MAIL_MAX_CONNECT_ATTEMPTS,
        )

    if registry is None:
        registry = build_default_registry(
            ocr_languages=settings.OCR_LANGUAGES,
            ocr_max_edge_px=settings.OCR_MAX_EDGE_PX,
        )

    if provider is None:
        provider = create_llm_provider(settings)

    store = MessageStore()
    fetcher = MessageFetcher(
        connection_manager,
        mailbox=settings.IMAP_MAILBOX,
        search_days=settings.MAIL_SEARCH_DAYS,
        fetch_limit=settings.MAIL_FETCH_LIMIT,
    )
    orchestrator = SummaryOrchestrator(
        provider,
        max_tokens=settings.SUMMARY_MAX_TOKENS,
        language=settings.SUMMARY_LANGUAGE,
        organization=settings.SUMMARY_ORGANIZATION,
    )
    processing = MessageProcessingService(
        store,
        AttachmentAnalysisDispatcher(registry, settings.UPLOAD_DIR),
        orchestrator,
    )

    logger.info(f"Service built (LLM provider: {provider.name})", extra={"provider": provider.name})

    return TalkDigestService(
        settings=settings,
        connection_manager=connection_manager,
        fetcher=fetcher,
        store=store,
        processing=processing,
    )
