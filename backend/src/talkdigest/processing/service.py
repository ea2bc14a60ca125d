"""Message processing - attachment analysis, summaries, write-back.

Processing one message:
1. Look the message up (unknown id fails before any work is done)
2. Analyze its own attachments, then any transient ones, into one aggregate
3. Generate the two summaries in a single AI call (or the fallback)
4. Write processed/summaries/analysis/processed_at onto the stored message
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Iterable, Optional

from ..domain.analysis import AggregatedAnalysis
from ..domain.errors import MessageNotFoundError
from ..domain.messages import Attachment, Message, MessageStore
from ..domain.summaries import SummaryOrchestrator, SummaryResult
from ..infrastructure.extractors import AttachmentAnalysisDispatcher

logger = logging.getLogger(__name__)


@dataclass
class ProcessingResult:
    """Outcome of processing one message."""
    message: Message
    summaries: SummaryResult
    attachment_analysis: AggregatedAnalysis


class MessageProcessingService:
    """Runs the analysis and summary pipeline for stored messages."""

    def __init__(
        self,
        store: MessageStore,
        dispatcher: AttachmentAnalysisDispatcher,
        orchestrator: SummaryOrchestrator,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.store = store
        self.dispatcher = dispatcher
        self.orchestrator = orchestrator
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    async def process_message(
        self,
        message_id: int,
        transient_attachments: Iterable[Attachment] = (),
    ) -> ProcessingResult:
        """Analyze attachments and generate summaries for one message.

        Args:
            message_id: Id of a stored message
            transient_attachments: Files supplied with this request only

        Returns:
            ProcessingResult with the updated message

        Raises:
            MessageNotFoundError: If no stored message carries this id
        """
        message = self.store.get(message_id)
        if message is None:
            raise MessageNotFoundError(message_id)

        transient = list(transient_attachments)
        logger.info(
            f"Processing message {message_id}: {len(message.attachments)} own and "
            f"{len(transient)} uploaded attachments",
            extra={"message_id": message_id},
        )

        analysis = await self.dispatcher.analyze_all(message.attachments)
        await self.dispatcher.analyze_all(transient, aggregate=analysis)

        summaries = await self.orchestrator.generate_summaries(message, analysis)

        message = await self.store.mark_processed(
            message_id,
            summaries=summaries,
            analysis=analysis,
            processed_at=self._clock(),
        )

        logger.info(
            f"Message {message_id} processed "
            f"({len(analysis)} analyses, confidence={summaries.confidence})",
            extra={"message_id": message_id},
        )

        return ProcessingResult(
            message=message,
            summaries=summaries,
            attachment_analysis=analysis,
        )
