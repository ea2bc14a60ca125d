"""Attachment analysis dispatcher.

Routes each attachment to the extractor for its category. One attachment's
failure never affects another: whatever goes wrong is turned into a
zero-confidence result for that attachment only.
"""

import logging
import time
from pathlib import Path
from typing import Iterable, Optional, Union

from ...domain.analysis import AggregatedAnalysis, AnalysisResult, categorize, empty_result
from ...domain.messages.models import Attachment
from ..storage.temp_files import materialized
from .extractor_registry import ExtractorRegistry

logger = logging.getLogger(__name__)


class AttachmentAnalysisDispatcher:
    """Materializes attachment bytes and runs the matching extractor."""

    def __init__(self, registry: ExtractorRegistry, scratch_dir: Union[str, Path]):
        """Initialize dispatcher.

        Args:
            registry: Complete extractor registry
            scratch_dir: Directory for temporary attachment files
        """
        registry.ensure_complete()
        self.registry = registry
        self.scratch_dir = Path(scratch_dir)
        logger.info(
            "Attachment extractors: "
            + ", ".join(extractor.version for extractor in registry.list_extractors())
        )

    async def analyze(self, attachment: Attachment) -> Optional[AnalysisResult]:
        """Analyze one attachment.

        Returns:
            Category-specific result, or None when the attachment has no
            content or its type is not analyzed
        """
        category = categorize(attachment.mime_type)
        if category is None:
            logger.debug(
                f"Skipping {attachment.name}: unsupported type {attachment.mime_type}",
                extra={"attachment": attachment.name},
            )
            return None
        if not attachment.content:
            logger.debug(f"Skipping {attachment.name}: no content", extra={"attachment": attachment.name})
            return None

        extractor = self.registry.get_extractor(category)
        start = time.perf_counter()
        try:
            async with materialized(attachment.content, attachment.name, self.scratch_dir) as path:
                result = await extractor.extract(path, attachment.name)
        except Exception as e:
            logger.error(
                f"Analysis of {attachment.name} failed: {e}",
                extra={"attachment": attachment.name, "category": category.value},
            )
            return empty_result(category, attachment.name)

        logger.info(
            f"Analyzed {attachment.name} with {extractor.version} "
            f"(confidence={result.confidence})",
            extra={
                "attachment": attachment.name,
                "category": category.value,
                "duration_ms": int((time.perf_counter() - start) * 1000),
            },
        )
        return result

    async def analyze_all(
        self,
        attachments: Iterable[Attachment],
        aggregate: Optional[AggregatedAnalysis] = None,
    ) -> AggregatedAnalysis:
        """Analyze attachments in order, accumulating into one aggregate."""
        aggregate = aggregate if aggregate is not None else AggregatedAnalysis()
        for attachment in attachments:
            result = await self.analyze(attachment)
            if result is not None:
                aggregate.add(result)
        return aggregate
