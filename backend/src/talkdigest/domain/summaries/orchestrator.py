"""Summary orchestrator - one AI call per message, with a template fallback.

Flow:
1. Build the content block (subject, body, attachment excerpts)
2. Embed it in the instruction prompt and call the LLM provider
3. Split the answer into VERSION A (long) and VERSION B (short)
4. On any failure return the deterministic fallback summary instead
"""

import logging
import re
from typing import TYPE_CHECKING, Optional

from ..ai.ports import LLMError, LLMProviderPort
from ..analysis.models import AggregatedAnalysis
from ..errors import SummaryGenerationError, SummaryParseError
from .models import FALLBACK_CONFIDENCE, GENERATED_CONFIDENCE, SummaryResult
from .prompts import (
    SECTION_DELIMITER,
    build_content_block,
    build_fallback_texts,
    build_summary_prompt,
)

if TYPE_CHECKING:
    from ..messages.models import Message

logger = logging.getLogger(__name__)

DEFAULT_MAX_TOKENS = 2000

# Remainder of the "=== VERSION A ===" header left after splitting
_SECTION_HEADER_RE = re.compile(r"^[\s\w]*===")


def parse_summary_response(text: str) -> tuple[str, str]:
    """Split an AI answer into (long_summary, short_summary).

    Raises:
        SummaryParseError: If either labeled section is missing
    """
    sections = (text or "").split(SECTION_DELIMITER)
    if len(sections) < 3:
        raise SummaryParseError(
            f"Could not parse AI response: expected 2 labeled sections, found {len(sections) - 1}"
        )

    long_summary = _SECTION_HEADER_RE.sub("", sections[1], count=1).strip()
    short_summary = _SECTION_HEADER_RE.sub("", sections[2], count=1).strip()
    return long_summary, short_summary


def build_fallback_summary(
    message: "Message",
    speaker: Optional[str],
    error: str,
) -> SummaryResult:
    """Template summary used whenever AI generation fails. Never raises."""
    long_summary, short_summary = build_fallback_texts(
        getattr(message, "subject", None),
        getattr(message, "body_text", None),
    )
    return SummaryResult(
        long_summary=long_summary,
        short_summary=short_summary,
        speaker=speaker,
        confidence=FALLBACK_CONFIDENCE,
        error=error or "Summary generation failed",
    )


class SummaryOrchestrator:
    """Generates the long and short summary for one message.

    Example:
        orchestrator = SummaryOrchestrator(AnthropicProvider(api_key))
        result = await orchestrator.generate_summaries(message, analysis)
        if result.is_fallback:
            logger.warning(result.error)
    """

    def __init__(
        self,
        provider: LLMProviderPort,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        language: str = "Swedish",
        organization: str = "Rotary Club",
    ):
        self.provider = provider
        self.max_tokens = max_tokens
        self.language = language
        self.organization = organization

    async def generate_summaries(
        self,
        message: "Message",
        analysis: AggregatedAnalysis,
    ) -> SummaryResult:
        """Generate summaries, falling back to templates on any failure.

        Args:
            message: Message being processed
            analysis: Aggregated attachment analysis for the message

        Returns:
            SummaryResult; `error` is set when the fallback was used
        """
        try:
            return await self._generate(message, analysis)
        except Exception as e:
            logger.error(
                f"Summary generation failed, using fallback: {e}",
                extra={"message_id": getattr(message, "id", None)},
            )
            return build_fallback_summary(message, analysis.speaker, str(e))

    async def _generate(self, message: "Message", analysis: AggregatedAnalysis) -> SummaryResult:
        content = build_content_block(message, analysis)
        prompt = build_summary_prompt(content, self.language, self.organization)

        logger.info(
            f"Requesting AI summaries ({len(prompt)} prompt chars)",
            extra={"message_id": message.id, "provider": self.provider.name},
        )

        try:
            result = await self.provider.generate(prompt, self.max_tokens)
        except LLMError as e:
            raise SummaryGenerationError(f"AI provider error: {e}", status_code=e.status_code) from e

        for warning in result.warnings:
            logger.warning(f"AI provider warning: {warning}", extra={"message_id": message.id})

        long_summary, short_summary = parse_summary_response(result.text)

        logger.info(
            f"AI summaries generated in {result.latency_ms}ms",
            extra={
                "message_id": message.id,
                "provider": result.provider,
                "model": result.model,
            },
        )

        return SummaryResult(
            long_summary=long_summary,
            short_summary=short_summary,
            speaker=analysis.speaker,
            confidence=GENERATED_CONFIDENCE,
        )
