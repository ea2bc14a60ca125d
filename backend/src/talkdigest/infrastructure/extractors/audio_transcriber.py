"""Audio transcriber placeholder.

Real speech-to-text is not wired in. Every audio attachment yields the same
canned Swedish transcript so the rest of the pipeline can be exercised end
to end. A real transcriber only has to implement AttachmentExtractorPort
with category AUDIO and replace this class in the registry.
"""

import logging
from pathlib import Path

from ...domain.analysis import AttachmentCategory, AttachmentExtractorPort, AudioAnalysis

logger = logging.getLogger(__name__)

PLACEHOLDER_TRANSCRIPT = (
    "Tack för att ni kom hit idag. Jag ska prata om hur vi kan förbättra "
    "vår lokala gemenskap genom innovativa projekt. Rotary har alltid varit "
    "en kraft för positiv förändring, och idag vill jag dela med mig av "
    "några konkreta exempel på framgångsrika initiativ."
)


class PlaceholderAudioTranscriber(AttachmentExtractorPort):
    """Returns a fixed transcript for any audio attachment."""

    CONFIDENCE = 0.85
    LANGUAGE = "sv"
    DURATION_SECONDS = 1800.0

    @property
    def category(self) -> AttachmentCategory:
        return AttachmentCategory.AUDIO

    @property
    def version(self) -> str:
        return "audio_placeholder_v1"

    async def extract(self, path: Path, filename: str) -> AudioAnalysis:
        logger.info(
            f"Using placeholder transcript for {filename}",
            extra={"attachment": filename, "category": self.category.value},
        )
        return AudioAnalysis(
            filename=filename,
            text=PLACEHOLDER_TRANSCRIPT,
            confidence=self.CONFIDENCE,
            language=self.LANGUAGE,
            duration_seconds=self.DURATION_SECONDS,
        )
