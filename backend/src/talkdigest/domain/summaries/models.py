"""Summary generation result."""

from dataclasses import dataclass
from typing import Optional

GENERATED_CONFIDENCE = 0.9
FALLBACK_CONFIDENCE = 0.3


@dataclass
class SummaryResult:
    """Long (newsletter) and short (social media) summary of one message.

    Attributes:
        long_summary: Member newsletter text
        short_summary: Social media post text
        speaker: Speaker propagated from attachment analysis
        confidence: 0.9 when AI-generated, 0.3 for the template fallback
        error: Why generation fell back; None on success
    """
    long_summary: str
    short_summary: str
    speaker: Optional[str] = None
    confidence: float = GENERATED_CONFIDENCE
    error: Optional[str] = None

    @property
    def is_fallback(self) -> bool:
        return self.error is not None
