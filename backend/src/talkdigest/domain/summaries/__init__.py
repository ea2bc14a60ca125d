"""Summaries domain - result type, prompt templates, generation orchestrator"""

from .models import SummaryResult, GENERATED_CONFIDENCE, FALLBACK_CONFIDENCE
from .orchestrator import (
    SummaryOrchestrator,
    parse_summary_response,
    build_fallback_summary,
)

__all__ = [
    "SummaryResult",
    "GENERATED_CONFIDENCE",
    "FALLBACK_CONFIDENCE",
    "SummaryOrchestrator",
    "parse_summary_response",
    "build_fallback_summary",
]
