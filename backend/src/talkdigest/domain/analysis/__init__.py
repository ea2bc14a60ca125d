"""Attachment analysis domain - result types, categorization, speaker heuristic"""

from .models import (
    AttachmentCategory,
    ImageAnalysis,
    DocumentAnalysis,
    AudioAnalysis,
    AnalysisResult,
    AggregatedAnalysis,
    empty_result,
)
from .categories import categorize, normalize_mime_type
from .speaker import find_speaker, is_speaker_image
from .ports import AttachmentExtractorPort

__all__ = [
    "AttachmentCategory",
    "ImageAnalysis",
    "DocumentAnalysis",
    "AudioAnalysis",
    "AnalysisResult",
    "AggregatedAnalysis",
    "empty_result",
    "categorize",
    "normalize_mime_type",
    "find_speaker",
    "is_speaker_image",
    "AttachmentExtractorPort",
]
