"""Attachment analysis results.

One result type per AttachmentCategory. Every result carries the source
filename and a self-reported confidence in [0, 1]; a zero-confidence result
with empty fields stands in for an attachment whose extraction failed.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Union


class AttachmentCategory(str, Enum):
    """Closed set of attachment kinds the analyzer understands.

    Declaration order is the routing priority.
    """
    IMAGE = "image"
    PDF = "pdf"
    DOCUMENT = "document"
    AUDIO = "audio"


@dataclass
class ImageAnalysis:
    """OCR output for one image.

    Attributes:
        filename: Source attachment name
        extracted_text: Raw OCR text
        speaker: Name found by the speaker heuristic, if any
        is_speaker_image: Text mentions speaker/guest vocabulary
        confidence: 0.8 for substantial text, 0.4 otherwise, 0.0 on failure
    """
    filename: str
    extracted_text: str = ""
    speaker: Optional[str] = None
    is_speaker_image: bool = False
    confidence: float = 0.0

    category = AttachmentCategory.IMAGE


@dataclass
class DocumentAnalysis:
    """Text extracted from a PDF or word-processing document.

    Attributes:
        filename: Source attachment name
        text: Full extracted text
        page_count: Pages (PDF) or 0 when the format has no page notion
        title: Document title from metadata, if present
        messages: Non-fatal extractor diagnostics
        confidence: 0.9 (PDF), 0.8 (document), 0.0 on failure
    """
    filename: str
    text: str = ""
    page_count: int = 0
    title: Optional[str] = None
    messages: List[str] = field(default_factory=list)
    confidence: float = 0.0

    category = AttachmentCategory.DOCUMENT


@dataclass
class AudioAnalysis:
    """Transcript of one audio attachment."""
    filename: str
    text: str = ""
    confidence: float = 0.0
    language: Optional[str] = None
    duration_seconds: float = 0.0

    category = AttachmentCategory.AUDIO


AnalysisResult = Union[ImageAnalysis, DocumentAnalysis, AudioAnalysis]


def empty_result(category: AttachmentCategory, filename: str) -> AnalysisResult:
    """Zero-confidence placeholder for an attachment whose extraction failed."""
    if category == AttachmentCategory.IMAGE:
        return ImageAnalysis(filename=filename)
    if category in (AttachmentCategory.PDF, AttachmentCategory.DOCUMENT):
        return DocumentAnalysis(filename=filename)
    if category == AttachmentCategory.AUDIO:
        return AudioAnalysis(filename=filename)
    raise ValueError(f"Unknown attachment category: {category}")


@dataclass
class AggregatedAnalysis:
    """All analysis results for one processing request.

    `speaker` is the first non-empty speaker reported by an image, in the
    order results were added. Later images never replace it.
    """
    images: List[ImageAnalysis] = field(default_factory=list)
    documents: List[DocumentAnalysis] = field(default_factory=list)
    audio: List[AudioAnalysis] = field(default_factory=list)
    speaker: Optional[str] = None

    def add(self, result: AnalysisResult) -> None:
        if isinstance(result, ImageAnalysis):
            self.images.append(result)
            if result.speaker and not self.speaker:
                self.speaker = result.speaker
        elif isinstance(result, DocumentAnalysis):
            self.documents.append(result)
        elif isinstance(result, AudioAnalysis):
            self.audio.append(result)
        else:
            raise TypeError(f"Unsupported analysis result: {type(result).__name__}")

    def __len__(self) -> int:
        return len(self.images) + len(self.documents) + len(self.audio)
