"""AttachmentExtractorPort interface for attachment analysis.

Defines the contract every extractor (OCR, PDF, word-processing, audio)
implements. The dispatcher routes on `category` without knowing about
concrete extraction libraries.
"""

from abc import ABC, abstractmethod
from pathlib import Path

from .models import AnalysisResult, AttachmentCategory


class AttachmentExtractorPort(ABC):
    """Port interface for attachment extractors.

    Example implementations:
    - ImageOCRExtractor: Pillow pre-processing + Tesseract OCR
    - PDFTextExtractor: pdfplumber text and metadata
    - WordDocumentExtractor: python-docx paragraph text
    - PlaceholderAudioTranscriber: canned transcript
    """

    @abstractmethod
    async def extract(self, path: Path, filename: str) -> AnalysisResult:
        """Analyze one materialized attachment.

        Args:
            path: Temporary file holding the attachment bytes
            filename: Original attachment name (reported on the result)

        Returns:
            Category-specific analysis result

        Raises:
            Should not raise - failures are returned as a zero-confidence
            result for this attachment.
        """
        pass

    @property
    @abstractmethod
    def category(self) -> AttachmentCategory:
        """Attachment category this extractor handles."""
        pass

    @property
    @abstractmethod
    def version(self) -> str:
        """Extractor version identifier for logging.

        Format: <type>_v<number> (e.g., 'ocr_tesseract_v1', 'pdf_text_v1')
        """
        pass
