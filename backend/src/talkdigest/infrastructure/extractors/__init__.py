"""Attachment extractors and the category dispatcher"""

from .extractor_registry import ExtractorRegistry, build_default_registry
from .dispatcher import AttachmentAnalysisDispatcher
from .image_ocr_extractor import ImageOCRExtractor
from .pdf_text_extractor import PDFTextExtractor
from .word_document_extractor import WordDocumentExtractor
from .audio_transcriber import PlaceholderAudioTranscriber, PLACEHOLDER_TRANSCRIPT

__all__ = [
    "ExtractorRegistry",
    "build_default_registry",
    "AttachmentAnalysisDispatcher",
    "ImageOCRExtractor",
    "PDFTextExtractor",
    "WordDocumentExtractor",
    "PlaceholderAudioTranscriber",
    "PLACEHOLDER_TRANSCRIPT",
]
