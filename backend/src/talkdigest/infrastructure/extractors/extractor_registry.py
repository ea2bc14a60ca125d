"""Extractor Registry - one extractor per attachment category.

Routing is a closed mapping from AttachmentCategory to extractor; a registry
is only usable once every category has an extractor.
"""

import logging
from typing import Dict, List, Optional

from ...domain.analysis import AttachmentCategory, AttachmentExtractorPort
from .audio_transcriber import PlaceholderAudioTranscriber
from .image_ocr_extractor import ImageOCRExtractor
from .pdf_text_extractor import PDFTextExtractor
from .word_document_extractor import WordDocumentExtractor

logger = logging.getLogger(__name__)


class ExtractorRegistry:
    """Registry of attachment extractors keyed by category.

    Example:
        registry = ExtractorRegistry()
        registry.register(ImageOCRExtractor())
        registry.register(PDFTextExtractor())

        extractor = registry.get_extractor(AttachmentCategory.PDF)
        if extractor:
            result = await extractor.extract(path, filename)
    """

    def __init__(self):
        self._extractors: Dict[AttachmentCategory, AttachmentExtractorPort] = {}

    def register(self, extractor: AttachmentExtractorPort) -> None:
        """Register an extractor, replacing any previous one for its category.

        Raises:
            ValueError: If extractor is None
        """
        if extractor is None:
            raise ValueError("Cannot register None as extractor")

        previous = self._extractors.get(extractor.category)
        if previous is not None:
            logger.info(f"Replacing extractor {previous.version} with {extractor.version}")

        self._extractors[extractor.category] = extractor
        logger.info(f"Registered extractor: {extractor.version} ({extractor.category.value})")

    def get_extractor(self, category: AttachmentCategory) -> Optional[AttachmentExtractorPort]:
        return self._extractors.get(category)

    def missing_categories(self) -> List[AttachmentCategory]:
        """Categories without a registered extractor, in routing order."""
        return [category for category in AttachmentCategory if category not in self._extractors]

    def ensure_complete(self) -> None:
        """Raise ValueError unless every category has an extractor."""
        missing = self.missing_categories()
        if missing:
            names = ", ".join(category.value for category in missing)
            raise ValueError(f"No extractor registered for: {names}")

    def list_extractors(self) -> List[AttachmentExtractorPort]:
        return list(self._extractors.values())

    def __len__(self) -> int:
        return len(self._extractors)


def build_default_registry(
    ocr_languages: str = "swe+eng",
    ocr_max_edge_px: int = 1200,
) -> ExtractorRegistry:
    """Registry with the production extractor for every category."""
    registry = ExtractorRegistry()
    registry.register(ImageOCRExtractor(languages=ocr_languages, max_edge_px=ocr_max_edge_px))
    registry.register(PDFTextExtractor())
    registry.register(WordDocumentExtractor())
    registry.register(PlaceholderAudioTranscriber())
    registry.ensure_complete()
    return registry
