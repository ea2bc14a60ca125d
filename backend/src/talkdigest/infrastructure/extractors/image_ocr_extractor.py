"""Image OCR extractor - Pillow pre-processing followed by Tesseract OCR.

Pipeline per image:
1. Apply EXIF orientation, convert to RGB
2. Shrink so the long edge is at most `max_edge_px` (never enlarge)
3. Auto-contrast and sharpen
4. Save a derived JPEG (quality 90) beside the source and OCR it
5. Run the speaker heuristic on the recognized text

The derived JPEG is deleted whether or not OCR succeeds.
"""

import asyncio
import logging
from pathlib import Path

import pytesseract
from PIL import Image, ImageFilter, ImageOps

from ...domain.analysis import (
    AttachmentCategory,
    AttachmentExtractorPort,
    ImageAnalysis,
    find_speaker,
    is_speaker_image,
)
from ...domain.errors import ExtractionError
from ..storage.temp_files import derived_path, remove_quietly

logger = logging.getLogger(__name__)


class ImageOCRExtractor(AttachmentExtractorPort):
    """OCR extractor for image attachments (posters, slides, photos)."""

    # Texts longer than this count as substantial OCR output
    SUBSTANTIAL_TEXT_CHARS = 50
    HIGH_CONFIDENCE = 0.8
    LOW_CONFIDENCE = 0.4
    JPEG_QUALITY = 90

    def __init__(self, languages: str = "swe+eng", max_edge_px: int = 1200):
        """Initialize OCR extractor.

        Args:
            languages: Tesseract language models, '+'-joined
            max_edge_px: Upper bound for the longer image edge
        """
        self.languages = languages
        self.max_edge_px = max_edge_px

    @property
    def category(self) -> AttachmentCategory:
        return AttachmentCategory.IMAGE

    @property
    def version(self) -> str:
        return "ocr_tesseract_v1"

    async def extract(self, path: Path, filename: str) -> ImageAnalysis:
        processed = derived_path(path, "_processed", ".jpg")
        try:
            text = await asyncio.to_thread(self.recognize, path, processed)
        except ExtractionError as e:
            logger.error(f"OCR failed for {filename}: {e}", extra={"attachment": filename})
            return ImageAnalysis(filename=filename)
        finally:
            await asyncio.to_thread(remove_quietly, processed)

        text = text.strip()
        speaker = find_speaker(text)
        confidence = (
            self.HIGH_CONFIDENCE if len(text) > self.SUBSTANTIAL_TEXT_CHARS else self.LOW_CONFIDENCE
        )

        logger.info(
            f"OCR extracted {len(text)} chars from {filename}"
            + (f", speaker: {speaker}" if speaker else ""),
            extra={"attachment": filename, "category": self.category.value},
        )

        return ImageAnalysis(
            filename=filename,
            extracted_text=text,
            speaker=speaker,
            is_speaker_image=is_speaker_image(text),
            confidence=confidence,
        )

    def recognize(self, source: Path, processed: Path) -> str:
        """Pre-process `source` into `processed` and OCR the result.

        Raises:
            ExtractionError: If Pillow cannot read the image or Tesseract fails
        """
        try:
            self._preprocess(source, processed)
            return pytesseract.image_to_string(str(processed), lang=self.languages)
        except Exception as e:
            raise ExtractionError(f"OCR failed for {source.name}: {e}") from e

    def _preprocess(self, source: Path, target: Path) -> None:
        with Image.open(source) as image:
            image = ImageOps.exif_transpose(image).convert("RGB")
            image.thumbnail((self.max_edge_px, self.max_edge_px))
            image = ImageOps.autocontrast(image)
            image = image.filter(ImageFilter.SHARPEN)
            image.save(target, format="JPEG", quality=self.JPEG_QUALITY)
