"""PDF text extractor - full text, page count and title via pdfplumber."""

import asyncio
import logging
from pathlib import Path
from typing import Optional

import pdfplumber

from ...domain.analysis import AttachmentCategory, AttachmentExtractorPort, DocumentAnalysis
from ...domain.errors import ExtractionError

logger = logging.getLogger(__name__)


class PDFTextExtractor(AttachmentExtractorPort):
    """Text extractor for text-based PDFs.

    Scanned PDFs yield little or no text; they are not OCR'd. The result then
    carries an empty `text` at the usual confidence and is left out of the
    summary content block by the length threshold.
    """

    CONFIDENCE = 0.9

    @property
    def category(self) -> AttachmentCategory:
        return AttachmentCategory.PDF

    @property
    def version(self) -> str:
        return "pdf_text_v1"

    async def extract(self, path: Path, filename: str) -> DocumentAnalysis:
        try:
            text, page_count, title = await asyncio.to_thread(read_pdf, path)
        except ExtractionError as e:
            logger.error(
                f"PDF extraction failed for {filename}: {e}",
                extra={"attachment": filename},
            )
            return DocumentAnalysis(filename=filename)

        logger.info(
            f"PDF text stats: {len(text)} chars, {page_count} pages",
            extra={"attachment": filename, "category": self.category.value},
        )

        return DocumentAnalysis(
            filename=filename,
            text=text,
            page_count=page_count,
            title=title,
            confidence=self.CONFIDENCE,
        )


def read_pdf(path: Path) -> tuple[str, int, Optional[str]]:
    """Return (text, page_count, title) of a PDF.

    Raises:
        ExtractionError: If pdfplumber cannot open or read the file
    """
    try:
        with pdfplumber.open(path) as pdf:
            page_count = len(pdf.pages)
            pages = [page.extract_text() or "" for page in pdf.pages]
            title = (pdf.metadata or {}).get("Title")
    except Exception as e:
        raise ExtractionError(f"Unreadable PDF {path.name}: {e}") from e

    if isinstance(title, bytes):
        title = title.decode("utf-8", errors="replace")
    title = str(title).strip() if title else ""

    return "\n".join(pages).strip(), page_count, title or None
