"""Word-processing document extractor using python-docx.

Reads the raw text of paragraphs and table cells in document order. Library
warnings raised while reading are kept as diagnostics on the result; they
never fail the extraction.
"""

import asyncio
import logging
import warnings
from pathlib import Path
from typing import List

from docx import Document

from ...domain.analysis import AttachmentCategory, AttachmentExtractorPort, DocumentAnalysis
from ...domain.errors import ExtractionError

logger = logging.getLogger(__name__)


class WordDocumentExtractor(AttachmentExtractorPort):
    """Raw text extractor for .docx attachments."""

    CONFIDENCE = 0.8

    @property
    def category(self) -> AttachmentCategory:
        return AttachmentCategory.DOCUMENT

    @property
    def version(self) -> str:
        return "docx_text_v1"

    async def extract(self, path: Path, filename: str) -> DocumentAnalysis:
        try:
            text, messages = await asyncio.to_thread(read_docx, path)
        except ExtractionError as e:
            logger.error(
                f"Document extraction failed for {filename}: {e}",
                extra={"attachment": filename},
            )
            return DocumentAnalysis(filename=filename)

        for message in messages:
            logger.warning(f"{filename}: {message}", extra={"attachment": filename})

        logger.info(
            f"Extracted {len(text)} chars from {filename}",
            extra={"attachment": filename, "category": self.category.value},
        )

        return DocumentAnalysis(
            filename=filename,
            text=text,
            messages=messages,
            confidence=self.CONFIDENCE,
        )


def read_docx(path: Path) -> tuple[str, List[str]]:
    """Return (text, warning messages) of a .docx file.

    Raises:
        ExtractionError: If python-docx cannot open the file
    """
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        try:
            doc = Document(str(path))
        except Exception as e:
            raise ExtractionError(f"Unreadable document {path.name}: {e}") from e

        blocks = [paragraph.text for paragraph in doc.paragraphs]
        for table in doc.tables:
            for row in table.rows:
                cells = [cell.text.strip() for cell in row.cells if cell.text.strip()]
                if cells:
                    blocks.append("\t".join(cells))

    messages = [str(w.message) for w in caught]
    return "\n".join(blocks).strip(), messages
