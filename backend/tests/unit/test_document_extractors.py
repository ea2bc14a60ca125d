"""Unit tests for PDF, word-processing and audio extractors"""

import pytest
from docx import Document

from talkdigest.infrastructure.extractors import (
    PLACEHOLDER_TRANSCRIPT,
    PDFTextExtractor,
    PlaceholderAudioTranscriber,
    WordDocumentExtractor,
)
from talkdigest.domain.errors import ExtractionError
from talkdigest.infrastructure.extractors import pdf_text_extractor
from talkdigest.infrastructure.extractors.pdf_text_extractor import read_pdf
from talkdigest.infrastructure.extractors.word_document_extractor import read_docx


class FakePage:
    def __init__(self, text):
        self._text = text

    def extract_text(self):
        return self._text


class FakePDF:
    def __init__(self, pages, metadata=None):
        self.pages = [FakePage(t) for t in pages]
        self.metadata = metadata or {}

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


class TestPDFTextExtractor:

    @pytest.mark.asyncio
    async def test_text_pages_and_title(self, monkeypatch, tmp_path):
        fake_pdf = FakePDF(["Clean water", None, "for every village"], {"Title": "Water Talk"})
        monkeypatch.setattr(pdf_text_extractor.pdfplumber, "open", lambda path: fake_pdf)

        result = await PDFTextExtractor().extract(tmp_path / "talk.pdf", "talk.pdf")

        assert result.filename == "talk.pdf"
        assert result.page_count == 3
        assert "Clean water" in result.text
        assert "for every village" in result.text
        assert result.title == "Water Talk"
        assert result.confidence == 0.9

    @pytest.mark.asyncio
    async def test_missing_title(self, monkeypatch, tmp_path):
        monkeypatch.setattr(pdf_text_extractor.pdfplumber, "open", lambda path: FakePDF(["text"]))

        result = await PDFTextExtractor().extract(tmp_path / "talk.pdf", "talk.pdf")

        assert result.title is None

    @pytest.mark.asyncio
    async def test_corrupt_pdf_returns_empty_result(self, tmp_path):
        path = tmp_path / "broken.pdf"
        path.write_bytes(b"definitely not a pdf")

        result = await PDFTextExtractor().extract(path, "broken.pdf")

        assert result.confidence == 0.0
        assert result.text == ""
        assert result.page_count == 0

    def test_reader_raises_extraction_error_on_corrupt_file(self, tmp_path):
        path = tmp_path / "broken.pdf"
        path.write_bytes(b"definitely not a pdf")

        with pytest.raises(ExtractionError, match="broken.pdf") as exc_info:
            read_pdf(path)

        assert exc_info.value.code == "extraction_failed"
        assert exc_info.value.__cause__ is not None


class TestWordDocumentExtractor:

    @pytest.mark.asyncio
    async def test_paragraph_and_table_text(self, tmp_path):
        doc = Document()
        doc.add_paragraph("Föredrag om vatten")
        doc.add_paragraph("Anna Svensson berättade om brunnar.")
        table = doc.add_table(rows=1, cols=2)
        table.rows[0].cells[0].text = "Wells built"
        table.rows[0].cells[1].text = "42"
        path = tmp_path / "notes.docx"
        doc.save(path)

        result = await WordDocumentExtractor().extract(path, "notes.docx")

        assert result.filename == "notes.docx"
        assert "Föredrag om vatten" in result.text
        assert "Anna Svensson berättade om brunnar." in result.text
        assert "Wells built\t42" in result.text
        assert result.confidence == 0.8
        assert isinstance(result.messages, list)

    @pytest.mark.asyncio
    async def test_corrupt_document_returns_empty_result(self, tmp_path):
        path = tmp_path / "broken.docx"
        path.write_bytes(b"not a zip archive")

        result = await WordDocumentExtractor().extract(path, "broken.docx")

        assert result.confidence == 0.0
        assert result.text == ""

    def test_reader_raises_extraction_error_on_corrupt_file(self, tmp_path):
        path = tmp_path / "broken.docx"
        path.write_bytes(b"not a zip archive")

        with pytest.raises(ExtractionError, match="broken.docx"):
            read_docx(path)


class TestPlaceholderAudioTranscriber:

    @pytest.mark.asyncio
    async def test_canned_transcript(self, tmp_path):
        result = await PlaceholderAudioTranscriber().extract(tmp_path / "talk.mp3", "talk.mp3")

        assert result.filename == "talk.mp3"
        assert result.text == PLACEHOLDER_TRANSCRIPT
        assert result.confidence == 0.85
        assert result.language == "sv"
        assert result.duration_seconds == 1800
