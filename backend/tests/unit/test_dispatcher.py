"""Unit tests for AttachmentAnalysisDispatcher routing and fault isolation"""

import pytest

from talkdigest.domain.analysis import (
    AggregatedAnalysis,
    AttachmentCategory,
    DocumentAnalysis,
    ImageAnalysis,
)
from talkdigest.domain.errors import ExtractionError
from talkdigest.domain.messages import Attachment
from talkdigest.infrastructure.extractors import AttachmentAnalysisDispatcher, ExtractorRegistry


def attachment(name: str, mime_type: str, content: bytes = b"data") -> Attachment:
    return Attachment(name=name, mime_type=mime_type, size_bytes=len(content or b""), content=content)


@pytest.fixture
def dispatcher(fake_registry, tmp_path):
    return AttachmentAnalysisDispatcher(fake_registry, tmp_path / "scratch")


class TestAnalyze:

    @pytest.mark.asyncio
    async def test_routes_by_category(self, dispatcher, fake_extractors):
        result = await dispatcher.analyze(attachment("slides.pdf", "application/pdf"))

        assert isinstance(result, DocumentAnalysis)
        assert len(fake_extractors[AttachmentCategory.PDF].calls) == 1
        assert fake_extractors[AttachmentCategory.IMAGE].calls == []

    @pytest.mark.asyncio
    async def test_temp_file_exists_during_extraction_and_is_removed(self, dispatcher, fake_extractors):
        await dispatcher.analyze(attachment("poster.png", "image/png", b"\x89PNG"))

        path, filename, existed = fake_extractors[AttachmentCategory.IMAGE].calls[0]
        assert existed is True
        assert filename == "poster.png"
        assert not path.exists()

    @pytest.mark.asyncio
    async def test_unsupported_type_is_skipped(self, dispatcher, fake_extractors):
        result = await dispatcher.analyze(attachment("notes.txt", "text/plain"))

        assert result is None
        assert all(not e.calls for e in fake_extractors.values())

    @pytest.mark.asyncio
    async def test_attachment_without_content_is_skipped(self, dispatcher, fake_extractors):
        result = await dispatcher.analyze(attachment("poster.png", "image/png", content=None))

        assert result is None
        assert fake_extractors[AttachmentCategory.IMAGE].calls == []

    @pytest.mark.asyncio
    async def test_extractor_failure_yields_zero_confidence_result(self, dispatcher, fake_extractors):
        fake_extractors[AttachmentCategory.IMAGE].error = ExtractionError("tesseract crashed")

        result = await dispatcher.analyze(attachment("poster.png", "image/png"))

        assert isinstance(result, ImageAnalysis)
        assert result.filename == "poster.png"
        assert result.confidence == 0.0
        assert result.extracted_text == ""
        path = fake_extractors[AttachmentCategory.IMAGE].calls[0][0]
        assert not path.exists()


class TestAnalyzeAll:

    @pytest.mark.asyncio
    async def test_one_failure_does_not_affect_others(self, dispatcher, fake_extractors):
        fake_extractors[AttachmentCategory.PDF].error = RuntimeError("corrupt pdf")

        aggregate = await dispatcher.analyze_all([
            attachment("poster.png", "image/png"),
            attachment("broken.pdf", "application/pdf"),
            attachment("talk.mp3", "audio/mpeg"),
        ])

        assert len(aggregate.images) == 1
        assert aggregate.images[0].confidence == 0.4
        assert len(aggregate.documents) == 1
        assert aggregate.documents[0].confidence == 0.0
        assert len(aggregate.audio) == 1
        assert aggregate.audio[0].text == "transcript"

    @pytest.mark.asyncio
    async def test_accumulates_into_existing_aggregate(self, dispatcher, fake_extractors):
        fake_extractors[AttachmentCategory.IMAGE].result = ImageAnalysis(
            filename="later.png", extracted_text="Speaker: Erik Berg", speaker="Erik Berg", confidence=0.4
        )
        aggregate = AggregatedAnalysis(speaker="Anna Svensson")

        result = await dispatcher.analyze_all([attachment("later.png", "image/png")], aggregate=aggregate)

        assert result is aggregate
        assert aggregate.speaker == "Anna Svensson"
        assert len(aggregate.images) == 1

    @pytest.mark.asyncio
    async def test_skipped_attachments_add_nothing(self, dispatcher):
        aggregate = await dispatcher.analyze_all([
            attachment("deck.ppt", "application/vnd.ms-powerpoint"),
            attachment("unnamed", "unknown"),
        ])

        assert len(aggregate) == 0


class TestRegistry:

    def test_incomplete_registry_is_rejected(self, tmp_path, fake_extractors):
        registry = ExtractorRegistry()
        registry.register(fake_extractors[AttachmentCategory.IMAGE])

        assert registry.missing_categories() == [
            AttachmentCategory.PDF, AttachmentCategory.DOCUMENT, AttachmentCategory.AUDIO,
        ]
        with pytest.raises(ValueError, match="pdf"):
            AttachmentAnalysisDispatcher(registry, tmp_path)

    def test_register_none_rejected(self):
        with pytest.raises(ValueError):
            ExtractorRegistry().register(None)

    def test_register_replaces_same_category(self, fake_extractors):
        from conftest import FakeExtractor

        registry = ExtractorRegistry()
        registry.register(fake_extractors[AttachmentCategory.AUDIO])
        replacement = FakeExtractor(AttachmentCategory.AUDIO)
        registry.register(replacement)

        assert len(registry) == 1
        assert registry.get_extractor(AttachmentCategory.AUDIO) is replacement


class TestAggregatedAnalysis:

    def test_first_speaker_wins(self):
        aggregate = AggregatedAnalysis()
        aggregate.add(ImageAnalysis(filename="a.png", speaker=None))
        aggregate.add(ImageAnalysis(filename="b.png", speaker="Anna Svensson"))
        aggregate.add(ImageAnalysis(filename="c.png", speaker="Erik Berg"))

        assert aggregate.speaker == "Anna Svensson"
        assert len(aggregate) == 3

    def test_unsupported_result_type(self):
        with pytest.raises(TypeError):
            AggregatedAnalysis().add("not a result")
