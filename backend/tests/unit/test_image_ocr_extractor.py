"""Unit tests for ImageOCRExtractor (Tesseract faked, Pillow real)"""

from pathlib import Path

import pytest
from PIL import Image

from talkdigest.domain.errors import ExtractionError
from talkdigest.infrastructure.extractors import image_ocr_extractor
from talkdigest.infrastructure.extractors.image_ocr_extractor import ImageOCRExtractor


class FakeTesseract:
    """Stands in for pytesseract.image_to_string and records what it saw."""

    def __init__(self, text: str = "", error: Exception = None):
        self.text = text
        self.error = error
        self.calls = []

    def __call__(self, image_path, lang=None):
        path = Path(image_path)
        with Image.open(path) as image:
            self.calls.append({"path": path, "lang": lang, "size": image.size, "format": image.format})
        if self.error is not None:
            raise self.error
        return self.text


@pytest.fixture
def make_image(tmp_path):
    def _make(size=(400, 200), name="poster.png"):
        path = tmp_path / name
        Image.new("RGB", size, color=(200, 200, 200)).save(path)
        return path
    return _make


def install(monkeypatch, fake: FakeTesseract) -> FakeTesseract:
    monkeypatch.setattr(image_ocr_extractor.pytesseract, "image_to_string", fake)
    return fake


class TestImageOCRExtractor:

    @pytest.mark.asyncio
    async def test_substantial_text_high_confidence_with_speaker(self, monkeypatch, make_image):
        text = "Rotary evening. Guest speaker: Anna Svensson on clean water for every village."
        fake = install(monkeypatch, FakeTesseract(text))

        result = await ImageOCRExtractor().extract(make_image(), "poster.png")

        assert result.filename == "poster.png"
        assert result.extracted_text == text
        assert result.speaker == "Anna Svensson"
        assert result.is_speaker_image is True
        assert result.confidence == 0.8
        assert fake.calls[0]["lang"] == "swe+eng"

    @pytest.mark.asyncio
    async def test_short_text_low_confidence(self, monkeypatch, make_image):
        install(monkeypatch, FakeTesseract("Menu"))

        result = await ImageOCRExtractor().extract(make_image(), "menu.png")

        assert result.confidence == 0.4
        assert result.speaker is None
        assert result.is_speaker_image is False

    @pytest.mark.asyncio
    async def test_ocr_runs_on_derived_jpeg_which_is_removed(self, monkeypatch, make_image):
        fake = install(monkeypatch, FakeTesseract("text"))
        source = make_image()

        await ImageOCRExtractor().extract(source, "poster.png")

        derived = fake.calls[0]["path"]
        assert derived.name == "poster_processed.jpg"
        assert fake.calls[0]["format"] == "JPEG"
        assert not derived.exists()
        assert source.exists()

    @pytest.mark.asyncio
    async def test_large_image_is_downscaled(self, monkeypatch, make_image):
        fake = install(monkeypatch, FakeTesseract("text"))

        await ImageOCRExtractor(max_edge_px=1200).extract(make_image(size=(2400, 600)), "big.png")

        assert fake.calls[0]["size"] == (1200, 300)

    @pytest.mark.asyncio
    async def test_small_image_is_not_enlarged(self, monkeypatch, make_image):
        fake = install(monkeypatch, FakeTesseract("text"))

        await ImageOCRExtractor().extract(make_image(size=(300, 100)), "small.png")

        assert fake.calls[0]["size"] == (300, 100)

    @pytest.mark.asyncio
    async def test_ocr_failure_returns_empty_result_and_cleans_up(self, monkeypatch, make_image):
        fake = install(monkeypatch, FakeTesseract(error=RuntimeError("tesseract not installed")))

        result = await ImageOCRExtractor().extract(make_image(), "poster.png")

        assert result.confidence == 0.0
        assert result.extracted_text == ""
        assert not fake.calls[0]["path"].exists()

    @pytest.mark.asyncio
    async def test_invalid_image_returns_empty_result(self, monkeypatch, tmp_path):
        fake = install(monkeypatch, FakeTesseract("never reached"))
        path = tmp_path / "broken.png"
        path.write_bytes(b"not an image")

        result = await ImageOCRExtractor().extract(path, "broken.png")

        assert result.confidence == 0.0
        assert fake.calls == []
        assert not (tmp_path / "broken_processed.jpg").exists()

    def test_recognize_wraps_tesseract_failure(self, monkeypatch, make_image):
        cause = RuntimeError("tesseract not installed")
        install(monkeypatch, FakeTesseract(error=cause))
        source = make_image()

        with pytest.raises(ExtractionError, match="poster.png") as exc_info:
            ImageOCRExtractor().recognize(source, source.with_name("poster_processed.jpg"))

        assert exc_info.value.__cause__ is cause
