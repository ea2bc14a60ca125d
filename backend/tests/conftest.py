"""Pytest fixtures and port-level fakes.

External engines (IMAP server, Tesseract, LLM APIs) are replaced by fakes
that implement the domain ports:
- FakeMailboxClient / FakeMailboxFactory for MailboxClientPort
- FakeExtractor for AttachmentExtractorPort
- FakeLLMProvider for LLMProviderPort

Usage:
    def test_fetch(connected_manager, mailbox_factory):
        mailbox_factory.messages = {1: build_raw_email(subject="Hi")}
"""

import sys
from datetime import datetime, timezone
from email.message import EmailMessage
from email.utils import format_datetime
from pathlib import Path
from typing import Dict, List, Optional, Union

import pytest

backend_src = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(backend_src))

from talkdigest.config import Settings
from talkdigest.domain.ai import LLMGenerationResult, LLMProviderPort
from talkdigest.domain.analysis import (
    AnalysisResult,
    AttachmentCategory,
    AttachmentExtractorPort,
    AudioAnalysis,
    DocumentAnalysis,
    ImageAnalysis,
)
from talkdigest.domain.mailbox import MailboxClientError, MailboxClientPort
from talkdigest.infrastructure.extractors import ExtractorRegistry


# =============================================================================
# MAILBOX FAKES
# =============================================================================

class FakeMailboxClient(MailboxClientPort):
    """In-memory mailbox session driven by its factory's configuration."""

    def __init__(self, factory: "FakeMailboxFactory"):
        self.factory = factory
        self.connected = False
        self.closed = False
        self.selected: Optional[str] = None

    async def connect(self) -> None:
        if self.factory.connect_error is not None:
            raise self.factory.connect_error
        self.connected = True

    async def select_readonly(self, mailbox: str) -> int:
        self.selected = mailbox
        return len(self.factory.messages)

    async def search_since(self, since) -> List[int]:
        self.factory.searched_since.append(since)
        if self.factory.search_error is not None:
            raise self.factory.search_error
        return sorted(self.factory.messages)

    async def fetch_raw(self, sequence_number: int) -> bytes:
        self.factory.fetched.append(sequence_number)
        raw = self.factory.messages[sequence_number]
        if isinstance(raw, Exception):
            raise raw
        return raw

    async def close(self) -> None:
        self.closed = True
        if self.factory.close_error is not None:
            raise self.factory.close_error


class FakeMailboxFactory:
    """Client factory for ConnectionManager that records every client built."""

    def __init__(self):
        self.clients: List[FakeMailboxClient] = []
        self.messages: Dict[int, Union[bytes, Exception]] = {}
        self.connect_error: Optional[Exception] = None
        self.search_error: Optional[Exception] = None
        self.close_error: Optional[Exception] = None
        self.searched_since = []
        self.fetched: List[int] = []

    def __call__(self) -> FakeMailboxClient:
        client = FakeMailboxClient(self)
        self.clients.append(client)
        return client

    def fail_with(self, message: str = "connection refused") -> None:
        self.connect_error = MailboxClientError(message)

    def succeed(self) -> None:
        self.connect_error = None


# =============================================================================
# EXTRACTOR / LLM FAKES
# =============================================================================

class FakeExtractor(AttachmentExtractorPort):
    """Extractor returning a canned result (or raising) for one category."""

    def __init__(self, category: AttachmentCategory, result: Optional[AnalysisResult] = None,
                 error: Optional[Exception] = None):
        self._category = category
        self.result = result
        self.error = error
        self.calls: List[tuple] = []

    @property
    def category(self) -> AttachmentCategory:
        return self._category

    @property
    def version(self) -> str:
        return f"fake_{self._category.value}_v1"

    async def extract(self, path: Path, filename: str) -> AnalysisResult:
        self.calls.append((path, filename, path.exists()))
        if self.error is not None:
            raise self.error
        if self.result is not None:
            return self.result
        if self._category == AttachmentCategory.IMAGE:
            return ImageAnalysis(filename=filename, extracted_text="", confidence=0.4)
        if self._category == AttachmentCategory.AUDIO:
            return AudioAnalysis(filename=filename, text="transcript", confidence=0.85)
        return DocumentAnalysis(filename=filename, text="document text", confidence=0.9)


class FakeLLMProvider(LLMProviderPort):
    """LLM provider returning a fixed answer (or raising) and recording prompts."""

    def __init__(self, text: str = "", error: Optional[Exception] = None):
        self.text = text
        self.error = error
        self.prompts: List[str] = []
        self.max_tokens: List[int] = []

    @property
    def name(self) -> str:
        return "fake"

    async def generate(self, prompt: str, max_tokens: int) -> LLMGenerationResult:
        self.prompts.append(prompt)
        self.max_tokens.append(max_tokens)
        if self.error is not None:
            raise self.error
        return LLMGenerationResult(text=self.text, provider="fake", model="fake-model")


TWO_VERSION_ANSWER = (
    "=== VERSION A ===\n"
    "Long newsletter text about water.\n\n"
    "=== VERSION B ===\n"
    "Short post 💧 #Rotary"
)


# =============================================================================
# MESSAGE BUILDERS
# =============================================================================

def build_raw_email(
    subject: Optional[str] = "Talk on Water",
    sender: Optional[str] = "Secretary <secretary@club.example>",
    date: Optional[datetime] = datetime(2025, 3, 10, 18, 30, tzinfo=timezone.utc),
    body: str = "Tonight we heard about clean water projects.",
    attachments: Optional[List[tuple]] = None,
) -> bytes:
    """Build RFC 822 bytes. attachments: (filename, maintype, subtype, data)."""
    msg = EmailMessage()
    if subject is not None:
        msg["Subject"] = subject
    if sender is not None:
        msg["From"] = sender
    msg["To"] = "board@club.example"
    if date is not None:
        msg["Date"] = format_datetime(date)
    msg.set_content(body)

    for filename, maintype, subtype, data in attachments or []:
        msg.add_attachment(data, maintype=maintype, subtype=subtype, filename=filename)

    return msg.as_bytes()


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings isolated from the environment and any .env file."""
    return Settings(
        _env_file=None,
        IMAP_HOST="imap.test",
        IMAP_PORT=993,
        IMAP_USER="club@test",
        IMAP_PASSWORD="secret",
        MAIL_RETRY_DELAY_SECONDS=0,
        MAIL_AUTO_CONNECT=False,
        FETCH_INTERVAL_SECONDS=0,
        UPLOAD_DIR=str(tmp_path / "uploads"),
        PUBLISH_SIMULATION_DELAY_SECONDS=0,
        LOG_JSON=False,
        LOG_LEVEL="DEBUG",
    )


@pytest.fixture
def mailbox_factory() -> FakeMailboxFactory:
    return FakeMailboxFactory()


@pytest.fixture
def llm_provider() -> FakeLLMProvider:
    return FakeLLMProvider(text=TWO_VERSION_ANSWER)


@pytest.fixture
def fake_extractors() -> Dict[AttachmentCategory, FakeExtractor]:
    return {category: FakeExtractor(category) for category in AttachmentCategory}


@pytest.fixture
def fake_registry(fake_extractors) -> ExtractorRegistry:
    registry = ExtractorRegistry()
    for extractor in fake_extractors.values():
        registry.register(extractor)
    return registry
