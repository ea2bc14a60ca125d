"""Unit tests for content block and prompt assembly"""

from datetime import datetime, timezone

from talkdigest.domain.analysis import (
    AggregatedAnalysis,
    AudioAnalysis,
    DocumentAnalysis,
    ImageAnalysis,
)
from talkdigest.domain.messages import Message
from talkdigest.domain.summaries.prompts import (
    build_content_block,
    build_fallback_texts,
    build_summary_prompt,
)


def make_message(subject="Talk on Water", body="We met at the club house.") -> Message:
    return Message(
        id=1,
        subject=subject,
        sender="secretary@club.example",
        received_at=datetime(2025, 3, 10, tzinfo=timezone.utc),
        body_text=body,
    )


class TestContentBlock:

    def test_subject_and_body_only(self):
        content = build_content_block(make_message(), AggregatedAnalysis())

        assert content.startswith("SUBJECT: Talk on Water\n\n")
        assert "MESSAGE BODY:\nWe met at the club house." in content
        assert "IMAGE ANALYSIS" not in content
        assert "DOCUMENT ANALYSIS" not in content
        assert "AUDIO TRANSCRIPTS" not in content

    def test_image_text_truncated_to_300(self):
        analysis = AggregatedAnalysis(images=[ImageAnalysis(filename="poster.png", extracted_text="x" * 500)])

        content = build_content_block(make_message(), analysis)

        assert f"- poster.png: {'x' * 300}\n" in content
        assert "x" * 301 not in content

    def test_short_image_text_omitted_but_heading_kept(self):
        analysis = AggregatedAnalysis(images=[ImageAnalysis(filename="logo.png", extracted_text="ROTARY")])

        content = build_content_block(make_message(), analysis)

        assert "IMAGE ANALYSIS:\n" in content
        assert "logo.png" not in content

    def test_document_text_truncated_to_500(self):
        analysis = AggregatedAnalysis(documents=[DocumentAnalysis(filename="notes.docx", text="y" * 800)])

        content = build_content_block(make_message(), analysis)

        assert f"- notes.docx: {'y' * 500}\n" in content
        assert "y" * 501 not in content

    def test_document_threshold_is_exclusive(self):
        analysis = AggregatedAnalysis(documents=[DocumentAnalysis(filename="short.pdf", text="z" * 50)])

        content = build_content_block(make_message(), analysis)

        assert "short.pdf" not in content

    def test_audio_transcript_included_in_full(self):
        transcript = "word " * 400
        analysis = AggregatedAnalysis(audio=[AudioAnalysis(filename="talk.mp3", text=transcript)])

        content = build_content_block(make_message(), analysis)

        assert "AUDIO TRANSCRIPTS:\n" in content
        assert f"- talk.mp3: {transcript}\n" in content

    def test_sections_in_fixed_order(self):
        analysis = AggregatedAnalysis(
            images=[ImageAnalysis(filename="a.png", extracted_text="i" * 30)],
            documents=[DocumentAnalysis(filename="b.pdf", text="d" * 60)],
            audio=[AudioAnalysis(filename="c.mp3", text="spoken")],
        )

        content = build_content_block(make_message(), analysis)

        assert content.index("IMAGE ANALYSIS") < content.index("DOCUMENT ANALYSIS") < content.index("AUDIO TRANSCRIPTS")


class TestSummaryPrompt:

    def test_placeholders_filled(self):
        prompt = build_summary_prompt("CONTENT BLOCK", language="Swedish", organization="Rotary Club")

        assert "CONTENT BLOCK" in prompt
        assert "Rotary Club" in prompt
        assert "in Swedish" in prompt
        assert "=== VERSION A ===" in prompt
        assert "=== VERSION B ===" in prompt
        assert "{{" not in prompt

    def test_placeholder_text_in_content_left_alone(self):
        prompt = build_summary_prompt("literal {{language}} in a mail", language="English")

        assert "literal {{language}} in a mail" in prompt


class TestFallbackTexts:

    def test_long_and_short_from_subject_and_body(self):
        long_summary, short_summary = build_fallback_texts("Talk on Water", "b" * 300)

        assert "**Talk on Water**" in long_summary
        assert f"{'b' * 200}..." in long_summary
        assert "b" * 201 not in long_summary
        assert "Talk on Water" in short_summary
        assert "bbbbbbbbbb" not in short_summary

    def test_empty_body(self):
        long_summary, _ = build_fallback_texts("Subject", "")

        assert "..." not in long_summary

    def test_deterministic(self):
        assert build_fallback_texts("S", "body") == build_fallback_texts("S", "body")
