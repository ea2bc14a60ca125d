"""LLM prompt templates and fallback texts for talk summaries."""

from typing import TYPE_CHECKING, Optional

from ..analysis.models import AggregatedAnalysis

if TYPE_CHECKING:
    from ..messages.models import Message

SECTION_DELIMITER = "=== VERSION"

IMAGE_EXCERPT_CHARS = 300
DOCUMENT_EXCERPT_CHARS = 500
FALLBACK_BODY_EXCERPT_CHARS = 200

# Entries at or below these lengths carry no usable content
MIN_IMAGE_TEXT_CHARS = 20
MIN_DOCUMENT_TEXT_CHARS = 50

SUMMARY_V1_PROMPT = """You are an expert at writing professional and engaging summaries for {{organization}}. Based on the following information about a talk given at a club meeting, write two excellent summaries in {{language}}:

{{content}}

INSTRUCTIONS:
- Use ALL available information to write rich, detailed summaries
- Identify and highlight the speaker's name if it is given
- Capture the main message, key insights and concrete examples
- Use a professional but warm and engaging tone
- Include specific details that make the summary memorable
- Show appreciation for the speaker's time and knowledge

Write:

A) LONG SUMMARY (300-400 words, for the member newsletter):
- Open with a strong, engaging introduction
- Summarize the main points of the talk with specific details
- Include concrete examples and insights from the presentation
- Highlight the discussion and member engagement
- Thank the speaker warmly
- Close with club greetings and encouragement to stay engaged

B) SHORT SUMMARY (80-120 words, for Facebook):
- Inspiring, energetic tone
- Focus on the core message and its value for followers
- Include fitting emojis for social media
- Suitable hashtags (#Rotary #Inspiration #[specific topic])
- Encourage likes, shares and comments
- Short but memorable

Answer exactly in this format:
=== VERSION A ===
[long summary]

=== VERSION B ===
[short summary]"""

FALLBACK_LONG_V1 = """**{{subject}}**

Dear friends,

We had the privilege of listening to a very insightful talk. The speaker shared valuable perspectives and experiences that gave us all a lot to think about.

{{body_excerpt}}

We thank the speaker for a rewarding evening and look forward to more inspiring meetings.

Kind regards,
The Board"""

FALLBACK_SHORT_V1 = """🎯 {{subject}}

An inspiring talk that gave us new perspectives!

Thank you to our fantastic speaker for a rewarding evening.

#Rotary #Inspiration"""


def build_content_block(message: "Message", analysis: AggregatedAnalysis) -> str:
    """Assemble subject, body and attachment excerpts into one text block.

    Image OCR text is cut to 300 characters and document text to 500; audio
    transcripts are included in full. Entries without substantial text are
    left out, but a section heading is written whenever its list is non-empty.
    """
    content = f"SUBJECT: {message.subject}\n\n"
    content += f"MESSAGE BODY:\n{message.body_text or ''}\n\n"

    if analysis.images:
        content += "IMAGE ANALYSIS:\n"
        for image in analysis.images:
            if image.extracted_text and len(image.extracted_text) > MIN_IMAGE_TEXT_CHARS:
                content += f"- {image.filename}: {image.extracted_text[:IMAGE_EXCERPT_CHARS]}\n"
        content += "\n"

    if analysis.documents:
        content += "DOCUMENT ANALYSIS:\n"
        for document in analysis.documents:
            if document.text and len(document.text) > MIN_DOCUMENT_TEXT_CHARS:
                content += f"- {document.filename}: {document.text[:DOCUMENT_EXCERPT_CHARS]}\n"
        content += "\n"

    if analysis.audio:
        content += "AUDIO TRANSCRIPTS:\n"
        for audio in analysis.audio:
            content += f"- {audio.filename}: {audio.text}\n"
        content += "\n"

    return content


def build_summary_prompt(
    content: str,
    language: str = "Swedish",
    organization: str = "Rotary Club",
) -> str:
    """Embed the content block in the summary instruction template."""
    prompt = SUMMARY_V1_PROMPT.replace("{{organization}}", organization)
    prompt = prompt.replace("{{language}}", language)
    # Content last so user text containing placeholders is left alone
    return prompt.replace("{{content}}", content)


def build_fallback_texts(subject: Optional[str], body_text: Optional[str]) -> tuple[str, str]:
    """Deterministic long/short summaries from the subject and body alone."""
    subject = subject or ""
    body_excerpt = f"{body_text[:FALLBACK_BODY_EXCERPT_CHARS]}..." if body_text else ""

    long_summary = FALLBACK_LONG_V1.replace("{{subject}}", subject)
    long_summary = long_summary.replace("{{body_excerpt}}", body_excerpt)
    short_summary = FALLBACK_SHORT_V1.replace("{{subject}}", subject)
    return long_summary, short_summary
