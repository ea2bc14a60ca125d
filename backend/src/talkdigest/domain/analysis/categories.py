"""Mapping from declared MIME type to AttachmentCategory."""

from typing import Optional

from .models import AttachmentCategory


def normalize_mime_type(mime_type: Optional[str]) -> str:
    """Lowercase and strip parameters ('Image/PNG; name=x' → 'image/png')"""
    if not mime_type:
        return ""
    return mime_type.split(";", 1)[0].strip().lower()


def categorize(mime_type: Optional[str]) -> Optional[AttachmentCategory]:
    """Classify a declared MIME type.

    Categories are tried in fixed priority: image → PDF → word-processing
    document → audio. Anything else (including "unknown") is not analyzed.

    Example:
        >>> categorize('image/jpeg')
        <AttachmentCategory.IMAGE: 'image'>
        >>> categorize('application/vnd.openxmlformats-officedocument.wordprocessingml.document')
        <AttachmentCategory.DOCUMENT: 'document'>
        >>> categorize('text/plain') is None
        True
    """
    normalized = normalize_mime_type(mime_type)

    if normalized.startswith("image/"):
        return AttachmentCategory.IMAGE
    if normalized == "application/pdf":
        return AttachmentCategory.PDF
    if "word" in normalized:
        return AttachmentCategory.DOCUMENT
    if normalized.startswith("audio/"):
        return AttachmentCategory.AUDIO
    return None
