"""File validation utilities for attachments uploaded with a processing request"""

import os
import re
from typing import Optional, Tuple

from ..analysis.categories import normalize_mime_type


# Supported upload MIME types
SUPPORTED_MIME_TYPES = {
    'image/jpeg',
    'image/png',
    'image/gif',
    'image/webp',
    'audio/mpeg',
    'audio/wav',
    'audio/mp3',
    'application/pdf',
    'application/vnd.openxmlformats-officedocument.presentationml.presentation',  # .pptx
    'application/vnd.ms-powerpoint',  # .ppt
    'application/vnd.openxmlformats-officedocument.wordprocessingml.document',  # .docx
    'application/msword',  # .doc
}

# File size limit (default 50MB)
MAX_FILE_SIZE = 50 * 1024 * 1024


def is_supported_mime_type(mime_type: Optional[str]) -> bool:
    """Check if MIME type is accepted for upload

    Presentations are accepted but not analyzed; they pass through the
    dispatcher without a result.

    Example:
        >>> is_supported_mime_type('image/png')
        True
        >>> is_supported_mime_type('application/zip')
        False
    """
    return normalize_mime_type(mime_type) in SUPPORTED_MIME_TYPES


def validate_file_size(size_bytes: int, max_size: Optional[int] = None) -> Tuple[bool, Optional[str]]:
    """Validate file size is within limits

    Args:
        size_bytes: File size in bytes
        max_size: Maximum allowed size (defaults to MAX_FILE_SIZE)

    Returns:
        Tuple of (is_valid, error_message)
    """
    if max_size is None:
        max_size = MAX_FILE_SIZE

    if size_bytes == 0:
        return False, "File is empty (0 bytes)"

    if size_bytes > max_size:
        return False, f"File exceeds maximum size of {max_size} bytes (got {size_bytes} bytes)"

    return True, None


def sanitize_filename(filename: Optional[str]) -> str:
    """Sanitize filename for use in a temporary file path

    Example:
        >>> sanitize_filename('../../talk.pdf')
        'talk.pdf'
        >>> sanitize_filename('talk (final).pdf')
        'talk_final_.pdf'
    """
    filename = os.path.basename(filename or "")

    # Replace problematic characters with underscore
    filename = re.sub(r'[^\w\s.-]', '_', filename)

    # Collapse multiple spaces/underscores
    filename = re.sub(r'[\s_]+', '_', filename)

    if not filename.strip("._"):
        return "attachment"

    # Trim to 200 chars, leaving room for the temp-file prefix
    if len(filename) > 200:
        name, ext = os.path.splitext(filename)
        filename = name[:200 - len(ext)] + ext

    return filename
