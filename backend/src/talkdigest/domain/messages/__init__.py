"""Messages domain module - entities, in-memory store, upload validation"""

from .models import Attachment, Message, UNNAMED_ATTACHMENT, UNKNOWN_MIME_TYPE
from .store import MessageStore
from .validation import (
    is_supported_mime_type,
    validate_file_size,
    sanitize_filename,
    SUPPORTED_MIME_TYPES,
    MAX_FILE_SIZE,
)

__all__ = [
    "Attachment",
    "Message",
    "UNNAMED_ATTACHMENT",
    "UNKNOWN_MIME_TYPE",
    "MessageStore",
    "is_supported_mime_type",
    "validate_file_size",
    "sanitize_filename",
    "SUPPORTED_MIME_TYPES",
    "MAX_FILE_SIZE",
]
