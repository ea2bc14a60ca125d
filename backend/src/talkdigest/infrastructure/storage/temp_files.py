"""Temporary files for attachment bytes.

Extraction libraries (Tesseract, pdfplumber, python-docx) read from paths, so
attachment content is written to a scratch file for the duration of one
extraction and removed on every exit path.
"""

import asyncio
import logging
import uuid
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Optional, Union

from ...domain.messages.validation import sanitize_filename

logger = logging.getLogger(__name__)


def remove_quietly(path: Path) -> None:
    """Delete a file, logging (not raising) on failure."""
    try:
        path.unlink(missing_ok=True)
    except OSError as e:
        logger.warning(f"Could not delete temporary file {path}: {e}")


def _write(path: Path, content: bytes) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content)


@asynccontextmanager
async def materialized(
    content: bytes,
    filename: str,
    directory: Union[str, Path],
) -> AsyncIterator[Path]:
    """Write content to a uniquely named file and yield its path.

    Example:
        async with materialized(attachment.content, attachment.name, "./uploads") as path:
            result = await extractor.extract(path, attachment.name)
    """
    path = Path(directory) / f"{uuid.uuid4().hex}_{sanitize_filename(filename)}"
    try:
        await asyncio.to_thread(_write, path, content)
        yield path
    finally:
        await asyncio.to_thread(remove_quietly, path)


def derived_path(path: Path, suffix: str, extension: Optional[str] = None) -> Path:
    """Sibling path for a file derived from `path` ('a.png' → 'a_processed.jpg')."""
    return path.with_name(f"{path.stem}{suffix}{extension or path.suffix}")
