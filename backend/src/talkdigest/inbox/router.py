"""Inbox API endpoints for TalkDigest

Mailbox status and manual connect, message listing (with a fetch cycle), and
processing of one message with optional uploaded attachments.
"""

import logging
from datetime import datetime, timezone
from typing import Annotated, List, Optional

from fastapi import APIRouter, File, HTTPException, UploadFile, status

from ..dependencies import Service
from ..domain.messages import Attachment, is_supported_mime_type, validate_file_size
from .schemas import (
    AttachmentAnalysisResponse,
    ConnectResponse,
    MessageListResponse,
    MessageResponse,
    ProcessResponse,
    StatusResponse,
    SummaryResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Inbox"])


@router.get("/status", response_model=StatusResponse)
async def get_status(service: Service):
    """Mailbox connection state and store size."""
    manager = service.connection_manager
    session = manager.session
    return StatusResponse(
        state=session.state.value,
        connected=session.is_connected,
        consecutive_failures=session.consecutive_failures,
        last_error=session.last_error,
        retry_pending=manager.pending_retry is not None,
        message_count=len(service.store),
        uptime_seconds=round(service.uptime_seconds, 1),
        timestamp=datetime.now(timezone.utc),
    )


@router.post("/connect", response_model=ConnectResponse)
async def connect(service: Service):
    """Connect to the mailbox manually.

    Raises:
        409: A connection exists or an attempt is running
        502: The attempt failed (an automatic retry may be scheduled)
    """
    await service.connection_manager.connect()
    settings = service.settings
    return ConnectResponse(
        status="connected",
        host=settings.IMAP_HOST,
        port=settings.IMAP_PORT,
        user=settings.IMAP_USER,
    )


@router.get("/emails", response_model=MessageListResponse)
async def list_emails(service: Service):
    """Fetch recent messages, merge them into the store, list the store.

    Raises:
        400: Mailbox not connected
        502: The session broke during the fetch
    """
    inserted = await service.fetch_and_merge()
    messages = service.store.list()
    return MessageListResponse(
        emails=[MessageResponse.model_validate(m) for m in messages],
        count=len(messages),
        new_count=len(inserted),
    )


def _check_size(name: str, size: int, max_size: int) -> None:
    is_valid, error_msg = validate_file_size(size, max_size)
    if not is_valid:
        code = (
            status.HTTP_413_REQUEST_ENTITY_TOO_LARGE
            if size > max_size else status.HTTP_400_BAD_REQUEST
        )
        raise HTTPException(status_code=code, detail=f"{name}: {error_msg}")


async def _read_uploads(files: List[UploadFile], max_files: int, max_size: int) -> List[Attachment]:
    if len(files) > max_files:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Too many files. Maximum {max_files} files per request.",
        )

    attachments = []
    for file in files:
        name = file.filename or "unnamed"
        if not is_supported_mime_type(file.content_type):
            raise HTTPException(
                status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
                detail=f"Unsupported file type for {name}: {file.content_type}",
            )

        # Reject on the declared size before buffering anything
        if file.size is not None and file.size > max_size:
            _check_size(name, file.size, max_size)

        content = await file.read(max_size + 1)
        _check_size(name, len(content), max_size)

        attachments.append(Attachment(
            name=name,
            mime_type=file.content_type,
            size_bytes=len(content),
            content=content,
        ))
    return attachments


@router.post("/process-email/{message_id}", response_model=ProcessResponse)
async def process_email(
    message_id: int,
    service: Service,
    attachments: Annotated[Optional[List[UploadFile]], File()] = None,
):
    """Analyze attachments and generate summaries for one stored message.

    Accepts multipart/form-data with zero or more `attachments` files
    (images, audio, PDF, Word, PowerPoint). Uploaded files are analyzed
    after the message's own attachments and are not stored.

    Raises:
        404: Unknown message id
        413/415: Upload too large or of an unsupported type

    Example:
        curl -X POST http://localhost:8000/api/process-email/42 \\
             -F "attachments=@poster.jpg" \\
             -F "attachments=@slides.pdf"
    """
    settings = service.settings
    transient = await _read_uploads(
        attachments or [],
        max_files=settings.MAX_UPLOAD_FILES,
        max_size=settings.MAX_UPLOAD_SIZE_BYTES,
    )

    result = await service.processing.process_message(message_id, transient)

    return ProcessResponse(
        message=MessageResponse.model_validate(result.message),
        summaries=SummaryResponse.model_validate(result.summaries),
        attachment_analysis=AttachmentAnalysisResponse.model_validate(result.attachment_analysis),
    )
