"""Pydantic schemas for the inbox API

Response models read the domain dataclasses via from_attributes. Attachment
bytes have no field here and are never serialized.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


# Mailbox

class StatusResponse(BaseModel):
    """Connection and store status"""
    state: str = Field(..., description="DISCONNECTED, CONNECTING, CONNECTED or BACKOFF")
    connected: bool
    consecutive_failures: int
    last_error: Optional[str] = None
    retry_pending: bool = Field(..., description="An automatic reconnect is scheduled")
    message_count: int
    uptime_seconds: float
    timestamp: datetime


class ConnectResponse(BaseModel):
    """Result of a manual connect"""
    status: str
    host: str
    port: int
    user: str


# Messages

class AttachmentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str
    mime_type: str
    size_bytes: int


class ImageAnalysisResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    filename: str
    extracted_text: str
    speaker: Optional[str] = None
    is_speaker_image: bool
    confidence: float


class DocumentAnalysisResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    filename: str
    text: str
    page_count: int
    title: Optional[str] = None
    messages: List[str] = Field(default_factory=list)
    confidence: float


class AudioAnalysisResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    filename: str
    text: str
    confidence: float
    language: Optional[str] = None
    duration_seconds: float


class AttachmentAnalysisResponse(BaseModel):
    """Aggregated analysis of all attachments of one processing request"""
    model_config = ConfigDict(from_attributes=True)

    images: List[ImageAnalysisResponse] = Field(default_factory=list)
    documents: List[DocumentAnalysisResponse] = Field(default_factory=list)
    audio: List[AudioAnalysisResponse] = Field(default_factory=list)
    speaker: Optional[str] = None


class SummaryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    long_summary: str = Field(..., description="Member newsletter version")
    short_summary: str = Field(..., description="Social media version")
    speaker: Optional[str] = None
    confidence: float
    error: Optional[str] = Field(None, description="Set when the template fallback was used")


class MessageResponse(BaseModel):
    """Stored message with processing results (if processed)"""
    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="IMAP sequence number")
    subject: str
    sender: str
    received_at: datetime
    body_text: str
    body_html: str
    attachments: List[AttachmentResponse] = Field(default_factory=list)
    processed: bool
    summaries: Optional[SummaryResponse] = None
    attachment_analysis: Optional[AttachmentAnalysisResponse] = None
    processed_at: Optional[datetime] = None


class MessageListResponse(BaseModel):
    """All stored messages, newest first"""
    emails: List[MessageResponse]
    count: int
    new_count: int = Field(..., description="Messages added by this request's fetch")


class ProcessResponse(BaseModel):
    """Result of processing one message"""
    message: MessageResponse
    summaries: SummaryResponse
    attachment_analysis: AttachmentAnalysisResponse
