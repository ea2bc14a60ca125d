"""Pydantic schemas for the simulated publishing endpoints"""

from typing import List, Optional

from pydantic import BaseModel, EmailStr, Field


class SocialPostRequest(BaseModel):
    content: str = Field(..., min_length=1, description="Post text (usually the short summary)")
    image_url: Optional[str] = Field(None, alias="imageUrl")

    model_config = {"populate_by_name": True}


class SocialPostResponse(BaseModel):
    success: bool = True
    post_id: str
    url: str
    message: str


class NewsletterRequest(BaseModel):
    recipients: List[EmailStr] = Field(..., min_length=1)
    subject: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1, description="Mail body (usually the long summary)")


class NewsletterResponse(BaseModel):
    success: bool = True
    sent: int
    message_id: str
    message: str
