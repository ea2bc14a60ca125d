"""Publishing API endpoints (simulated)

Nothing is sent anywhere: both endpoints log the request, wait a short,
configurable delay and return a synthetic identifier.
"""

import asyncio
import logging
import time

from fastapi import APIRouter

from ..dependencies import Service
from .schemas import (
    NewsletterRequest,
    NewsletterResponse,
    SocialPostRequest,
    SocialPostResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Publishing"])


@router.post("/facebook-publish", response_model=SocialPostResponse)
async def publish_social_post(request: SocialPostRequest, service: Service):
    """Simulate publishing the short summary as a social media post."""
    logger.info(f"Simulating social post: {request.content[:100]}...")
    await asyncio.sleep(service.settings.PUBLISH_SIMULATION_DELAY_SECONDS)

    return SocialPostResponse(
        post_id=f"simulated_fb_post_{int(time.time() * 1000)}",
        url="https://facebook.com/rotary/posts/simulated",
        message="Simulated social post published",
    )


@router.post("/send-email", response_model=NewsletterResponse)
async def send_newsletter(request: NewsletterRequest, service: Service):
    """Simulate mailing the long summary to a recipient list."""
    logger.info(
        f"Simulating newsletter to {len(request.recipients)} recipients: {request.subject}"
    )
    await asyncio.sleep(service.settings.PUBLISH_SIMULATION_DELAY_SECONDS)

    return NewsletterResponse(
        sent=len(request.recipients),
        message_id=f"simulated_email_{int(time.time() * 1000)}",
        message="Simulated newsletter sent",
    )
