"""
Attachment upload endpoint.

Exchanges a Scryfall image URL for a reusable Messenger attachment id.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel

from cardfetcher.api.dependencies import get_messenger_client, get_settings
from cardfetcher.config import Settings
from cardfetcher.models.failure import AttachmentUploadError
from cardfetcher.services.messenger import MessengerClient

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/upload", tags=["upload"])


class UploadRequest(BaseModel):
    """Request model for an attachment upload."""

    url: str | None = None


class UploadResponse(BaseModel):
    """Response model for an attachment upload."""

    attachment_id: str


@router.post("", response_model=UploadResponse)
async def upload_image(
    request: UploadRequest,
    config: Annotated[Settings, Depends(get_settings)],
    messenger: Annotated[MessengerClient, Depends(get_messenger_client)],
) -> UploadResponse:
    """
    Upload a card image and return its attachment id.

    Only images hosted by Scryfall are accepted.
    """
    if not request.url:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Malformed request")

    if not request.url.startswith(tuple(config.allowed_image_prefixes)):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Not scryfall image")

    try:
        attachment_id = await messenger.upload_attachment(request.url)
    except AttachmentUploadError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e

    return UploadResponse(attachment_id=attachment_id)
