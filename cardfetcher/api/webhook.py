"""
Messenger webhook endpoints.

GET answers the subscription handshake; POST receives batched page
events. Message texts and postback payloads are both treated as raw
card queries and answered in the background, after Messenger has had
its 200.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query, status
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, Field

from cardfetcher.api.dependencies import get_pipeline, get_settings
from cardfetcher.api.security import verify_signature
from cardfetcher.config import Settings
from cardfetcher.services.pipeline import QueryPipeline

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/webhook", tags=["webhook"])

PAGE_OBJECT = "page"
SUBSCRIBE_MODE = "subscribe"


class Participant(BaseModel):
    """Sender or recipient of a messaging event."""

    id: str


class ReceivedMessage(BaseModel):
    """Message part of a messaging event. Attachments are ignored."""

    mid: str | None = None
    text: str | None = None
    is_echo: bool = False


class ReceivedPostback(BaseModel):
    """Postback part of a messaging event (a tapped button)."""

    title: str | None = None
    payload: str | None = None


class MessagingEvent(BaseModel):
    """One messaging event for a page."""

    sender: Participant
    recipient: Participant | None = None
    timestamp: int | None = None
    message: ReceivedMessage | None = None
    postback: ReceivedPostback | None = None

    def query_text(self) -> str | None:
        """
        Raw card query carried by this event.

        A text message or a postback payload; None for everything else
        (attachments, echoes of the page's own messages, reads, ...).
        """
        if self.message is not None:
            if self.message.is_echo:
                return None
            return self.message.text or None
        if self.postback is not None:
            return self.postback.payload or None
        return None


class PageEntry(BaseModel):
    """Events for one page, possibly batched."""

    id: str | None = None
    time: int | None = None
    messaging: list[MessagingEvent] = Field(default_factory=list)


class WebhookPayload(BaseModel):
    """Body of a webhook POST."""

    object: str
    entry: list[PageEntry] = Field(default_factory=list)


class WebhookAck(BaseModel):
    """Acknowledgement returned to Messenger."""

    status: str = "ok"
    queued: int = 0


@router.get("", response_class=PlainTextResponse)
async def verify_subscription(
    config: Annotated[Settings, Depends(get_settings)],
    hub_mode: Annotated[str | None, Query(alias="hub.mode")] = None,
    hub_verify_token: Annotated[str | None, Query(alias="hub.verify_token")] = None,
    hub_challenge: Annotated[str | None, Query(alias="hub.challenge")] = None,
) -> str:
    """
    Webhook subscription handshake.

    Echoes the challenge back when the verify token matches the
    configured validation token.
    """
    if (
        hub_mode == SUBSCRIBE_MODE
        and config.validation_token
        and hub_verify_token == config.validation_token
    ):
        logger.info("Validating webhook")
        return hub_challenge or ""

    logger.error("Failed validation. Make sure the validation tokens match.")
    raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Validation failed")


@router.post("", response_model=WebhookAck, dependencies=[Depends(verify_signature)])
async def receive_events(
    payload: WebhookPayload,
    background_tasks: BackgroundTasks,
    pipeline: Annotated[QueryPipeline, Depends(get_pipeline)],
) -> WebhookAck:
    """
    Receive page events.

    Every text message and postback is queued for the query pipeline.
    Messenger only needs the 200; replies go out through the Send API.
    """
    if payload.object != PAGE_OBJECT:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unsupported webhook object: {payload.object}",
        )

    queued = 0
    for entry in payload.entry:
        for event in entry.messaging:
            query_text = event.query_text()
            if query_text is None:
                logger.info("Webhook received unused messaging event from %s", event.sender.id)
                continue

            kind = "postback" if event.postback is not None else "message"
            logger.info(
                "Received %s for user %s and page %s at %s: %r",
                kind,
                event.sender.id,
                event.recipient.id if event.recipient else entry.id,
                event.timestamp,
                query_text,
            )
            background_tasks.add_task(pipeline.handle, event.sender.id, query_text)
            queued += 1

    return WebhookAck(queued=queued)
