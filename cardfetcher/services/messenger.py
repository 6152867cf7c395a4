"""
Messenger platform client.

Wraps the two Graph API calls the bot makes:
- Attachment Upload API: image URL -> reusable attachment id
- Send API: deliver a message to a user

Graph API: https://developers.facebook.com/docs/messenger-platform
"""

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from cardfetcher.models.failure import AttachmentUploadError, SendError
from cardfetcher.models.message import OutboundMessage

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DeliveryReport:
    """Result of handing a message to the Send API."""

    recipient_id: str
    delivered: bool
    message_id: str | None = None
    error: str | None = None


class MessengerClient:
    """Client for the Messenger Send and Attachment Upload APIs."""

    def __init__(
        self,
        page_access_token: str,
        base_url: str = "https://graph.facebook.com/v2.6",
        timeout: float = 30.0,
    ) -> None:
        """
        Initialize the Messenger client.

        Args:
            page_access_token: Page access token from the App Dashboard
            base_url: Graph API base URL, including version
            timeout: Request timeout in seconds
        """
        self.page_access_token = page_access_token
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    async def _post(self, path: str, body: dict[str, Any]) -> dict[str, Any]:
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.post(
                f"{self.base_url}{path}",
                params={"access_token": self.page_access_token},
                json=body,
            )
            response.raise_for_status()
            data: dict[str, Any] = response.json()
            return data

    async def upload_attachment(self, image_url: str) -> str:
        """
        Upload an image by URL and get a reusable attachment id.

        Args:
            image_url: Publicly reachable image URL

        Returns:
            Attachment id usable in later sends

        Raises:
            AttachmentUploadError: If the upload is rejected or fails
        """
        body = {
            "message": {
                "attachment": {
                    "type": "image",
                    "payload": {"is_reusable": True, "url": image_url},
                }
            }
        }

        try:
            data = await self._post("/me/message_attachments", body)
        except httpx.HTTPStatusError as e:
            logger.error("Failed calling Attachment Upload API: %s", _error_detail(e.response))
            raise AttachmentUploadError(image_url, detail=_error_detail(e.response)) from e
        except httpx.RequestError as e:
            logger.error("Failed calling Attachment Upload API: %s", e)
            raise AttachmentUploadError(image_url, detail=str(e)) from e

        attachment_id = data.get("attachment_id")
        if not attachment_id:
            raise AttachmentUploadError(image_url, detail="Response had no attachment_id")
        return str(attachment_id)

    async def send_message(self, recipient_id: str, message: OutboundMessage) -> DeliveryReport:
        """
        Send a message to a user.

        Args:
            recipient_id: Page-scoped id of the user
            message: Message to deliver

        Returns:
            DeliveryReport with the message id when Messenger returned one

        Raises:
            SendError: If the Send API rejects the message or cannot be reached
        """
        body = {"recipient": {"id": recipient_id}, "message": message.to_payload()}

        try:
            data = await self._post("/me/messages", body)
        except httpx.HTTPStatusError as e:
            raise SendError(recipient_id, detail=_error_detail(e.response)) from e
        except httpx.RequestError as e:
            raise SendError(recipient_id, detail=str(e)) from e

        message_id = data.get("message_id")
        if message_id:
            logger.info(
                "Successfully sent message with id %s to recipient %s",
                message_id,
                data.get("recipient_id", recipient_id),
            )
        else:
            logger.info("Successfully called Send API for recipient %s", recipient_id)

        return DeliveryReport(
            recipient_id=str(data.get("recipient_id", recipient_id)),
            delivered=True,
            message_id=message_id,
        )


def _error_detail(response: httpx.Response) -> str:
    """Status line plus the Graph API error message, when there is one."""
    detail = f"HTTP {response.status_code}"
    try:
        error = response.json().get("error", {})
    except (ValueError, AttributeError):
        return detail
    if isinstance(error, dict) and error.get("message"):
        detail = f"{detail}: {error['message']}"
    return detail
