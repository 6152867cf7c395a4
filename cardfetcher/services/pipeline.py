"""
Query pipeline.

One inbound text or postback runs through:

    normalize -> search -> resolve -> build response -> send

Failures are contained per request: a failed search or image upload
turns into a text reply, and a failed send is logged and reported.
"""

import logging

from cardfetcher.models.failure import AttachmentUploadError, SearchFetchError, SendError
from cardfetcher.models.message import OutboundMessage, TextMessage
from cardfetcher.models.outcome import SingleCard
from cardfetcher.parsers.query import normalize
from cardfetcher.services.messenger import DeliveryReport, MessengerClient
from cardfetcher.services.response_builder import build_response
from cardfetcher.services.result_resolver import resolve
from cardfetcher.services.scryfall_search import ScryfallSearchClient

logger = logging.getLogger(__name__)


def search_failed_message(name: str) -> TextMessage:
    return TextMessage(f"Search for {name} failed, please try again later")


class QueryPipeline:
    """Answers card queries for one Messenger page."""

    def __init__(self, search_client: ScryfallSearchClient, messenger: MessengerClient) -> None:
        self.search_client = search_client
        self.messenger = messenger

    async def build_reply(self, raw_text: str) -> OutboundMessage | None:
        """
        Work out the reply to a raw query without sending it.

        Returns:
            The message to send, or None when the query has no card name
        """
        query = normalize(raw_text)
        if not query.name:
            logger.info("Ignoring query without a card name: %r", raw_text)
            return None

        try:
            records = await self.search_client.search(query.name)
        except SearchFetchError:
            return search_failed_message(query.name)

        outcome = resolve(records, query.name, query.page)

        try:
            return await build_response(outcome, query.name, self.messenger)
        except AttachmentUploadError as e:
            if not isinstance(outcome, SingleCard):
                raise
            logger.warning("Falling back to text for %s: %s", outcome.card.name, e.detail)
            return TextMessage(f"{outcome.card.name}: {outcome.card.url}")

    async def handle(self, sender_id: str, raw_text: str) -> DeliveryReport | None:
        """
        Answer one inbound query.

        Args:
            sender_id: Page-scoped id of the user who sent the query
            raw_text: Message text or postback payload

        Returns:
            Delivery report, or None when nothing was sent
        """
        message = await self.build_reply(raw_text)
        if message is None:
            return None
        return await self.dispatch(sender_id, message)

    async def dispatch(self, recipient_id: str, message: OutboundMessage) -> DeliveryReport:
        """Send a message, reporting failures instead of raising."""
        try:
            return await self.messenger.send_message(recipient_id, message)
        except SendError as e:
            logger.error("%s (%s)", e.message, e.detail)
            return DeliveryReport(recipient_id=recipient_id, delivered=False, error=e.detail)
