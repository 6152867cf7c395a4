"""
Response builder.

Turns a resolved outcome into the Messenger message the user sees:

- NotFound    -> text reply
- SingleCard  -> media template of the card image (needs an attachment id)
- Candidates  -> compact list of up to four cards, plus a "More" button
                 when the window holds more than four
"""

from typing import Protocol

from cardfetcher.config import CARDS_PER_PAGE
from cardfetcher.models.card import CardSummary
from cardfetcher.models.message import (
    ListItem,
    ListMessage,
    MediaMessage,
    OutboundMessage,
    TextMessage,
)
from cardfetcher.models.outcome import Candidates, NotFound, ResolvedOutcome, SingleCard
from cardfetcher.parsers.query import encode_continuation


class AttachmentUploader(Protocol):
    """Anything that can turn an image URL into a reusable attachment id."""

    async def upload_attachment(self, image_url: str) -> str: ...


def not_found_message(name: str) -> TextMessage:
    return TextMessage(f"{name} was not found")


def card_subtitle(card: CardSummary) -> str:
    """Type line followed by oracle text, when the card has any."""
    if card.oracle_text:
        return f"{card.type_line}\n{card.oracle_text}"
    return card.type_line


def build_media_message(card: CardSummary, attachment_id: str) -> MediaMessage:
    return MediaMessage(
        attachment_id=attachment_id,
        title=card.name,
        image_url=card.image_url,
        url=card.url,
    )


def build_list_message(cards: tuple[CardSummary, ...], name: str, page: int) -> ListMessage:
    """
    Build a candidate list for one display window.

    Each "This One" button sends back the card's exact name, so picking
    resolves straight to that card. "More" re-sends the query for the
    next window.
    """
    items = tuple(
        ListItem(
            title=card.name,
            subtitle=card_subtitle(card),
            image_url=card.image_url,
            url=card.url,
            payload=card.name,
        )
        for card in cards[:CARDS_PER_PAGE]
    )

    more_payload = None
    if len(cards) > CARDS_PER_PAGE:
        more_payload = encode_continuation(name, page + 1)

    return ListMessage(items=items, more_payload=more_payload)


async def build_response(
    outcome: ResolvedOutcome,
    name: str,
    uploader: AttachmentUploader,
) -> OutboundMessage:
    """
    Build the outbound message for a resolved query.

    Args:
        outcome: Result of resolve()
        name: The searched name, echoed in replies and continuations
        uploader: Attachment resolver used for single-card replies

    Raises:
        AttachmentUploadError: If the card image cannot be uploaded
    """
    if isinstance(outcome, SingleCard):
        attachment_id = await uploader.upload_attachment(outcome.card.image_url)
        return build_media_message(outcome.card, attachment_id)

    if isinstance(outcome, Candidates):
        return build_list_message(outcome.cards, name, outcome.page)

    if isinstance(outcome, NotFound):
        return not_found_message(name)

    raise TypeError(f"Unknown outcome: {outcome!r}")
