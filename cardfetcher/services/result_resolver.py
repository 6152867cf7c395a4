"""
Result resolution for card searches.

Decides whether a search names one card or needs the user to pick:

1. Records are summarized; records without a usable image are dropped.
2. Cards already shown on earlier pages are skipped (page * 4).
3. An exact, case-insensitive name match wins outright, even over other
   exact matches later in the list (first in upstream order).
4. A single remaining card is also shown directly.
5. Anything else is a list of candidates.
"""

import logging
from collections.abc import Iterable, Sequence
from typing import Any

from cardfetcher.config import CARDS_PER_PAGE
from cardfetcher.models.card import CardSummary
from cardfetcher.models.failure import MissingImageError
from cardfetcher.models.outcome import Candidates, NotFound, ResolvedOutcome, SingleCard

logger = logging.getLogger(__name__)

IMAGE_SIZE = "normal"


def summarize_card(record: dict[str, Any]) -> CardSummary:
    """
    Build a CardSummary from a raw Scryfall card record.

    Double-faced cards carry no top-level image; their name, type, text
    and image come from the front face. The id, link, set and collector
    number always come from the top-level record.

    Raises:
        MissingImageError: If neither the record nor its front face has an image
    """
    faces = record.get("card_faces") or []
    source = faces[0] if faces and not record.get("image_uris") else record

    image_url = (source.get("image_uris") or {}).get(IMAGE_SIZE)
    if not image_url:
        raise MissingImageError(record.get("id"), source.get("name"))

    return CardSummary(
        id=record.get("id", ""),
        name=source.get("name", ""),
        set_code=record.get("set", ""),
        type_line=source.get("type_line", ""),
        oracle_text=source.get("oracle_text"),
        url=record.get("scryfall_uri", ""),
        image_url=image_url,
        collector_number=record.get("collector_number", ""),
    )


def summarize_cards(records: Iterable[dict[str, Any]]) -> list[CardSummary]:
    """Summarize records in order, skipping those that cannot be displayed."""
    cards: list[CardSummary] = []
    for record in records:
        try:
            cards.append(summarize_card(record))
        except MissingImageError as e:
            logger.warning("Skipping card without image: %s (%s)", e.name, e.detail)
    return cards


def window_cards(cards: Sequence[CardSummary], page: int) -> list[CardSummary]:
    """Drop the cards already shown on pages before `page`."""
    return list(cards[max(page, 0) * CARDS_PER_PAGE :])


def find_exact_match(cards: Iterable[CardSummary], name: str) -> CardSummary | None:
    """First card whose name equals `name`, ignoring case."""
    wanted = name.lower()
    for card in cards:
        if card.name.lower() == wanted:
            return card
    return None


def resolve(records: Iterable[dict[str, Any]], name: str, page: int = 0) -> ResolvedOutcome:
    """
    Resolve raw search records into an outcome.

    Args:
        records: Raw Scryfall records, in upstream order
        name: The name the user searched for
        page: Display window requested

    Returns:
        NotFound, SingleCard or Candidates
    """
    cards = window_cards(summarize_cards(records), page)
    logger.info("Cards: %s", [card.name for card in cards])

    if not cards:
        return NotFound()

    exact = find_exact_match(cards, name)
    if exact is not None:
        return SingleCard(exact)

    if len(cards) == 1:
        return SingleCard(cards[0])

    return Candidates(cards=tuple(cards), page=page)
