from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class CardSummary:
    """
    The displayable part of one Scryfall search result.

    Attributes:
        id: Scryfall card id
        name: Card name (first face name for double-faced cards)
        set_code: Set code of this printing (e.g., "leb")
        type_line: Type line (e.g., "Instant")
        oracle_text: Rules text, absent for some multi-part cards
        url: Scryfall page for this printing
        image_url: "normal" size image, always present
        collector_number: Collector number within set
    """

    id: str
    name: str
    set_code: str
    type_line: str
    oracle_text: str | None
    url: str
    image_url: str
    collector_number: str


@dataclass(slots=True)
class SearchPage:
    """One page of raw Scryfall search results."""

    cards: list[dict[str, Any]]
    has_more: bool = False
