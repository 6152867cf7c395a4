"""
Resolved outcomes of a card query.

A query resolves to exactly one of:
- NotFound: nothing left to show in the requested window
- SingleCard: one card to display as an image
- Candidates: several cards the user has to choose from
"""

from dataclasses import dataclass

from cardfetcher.models.card import CardSummary


@dataclass(frozen=True, slots=True)
class NotFound:
    """No card survived windowing."""


@dataclass(frozen=True, slots=True)
class SingleCard:
    """The query resolved to one card."""

    card: CardSummary


@dataclass(frozen=True, slots=True)
class Candidates:
    """
    The query is ambiguous.

    Attributes:
        cards: Every card in the display window, in upstream order
        page: Display window these cards were taken from
    """

    cards: tuple[CardSummary, ...]
    page: int


ResolvedOutcome = NotFound | SingleCard | Candidates
