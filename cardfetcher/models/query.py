from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Query:
    """
    A normalized card query.

    Attributes:
        name: Card name or Scryfall search text, trimmed
        page: Display window to show (0 = first four cards)
    """

    name: str
    page: int = 0
