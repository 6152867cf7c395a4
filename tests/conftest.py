from collections.abc import Callable
from typing import Any

import pytest

RecordFactory = Callable[..., dict[str, Any]]


@pytest.fixture
def make_record() -> RecordFactory:
    """Factory for raw Scryfall card records."""

    def _make(name: str, **overrides: Any) -> dict[str, Any]:
        slug = name.lower().replace(" ", "-").replace(",", "")
        record: dict[str, Any] = {
            "object": "card",
            "id": f"id-{slug}",
            "name": name,
            "set": "leb",
            "type_line": "Instant",
            "oracle_text": f"{name} deals 3 damage to any target.",
            "scryfall_uri": f"https://scryfall.com/card/leb/1/{slug}",
            "image_uris": {
                "small": f"https://cards.scryfall.io/small/{slug}.jpg",
                "normal": f"https://cards.scryfall.io/normal/{slug}.jpg",
            },
            "collector_number": "1",
        }
        record.update(overrides)
        return record

    return _make


@pytest.fixture
def double_faced_record() -> dict[str, Any]:
    """A transform card: images live on the faces, not the card."""
    return {
        "object": "card",
        "id": "id-delver",
        "name": "Delver of Secrets // Insectile Aberration",
        "set": "isd",
        "scryfall_uri": "https://scryfall.com/card/isd/51/delver-of-secrets",
        "collector_number": "51",
        "card_faces": [
            {
                "name": "Delver of Secrets",
                "type_line": "Creature — Human Wizard",
                "oracle_text": "At the beginning of your upkeep, look at the top card.",
                "image_uris": {"normal": "https://cards.scryfall.io/normal/front/delver.jpg"},
            },
            {
                "name": "Insectile Aberration",
                "type_line": "Creature — Human Insect",
                "oracle_text": "Flying",
                "image_uris": {"normal": "https://cards.scryfall.io/normal/back/delver.jpg"},
            },
        ],
    }
