"""
Outbound Messenger messages.

Each message type renders itself as the `message` object of a Send API
request via to_payload(). Templates follow the Messenger platform's
media, generic and list template formats.
"""

from dataclasses import dataclass
from typing import Any

SCRYFALL_BUTTON_TITLE = "Scryfall"
PICK_BUTTON_TITLE = "This One"
MORE_BUTTON_TITLE = "More"


def scryfall_button(url: str) -> dict[str, Any]:
    """Link button that opens a card on Scryfall."""
    return {"type": "web_url", "url": url, "title": SCRYFALL_BUTTON_TITLE}


def postback_button(title: str, payload: str) -> dict[str, Any]:
    """Button that sends `payload` back to the webhook when tapped."""
    return {"type": "postback", "title": title, "payload": payload}


@dataclass(frozen=True, slots=True)
class TextMessage:
    """Plain text reply."""

    text: str

    def to_payload(self) -> dict[str, Any]:
        return {"text": self.text}


@dataclass(frozen=True, slots=True)
class MediaMessage:
    """
    A single card image with a Scryfall link and a share action.

    Attributes:
        attachment_id: Reusable attachment id of the uploaded card image
        title: Card name, shown in shared copies
        image_url: Card image, shown in shared copies
        url: Scryfall page of the card
    """

    attachment_id: str
    title: str
    image_url: str
    url: str

    def buttons(self) -> list[dict[str, Any]]:
        return [scryfall_button(self.url), self._share_button()]

    def _share_button(self) -> dict[str, Any]:
        """Share action carrying a self-contained generic template of the card."""
        return {
            "type": "element_share",
            "share_contents": {
                "attachment": {
                    "type": "template",
                    "payload": {
                        "template_type": "generic",
                        "image_aspect_ratio": "square",
                        "elements": [
                            {
                                "title": self.title,
                                "image_url": self.image_url,
                                "default_action": {"type": "web_url", "url": self.url},
                                "buttons": [scryfall_button(self.url)],
                            }
                        ],
                    },
                }
            },
        }

    def to_payload(self) -> dict[str, Any]:
        return {
            "attachment": {
                "type": "template",
                "payload": {
                    "template_type": "media",
                    "elements": [
                        {
                            "media_type": "image",
                            "attachment_id": self.attachment_id,
                            "buttons": self.buttons(),
                        }
                    ],
                },
            }
        }


@dataclass(frozen=True, slots=True)
class ListItem:
    """One candidate card in a list message."""

    title: str
    subtitle: str
    image_url: str
    url: str
    payload: str

    def to_element(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "subtitle": self.subtitle,
            "image_url": self.image_url,
            "default_action": {"type": "web_url", "url": self.url},
            "buttons": [postback_button(PICK_BUTTON_TITLE, self.payload)],
        }


@dataclass(frozen=True, slots=True)
class ListMessage:
    """
    Compact list of candidate cards.

    Attributes:
        items: Up to four candidates
        more_payload: Continuation query for the next window, if any
    """

    items: tuple[ListItem, ...]
    more_payload: str | None = None

    def to_payload(self) -> dict[str, Any]:
        buttons: list[dict[str, Any]] = []
        if self.more_payload is not None:
            buttons.append(postback_button(MORE_BUTTON_TITLE, self.more_payload))

        return {
            "attachment": {
                "type": "template",
                "payload": {
                    "template_type": "list",
                    "top_element_style": "compact",
                    "elements": [item.to_element() for item in self.items],
                    "buttons": buttons,
                },
            }
        }


OutboundMessage = TextMessage | MediaMessage | ListMessage
