"""
Parser for inbound query text.

Message texts and postback payloads share one format:

    Lightning Bolt          search for "Lightning Bolt", first window
    Bolt#1                  search for "Bolt", second window of candidates

The "#<page>" continuation marker is written by list messages into their
"More" button, so the only pagination state lives in the client.
"""

import re

from cardfetcher.models.query import Query

CONTINUATION_MARKER = "#"

# Smart quotes typed by phone keyboards, folded to ASCII
_QUOTE_TABLE = str.maketrans(
    {
        "‘": "'",
        "’": "'",
        "“": '"',
        "”": '"',
    }
)

# A page number is a plain run of ASCII digits
_PAGE_PATTERN = re.compile(r"^[0-9]+$")


def fold_quotes(text: str) -> str:
    """Replace curly single and double quotes with straight ones."""
    return text.translate(_QUOTE_TABLE)


def parse_page(marker: str) -> int:
    """
    Parse the text after a continuation marker.

    Returns:
        The page number, or 0 when the marker is empty or not a
        non-negative integer.
    """
    marker = marker.strip()
    if not _PAGE_PATTERN.match(marker):
        return 0
    return int(marker)


def normalize(raw_text: str) -> Query:
    """
    Turn raw message text or a postback payload into a Query.

    Args:
        raw_text: Text exactly as received from Messenger

    Returns:
        Query with the trimmed card name and the requested page
    """
    text = fold_quotes(raw_text)

    name, marker, suffix = text.partition(CONTINUATION_MARKER)
    page = parse_page(suffix) if marker else 0

    return Query(name=name.strip(), page=page)


def encode_continuation(name: str, page: int) -> str:
    """Build the query string that asks for `page` of `name`'s candidates."""
    return f"{name}{CONTINUATION_MARKER}{page}"
