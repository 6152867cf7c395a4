"""
CardFetcher services.

Search, resolution and reply building for card queries.
"""

from cardfetcher.services.messenger import DeliveryReport, MessengerClient
from cardfetcher.services.pipeline import QueryPipeline
from cardfetcher.services.response_builder import AttachmentUploader, build_response
from cardfetcher.services.result_resolver import resolve, summarize_card, window_cards
from cardfetcher.services.scryfall_search import ScryfallSearchClient

__all__ = [
    "AttachmentUploader",
    "DeliveryReport",
    "MessengerClient",
    "QueryPipeline",
    "ScryfallSearchClient",
    "build_response",
    "resolve",
    "summarize_card",
    "window_cards",
]
