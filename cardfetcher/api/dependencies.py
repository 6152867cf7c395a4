"""
FastAPI dependencies.

Builds the configured clients for each request from the Settings
instance, so tests can swap any of them through app.dependency_overrides.
"""

from typing import Annotated

from fastapi import Depends

from cardfetcher.config import Settings, settings
from cardfetcher.services.messenger import MessengerClient
from cardfetcher.services.pipeline import QueryPipeline
from cardfetcher.services.scryfall_search import ScryfallSearchClient


def get_settings() -> Settings:
    return settings


def get_messenger_client(
    config: Annotated[Settings, Depends(get_settings)],
) -> MessengerClient:
    return MessengerClient(
        page_access_token=config.page_access_token,
        base_url=config.graph_api_url,
        timeout=config.http_timeout,
    )


def get_search_client(
    config: Annotated[Settings, Depends(get_settings)],
) -> ScryfallSearchClient:
    return ScryfallSearchClient(
        base_url=config.scryfall_api_url,
        timeout=config.http_timeout,
        page_delay=config.scryfall_page_delay,
        max_pages=config.scryfall_max_pages,
    )


def get_pipeline(
    search_client: Annotated[ScryfallSearchClient, Depends(get_search_client)],
    messenger: Annotated[MessengerClient, Depends(get_messenger_client)],
) -> QueryPipeline:
    return QueryPipeline(search_client=search_client, messenger=messenger)
