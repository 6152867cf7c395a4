"""
Scryfall card search client.

Runs one card search across every result page Scryfall reports and
returns the concatenated records in API order. Pages are requested one
at a time, each awaited before the next, because only a page's
`has_more` flag says whether another page exists.

Search API: https://scryfall.com/docs/api/cards/search
"""

import asyncio
import logging
from typing import Any

import httpx

from cardfetcher.models.card import SearchPage
from cardfetcher.models.failure import SearchFetchError

logger = logging.getLogger(__name__)

# Newest printings first
SEARCH_ORDER = "set"
SEARCH_DIRECTION = "desc"

# Scryfall rejects requests without a User-Agent and Accept header
REQUEST_HEADERS = {"User-Agent": "CardFetcher/1.0", "Accept": "application/json"}


class ScryfallSearchClient:
    """
    Client for the Scryfall card search endpoint.

    Every search walks the full result set; callers slice it afterwards.
    """

    def __init__(
        self,
        base_url: str = "https://api.scryfall.com",
        timeout: float = 30.0,
        page_delay: float = 0.1,
        max_pages: int = 20,
    ) -> None:
        """
        Initialize the search client.

        Args:
            base_url: Scryfall API base URL
            timeout: Request timeout in seconds
            page_delay: Seconds to wait between page requests
            max_pages: Pages a search may span before it is treated as failed
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.page_delay = page_delay
        self.max_pages = max_pages

    @property
    def search_url(self) -> str:
        return f"{self.base_url}/cards/search"

    async def fetch_page(self, client: httpx.AsyncClient, query: str, page: int) -> SearchPage:
        """
        Fetch one page of search results.

        Scryfall answers a search with no matches with a 404 "not_found"
        error object; that is reported as an empty last page.

        Raises:
            httpx.HTTPStatusError: On any other error status
            SearchFetchError: If the body is not a JSON object
        """
        response = await client.get(
            self.search_url,
            params={
                "order": SEARCH_ORDER,
                "dir": SEARCH_DIRECTION,
                "q": query,
                "page": page,
            },
        )

        if response.status_code == httpx.codes.NOT_FOUND and _is_not_found(response):
            return SearchPage(cards=[], has_more=False)

        response.raise_for_status()
        try:
            data = response.json()
        except ValueError as e:
            logger.error("Scryfall search for %r returned a body that is not JSON", query)
            raise SearchFetchError(query, detail="Invalid JSON") from e
        if not isinstance(data, dict):
            logger.error(
                "Scryfall search for %r returned %s, not a list object",
                query,
                type(data).__name__,
            )
            raise SearchFetchError(query, detail="Invalid JSON")

        return SearchPage(
            cards=list(data.get("data", [])),
            has_more=bool(data.get("has_more", False)),
        )

    async def search(self, query: str) -> list[dict[str, Any]]:
        """
        Search Scryfall and collect results from every page.

        Args:
            query: Card name or Scryfall search syntax

        Returns:
            Raw card records in the order Scryfall returned them

        Raises:
            SearchFetchError: If any page fails or the search spans more than
                max_pages pages; no partial results are returned
        """
        records: list[dict[str, Any]] = []

        try:
            async with httpx.AsyncClient(timeout=self.timeout, headers=REQUEST_HEADERS) as client:
                page = 1
                while True:
                    result = await self.fetch_page(client, query, page)
                    records.extend(result.cards)

                    if not result.has_more:
                        break
                    if page >= self.max_pages:
                        logger.error(
                            "Scryfall search for %r still has more after %d pages (%d cards)",
                            query,
                            page,
                            len(records),
                        )
                        raise SearchFetchError(query, detail="page ceiling reached")

                    page += 1
                    await asyncio.sleep(self.page_delay)
        except httpx.HTTPStatusError as e:
            logger.error("Scryfall search for %r failed: HTTP %s", query, e.response.status_code)
            raise SearchFetchError(query, detail=f"HTTP {e.response.status_code}") from e
        except httpx.RequestError as e:
            logger.error("Scryfall search for %r failed: %s", query, e)
            raise SearchFetchError(query, detail=str(e)) from e

        logger.info("Scryfall search for %r returned %d cards", query, len(records))
        return records


def _is_not_found(response: httpx.Response) -> bool:
    """Whether a 404 body is Scryfall's "no cards matched" error object."""
    try:
        body = response.json()
    except ValueError:
        return False
    return isinstance(body, dict) and body.get("code") == "not_found"
