"""Tests for application settings."""

import pytest

from cardfetcher.api.dependencies import get_messenger_client, get_pipeline, get_search_client
from cardfetcher.config import Settings


class TestSettings:
    def test_reads_messenger_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MESSENGER_APP_SECRET", "secret")
        monkeypatch.setenv("MESSENGER_VALIDATION_TOKEN", "token")
        monkeypatch.setenv("MESSENGER_PAGE_ACCESS_TOKEN", "page")

        config = Settings()

        assert config.app_secret == "secret"
        assert config.validation_token == "token"
        assert config.page_access_token == "page"
        assert config.missing_credentials() == []

    def test_lists_missing_credentials(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for name in (
            "MESSENGER_APP_SECRET",
            "MESSENGER_VALIDATION_TOKEN",
            "MESSENGER_PAGE_ACCESS_TOKEN",
        ):
            monkeypatch.delenv(name, raising=False)

        config = Settings(validation_token="token")

        assert config.missing_credentials() == [
            "MESSENGER_APP_SECRET",
            "MESSENGER_PAGE_ACCESS_TOKEN",
        ]

    def test_defaults(self) -> None:
        config = Settings()

        assert config.scryfall_api_url == "https://api.scryfall.com"
        assert config.graph_api_url == "https://graph.facebook.com/v2.6"
        assert "https://cards.scryfall.io" in config.allowed_image_prefixes


class TestClientFactories:
    def test_clients_use_settings(self) -> None:
        config = Settings(
            page_access_token="page",
            scryfall_api_url="https://scryfall.test",
            scryfall_page_delay=0.5,
            scryfall_max_pages=3,
            http_timeout=5.0,
        )

        messenger = get_messenger_client(config)
        search_client = get_search_client(config)
        pipeline = get_pipeline(search_client, messenger)

        assert messenger.page_access_token == "page"
        assert messenger.timeout == 5.0
        assert search_client.search_url == "https://scryfall.test/cards/search"
        assert search_client.page_delay == 0.5
        assert search_client.max_pages == 3
        assert pipeline.search_client is search_client
        assert pipeline.messenger is messenger
