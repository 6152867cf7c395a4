from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_name: str = "CardFetcher"
    debug: bool = False
    log_level: str = "INFO"
    port: int = 5000

    # Messenger credentials, read from MESSENGER_APP_SECRET etc.
    app_secret: str = Field(
        default="", validation_alias=AliasChoices("MESSENGER_APP_SECRET", "app_secret")
    )
    validation_token: str = Field(
        default="",
        validation_alias=AliasChoices("MESSENGER_VALIDATION_TOKEN", "validation_token"),
    )
    page_access_token: str = Field(
        default="",
        validation_alias=AliasChoices("MESSENGER_PAGE_ACCESS_TOKEN", "page_access_token"),
    )

    graph_api_url: str = "https://graph.facebook.com/v2.6"
    scryfall_api_url: str = "https://api.scryfall.com"

    # Scryfall asks for no more than 10 requests per second
    scryfall_page_delay: float = 0.1
    scryfall_max_pages: int = 20

    http_timeout: float = 30.0

    # Only images served from these hosts may be uploaded through /upload
    allowed_image_prefixes: list[str] = Field(
        default_factory=lambda: [
            "https://img.scryfall.com",
            "https://cards.scryfall.io",
        ]
    )

    def missing_credentials(self) -> list[str]:
        """Names of Messenger credentials that are not configured."""
        required = {
            "MESSENGER_APP_SECRET": self.app_secret,
            "MESSENGER_VALIDATION_TOKEN": self.validation_token,
            "MESSENGER_PAGE_ACCESS_TOKEN": self.page_access_token,
        }
        return [name for name, value in required.items() if not value]


settings = Settings()


# =============================================================================
# DISPLAY LIMITS
# =============================================================================

# Messenger list templates hold at most four elements, so one display
# window is four cards wide
CARDS_PER_PAGE = 4
