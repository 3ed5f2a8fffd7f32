"""Application configuration using Pydantic Settings."""

from functools import lru_cache
from typing import Self

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_USER_AGENTS = [
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:89.0) Gecko/20100101 Firefox/89.0",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/605.1.15 "
    "(KHTML, like Gecko) Version/14.1.1 Safari/605.1.15",
]


class PubdateSettings(BaseSettings):
    """Application configuration from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_prefix="PUBDATE_",
    )

    # Spreadsheet
    default_spreadsheet_id: str | None = Field(
        default=None,
        description="Spreadsheet used when a request does not name one",
    )
    default_sheet_name: str = Field(
        default="Kobo",
        description="Sheet holding the ISBN (column A) and date (column B) rows",
    )
    index_sheet_name: str = Field(
        default="indice",
        description="Sheet holding already-resolved ISBNs",
    )

    # Google service account
    google_service_account_email: str | None = Field(
        default=None,
        description="Service account client email",
    )
    google_private_key: SecretStr | None = Field(
        default=None,
        description="Service account private key (literal \\n sequences allowed)",
    )
    google_service_account_file: str | None = Field(
        default=None,
        description="Path to a service account JSON file (alternative to email + key)",
    )

    # External APIs
    google_books_api_key: str | None = Field(
        default=None,
        description="Google Books API key (optional, increases rate limits)",
    )
    google_books_base_url: str = Field(
        default="https://www.googleapis.com/books/v1",
        description="Google Books API base URL",
    )
    open_library_base_url: str = Field(
        default="https://openlibrary.org",
        description="Open Library base URL",
    )
    request_timeout: float = Field(
        default=30.0,
        gt=0,
        description="Per-request timeout in seconds",
    )
    user_agents: list[str] = Field(
        default_factory=lambda: list(DEFAULT_USER_AGENTS),
        min_length=1,
        description="User-Agent pool, one is picked at random per request",
    )
    accept_language: str = Field(
        default="es-ES,es;q=0.9,en;q=0.8",
        description="Accept-Language header sent to the sources",
    )

    # Pacing
    request_delay_min_ms: int = Field(default=1500, ge=0)
    request_delay_max_ms: int = Field(default=3000, ge=0)
    cooldown_min_ms: int = Field(default=8000, ge=0)
    cooldown_max_ms: int = Field(default=15000, ge=0)
    cooldown_every: int = Field(
        default=5,
        ge=1,
        description="Take a long pause after this many processed items",
    )

    # App settings
    cors_origins: list[str] = Field(
        default_factory=lambda: ["*"],
        description="Allowed CORS origins",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )

    @model_validator(mode="after")
    def check_delay_windows(self) -> Self:
        if self.request_delay_min_ms > self.request_delay_max_ms:
            raise ValueError("request_delay_min_ms must not exceed request_delay_max_ms")
        if self.cooldown_min_ms > self.cooldown_max_ms:
            raise ValueError("cooldown_min_ms must not exceed cooldown_max_ms")
        return self

    @property
    def private_key(self) -> str | None:
        """Private key with escaped newlines restored."""
        if self.google_private_key is None:
            return None
        return self.google_private_key.get_secret_value().replace("\\n", "\n")


@lru_cache
def get_settings() -> PubdateSettings:
    """Get cached settings instance."""
    return PubdateSettings()
