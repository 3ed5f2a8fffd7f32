"""Source registry for creating and managing adapter instances."""

from __future__ import annotations

import random
from typing import TYPE_CHECKING

from pubdate.core.types import SourceName
from pubdate.resolution.base import (
    AbstractSourceAdapter,
    AdapterConfig,
    RateLimitConfig,
    RateLimiter,
)
from pubdate.resolution.books.google_books import GoogleBooksAdapter
from pubdate.resolution.books.openlibrary import OpenLibraryAdapter
from pubdate.resolution.chain import SourceChain

if TYPE_CHECKING:
    from pubdate.config import PubdateSettings

# Google Books has the better coverage for this catalogue; keep it first.
DEFAULT_SOURCE_ORDER: tuple[SourceName, ...] = (
    SourceName.GOOGLE_BOOKS,
    SourceName.OPEN_LIBRARY,
)


class SourceRegistry:
    """
    Holds one adapter per source plus the rate limiter they share.

    Builds the SourceChain in DEFAULT_SOURCE_ORDER.
    """

    def __init__(self, rate_limiter: RateLimiter | None = None) -> None:
        self.rate_limiter = rate_limiter or RateLimiter()
        self._adapters: dict[SourceName, AbstractSourceAdapter] = {}

    def register(self, adapter: AbstractSourceAdapter) -> None:
        """Register an adapter, replacing any previous one for its source."""
        self._adapters[adapter.source_name] = adapter

    def get(self, source: SourceName) -> AbstractSourceAdapter:
        try:
            return self._adapters[source]
        except KeyError:
            raise KeyError(f"No adapter registered for {source}") from None

    @property
    def google_books(self) -> GoogleBooksAdapter:
        adapter = self.get(SourceName.GOOGLE_BOOKS)
        if not isinstance(adapter, GoogleBooksAdapter):
            raise TypeError(f"Expected a GoogleBooksAdapter, got {type(adapter).__name__}")
        return adapter

    def get_chain(self) -> SourceChain:
        """Chain of the registered adapters in DEFAULT_SOURCE_ORDER."""
        return SourceChain(
            [self._adapters[s] for s in DEFAULT_SOURCE_ORDER if s in self._adapters]
        )

    @classmethod
    def from_settings(
        cls,
        settings: "PubdateSettings",
        *,
        rng: random.Random | None = None,
    ) -> "SourceRegistry":
        """Create a registry with both sources configured from settings."""
        rate_limiter = RateLimiter(
            RateLimitConfig(
                request_delay_ms=(settings.request_delay_min_ms, settings.request_delay_max_ms),
                cooldown_delay_ms=(settings.cooldown_min_ms, settings.cooldown_max_ms),
                cooldown_every=settings.cooldown_every,
            ),
            rng=rng,
        )
        registry = cls(rate_limiter)

        common = {
            "timeout": settings.request_timeout,
            "user_agents": settings.user_agents,
            "accept_language": settings.accept_language,
        }
        registry.register(
            GoogleBooksAdapter(
                AdapterConfig(
                    api_key=settings.google_books_api_key,
                    base_url=settings.google_books_base_url,
                    **common,
                ),
                rate_limiter,
                rng=rng,
            )
        )
        registry.register(
            OpenLibraryAdapter(
                AdapterConfig(base_url=settings.open_library_base_url, **common),
                rate_limiter,
                rng=rng,
            )
        )
        return registry

    async def close_all(self) -> None:
        """Close all registered adapters."""
        for adapter in self._adapters.values():
            await adapter.close()
