"""Abstract source adapter with HTTP client management and request pacing."""

from __future__ import annotations

import asyncio
import logging
import random
import time
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any, AsyncIterator, ClassVar

import httpx
from pydantic import BaseModel, Field

from pubdate.config import DEFAULT_USER_AGENTS
from pubdate.core.exceptions import LookupUnavailableError
from pubdate.core.models import SourceLookup
from pubdate.core.types import ResolutionStatus, SourceName

logger = logging.getLogger(__name__)

SleepFunc = Callable[[float], Awaitable[None]]


@dataclass(frozen=True)
class RateLimitConfig:
    """Delay windows, in milliseconds."""

    request_delay_ms: tuple[int, int] = (1500, 3000)
    cooldown_delay_ms: tuple[int, int] = (8000, 15000)
    cooldown_every: int = 5


class RateLimiter:
    """
    Randomized pacing for sequential lookups.

    Every source query is preceded by a short random pause, and the batch
    driver takes a long random pause every few items. Holds no state besides
    its configuration, so one instance can be shared by all adapters.
    """

    def __init__(
        self,
        config: RateLimitConfig | None = None,
        *,
        rng: random.Random | None = None,
        sleep: SleepFunc | None = None,
    ) -> None:
        self.config = config or RateLimitConfig()
        self._rng = rng or random.Random()
        self._sleep = sleep or asyncio.sleep

    async def wait(self, min_ms: float, max_ms: float) -> float:
        """Sleep for a uniformly random duration in [min_ms, max_ms]; returns seconds slept."""
        if min_ms > max_ms:
            raise ValueError(f"Invalid delay window: [{min_ms}, {max_ms}]")
        seconds = self._rng.uniform(min_ms, max_ms) / 1000.0
        await self._sleep(seconds)
        return seconds

    async def before_request(self, source: SourceName | None = None) -> float:
        """Pause before one outbound source query."""
        seconds = await self.wait(*self.config.request_delay_ms)
        logger.debug(f"Paused {seconds:.1f}s before {source or 'request'}")
        return seconds

    async def cooldown(self) -> float:
        """Long pause between groups of processed items."""
        seconds = await self.wait(*self.config.cooldown_delay_ms)
        logger.info(f"Cooldown pause: {seconds:.1f}s")
        return seconds

    def is_cooldown_due(self, processed: int, remaining: int) -> bool:
        """Whether a cooldown follows the item that brought the count to `processed`."""
        return processed % self.config.cooldown_every == 0 and remaining > 0


class AdapterConfig(BaseModel):
    """Configuration for a source adapter."""

    api_key: str | None = None
    base_url: str | None = None
    timeout: float = 30.0
    user_agents: list[str] = Field(default_factory=lambda: list(DEFAULT_USER_AGENTS))
    accept_language: str = "es-ES,es;q=0.9,en;q=0.8"
    enabled: bool = True


class AbstractSourceAdapter(ABC):
    """
    Abstract base class for publication date sources.

    Provides:
    - HTTP client management with connection pooling
    - Randomized pacing through a shared RateLimiter
    - Randomized User-Agent per request
    - The never-raise lookup() contract: every failure becomes a SourceLookup
    """

    SOURCE_NAME: ClassVar[SourceName]
    BASE_URL: ClassVar[str]

    def __init__(
        self,
        config: AdapterConfig | None = None,
        rate_limiter: RateLimiter | None = None,
        *,
        rng: random.Random | None = None,
    ) -> None:
        self.config = config or AdapterConfig()
        self._rate_limiter = rate_limiter or RateLimiter()
        self._rng = rng or random.Random()
        self._client: httpx.AsyncClient | None = None
        self.calls: int = 0

    @property
    def source_name(self) -> SourceName:
        """The source this adapter queries."""
        return self.SOURCE_NAME

    @property
    def is_enabled(self) -> bool:
        return self.config.enabled

    @asynccontextmanager
    async def _get_client(self) -> AsyncIterator[httpx.AsyncClient]:
        """Get or create HTTP client with proper lifecycle."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.config.base_url or self.BASE_URL,
                timeout=httpx.Timeout(self.config.timeout),
                follow_redirects=True,
            )

        try:
            yield self._client
        except httpx.HTTPError as e:
            raise LookupUnavailableError(
                message=f"HTTP error: {e}",
                source=self.source_name.value,
            ) from e

    def choose_user_agent(self) -> str:
        return self._rng.choice(self.config.user_agents)

    def _get_headers(self) -> dict[str, str]:
        """Headers for one request, with a freshly picked User-Agent."""
        return {
            "User-Agent": self.choose_user_agent(),
            "Accept": "application/json",
            "Accept-Language": self.config.accept_language,
        }

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def _get(self, url: str, **kwargs: Any) -> httpx.Response:
        """Issue one GET with randomized headers."""
        self.calls += 1
        async with self._get_client() as client:
            return await client.get(url, headers=self._get_headers(), **kwargs)

    async def _get_json(self, url: str, **kwargs: Any) -> tuple[int, Any]:
        """GET and decode JSON; returns (status_code, body or None on non-2xx)."""
        response = await self._get(url, **kwargs)
        if not response.is_success:
            return response.status_code, None
        try:
            return response.status_code, response.json()
        except ValueError as e:
            raise LookupUnavailableError(
                message=f"Malformed JSON from {self.source_name}: {e}",
                source=self.source_name.value,
                status_code=response.status_code,
            ) from e

    async def lookup(self, identifier: str) -> SourceLookup:
        """
        Look up the publication date of one normalized identifier.

        Never raises: transport and parse failures come back as
        ResolutionStatus.ERROR so the caller can move on to the next source.
        """
        start = time.monotonic()

        try:
            await self._rate_limiter.before_request(self.source_name)

            status_code, data = await self.fetch_isbn(identifier)
            duration_ms = (time.monotonic() - start) * 1000

            if data is None:
                return SourceLookup(
                    status=ResolutionStatus.NOT_FOUND,
                    source=self.source_name,
                    error_message=f"HTTP {status_code}",
                    duration_ms=duration_ms,
                )

            value = self.extract_published_date(identifier, data)
            return SourceLookup(
                status=ResolutionStatus.SUCCESS if value else ResolutionStatus.NOT_FOUND,
                source=self.source_name,
                value=value,
                duration_ms=duration_ms,
            )

        except Exception as e:
            logger.warning(f"Lookup on {self.source_name} failed for {identifier}: {e}")
            return SourceLookup(
                status=ResolutionStatus.ERROR,
                source=self.source_name,
                error_message=str(e),
                duration_ms=(time.monotonic() - start) * 1000,
            )

    @abstractmethod
    async def fetch_isbn(self, identifier: str) -> tuple[int, Any]:
        """
        Fetch the raw source payload for an identifier, without pacing.

        Returns:
            (status_code, decoded JSON) or (status_code, None) on a non-2xx answer

        Raises:
            LookupUnavailableError: on transport failure or malformed JSON
        """
        ...

    @abstractmethod
    def extract_published_date(self, identifier: str, data: Any) -> str | None:
        """Pull the publication date out of a decoded payload, if present."""
        ...

    async def __aenter__(self) -> "AbstractSourceAdapter":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
