"""Unit test fixtures: HTTP mocking and stub sources."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, ClassVar

import pytest
import respx

from pubdate.core.exceptions import LookupUnavailableError
from pubdate.core.types import SourceName
from pubdate.resolution.base import AbstractSourceAdapter, AdapterConfig, RateLimiter

# ============================================================================
# HTTP Mocking Fixtures
# ============================================================================


@pytest.fixture
def respx_mock():
    """Provide a respx mock router for HTTP mocking.

    Use this when you need fine-grained control over mocked responses.
    The mock is automatically started and stopped by respx.
    """
    with respx.mock(assert_all_called=False) as router:
        yield router


# ============================================================================
# Stub Sources
# ============================================================================


class StubAdapter(AbstractSourceAdapter):
    """Source answering from a dict, logging every identifier it is asked about."""

    BASE_URL: ClassVar[str] = "https://stub.invalid"

    def __init__(
        self,
        source: SourceName,
        dates: dict[str, str],
        rate_limiter: RateLimiter,
        call_log: list[tuple[SourceName, str]],
        fail: bool = False,
    ) -> None:
        super().__init__(AdapterConfig(), rate_limiter)
        self._source = source
        self._dates = dates
        self._fail = fail
        self._call_log = call_log
        self.queried: list[str] = []

    @property
    def source_name(self) -> SourceName:
        return self._source

    async def fetch_isbn(self, identifier: str) -> tuple[int, Any]:
        self.queried.append(identifier)
        self._call_log.append((self._source, identifier))
        if self._fail:
            raise LookupUnavailableError("connection reset", source=self._source.value)
        if identifier in self._dates:
            return 200, {"date": self._dates[identifier]}
        return 404, None

    def extract_published_date(self, identifier: str, data: Any) -> str | None:
        return data.get("date")


@pytest.fixture
def call_log() -> list[tuple[SourceName, str]]:
    """Every (source, identifier) queried by stub adapters, in order."""
    return []


@pytest.fixture
def make_adapter(
    rate_limiter: RateLimiter,
    call_log: list[tuple[SourceName, str]],
) -> Callable[..., StubAdapter]:
    """Factory for stub adapters sharing the recording rate limiter."""

    def factory(
        source: SourceName,
        dates: dict[str, str] | None = None,
        *,
        fail: bool = False,
    ) -> StubAdapter:
        return StubAdapter(source, dates or {}, rate_limiter, call_log, fail=fail)

    return factory
