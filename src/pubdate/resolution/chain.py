"""Ordered fallback across publication date sources."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from pubdate.core.models import SourceLookup
from pubdate.core.types import ResolutionStatus
from pubdate.resolution.base import AbstractSourceAdapter

logger = logging.getLogger(__name__)


@dataclass
class ChainResult:
    """Lookups made for one identifier, in the order they were tried."""

    lookups: list[SourceLookup] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.winner is not None

    @property
    def winner(self) -> SourceLookup | None:
        """The lookup that found a date, if any."""
        for lookup in self.lookups:
            if lookup.found:
                return lookup
        return None

    @property
    def sources_tried(self) -> list[str]:
        return [lookup.source.value for lookup in self.lookups]


class SourceChain:
    """
    Tries adapters strictly in the given order, stopping at the first date.

    The order is fixed at construction; nothing here reorders or skips
    adapters based on past results.
    """

    def __init__(self, adapters: list[AbstractSourceAdapter]) -> None:
        self._adapters = [a for a in adapters if a.is_enabled]

    @property
    def adapters(self) -> list[AbstractSourceAdapter]:
        return list(self._adapters)

    async def resolve(self, identifier: str) -> ChainResult:
        result = ChainResult()

        for adapter in self._adapters:
            lookup = await adapter.lookup(identifier)
            result.lookups.append(lookup)

            if lookup.found:
                break

            if lookup.status == ResolutionStatus.ERROR:
                logger.info(f"{adapter.source_name} failed, trying next source")
            else:
                logger.info(f"Not found in {adapter.source_name}, trying next source")

        return result

    async def close(self) -> None:
        """Close all adapters."""
        for adapter in self._adapters:
            await adapter.close()

    async def __aenter__(self) -> "SourceChain":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
