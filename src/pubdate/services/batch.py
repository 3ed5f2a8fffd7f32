"""Batch resolution over the pending rows of a work sheet."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from pubdate.core.identifiers import try_normalize_identifier
from pubdate.core.models import PendingItem, RunStatistics, SourceLookup
from pubdate.core.types import SourceName

if TYPE_CHECKING:
    from pubdate.cache.index import ResolutionIndex
    from pubdate.resolution.base import RateLimiter
    from pubdate.resolution.chain import SourceChain
    from pubdate.storage.base import WorkSheet

logger = logging.getLogger(__name__)

BANNER = "=" * 50


@dataclass
class ResolutionOutcome:
    """What happened to one pending item."""

    item: PendingItem
    source: SourceName | None = None
    value: str | None = None
    lookups: list[SourceLookup] = field(default_factory=list)

    @property
    def found(self) -> bool:
        return self.source is not None


class BatchResolver:
    """
    Resolves pending ISBN rows one at a time.

    Per identifier the order is fixed and short-circuits on the first hit:
    1. The resolution index (no network)
    2. The source chain (Google Books, then Open Library)

    A hit writes the date into the row's cell; a network hit is also recorded
    in the index so later rows with the same ISBN are index hits.
    """

    def __init__(
        self,
        worksheet: "WorkSheet",
        index: "ResolutionIndex",
        chain: "SourceChain",
        rate_limiter: "RateLimiter",
    ) -> None:
        """
        Initialize the batch resolver.

        Args:
            worksheet: Sheet with the ISBN rows; also receives the dates
            index: Hydrated resolution index
            chain: Sources to try on an index miss, in order
            rate_limiter: Provides the periodic cooldown between items
        """
        self._worksheet = worksheet
        self._index = index
        self._chain = chain
        self._rate_limiter = rate_limiter

    async def list_pending(self) -> list[PendingItem]:
        """Rows with an ISBN and no date, in sheet order."""
        pending = []
        for row in await self._worksheet.list_rows():
            if row.value_cell and row.value_cell.strip():
                continue
            if not row.identifier_cell or not row.identifier_cell.strip():
                continue

            identifier = try_normalize_identifier(row.identifier_cell)
            if identifier is None:
                logger.warning(
                    f"Skipping row {row.row_position}: unusable ISBN {row.identifier_cell!r}"
                )
                continue
            pending.append(PendingItem(row_position=row.row_position, identifier=identifier))
        return pending

    async def resolve_item(
        self,
        item: PendingItem,
        stats: RunStatistics,
    ) -> ResolutionOutcome:
        """Run the index -> sources state machine for one item and count the outcome."""
        outcome = ResolutionOutcome(item=item)

        cached = self._index.lookup(item.identifier)
        if cached is not None:
            logger.info(f"Found in index: {cached}")
            await self._worksheet.set_value(item.row_position, cached)
            outcome.source = SourceName.CACHE
            outcome.value = cached
            stats.record_outcome(outcome.source)
            return outcome

        result = await self._chain.resolve(item.identifier)
        outcome.lookups = result.lookups

        winner = result.winner
        if winner is None or winner.value is None:
            logger.info("Not found in any source")
            stats.record_outcome(None)
            return outcome

        logger.info(f"Found in {winner.source.label}: {winner.value}")
        await self._worksheet.set_value(item.row_position, winner.value)
        await self._index.record(item.identifier, winner.value, winner.source)

        outcome.source = winner.source
        outcome.value = winner.value
        stats.record_outcome(outcome.source)
        return outcome

    async def run(self, max_count: int | None = None) -> RunStatistics:
        """
        Process pending rows, optionally only the first `max_count` of them.

        Returns:
            Statistics for this run
        """
        if max_count is not None and max_count < 0:
            raise ValueError(f"max_count must be >= 0, got {max_count}")

        start = time.monotonic()
        logger.info(BANNER)
        logger.info("MULTI-SOURCE RESOLVER (Google Books + Open Library)")
        logger.info(BANNER)

        pending = await self.list_pending()
        total = len(pending)
        logger.info(f"{total} ISBNs pending")

        items = pending
        if max_count is not None and max_count < total:
            items = pending[:max_count]
            logger.info(f"Limiting to {max_count} ISBNs")

        stats = RunStatistics(pending_total=total)

        for position, item in enumerate(items, start=1):
            logger.info(
                f"[{position}/{len(items)}] ISBN {item.identifier} (row {item.row_position})"
            )
            await self.resolve_item(item, stats)
            stats.processed += 1

            if self._rate_limiter.is_cooldown_due(stats.processed, remaining=len(items) - position):
                await self._rate_limiter.cooldown()

        stats.index_size = len(self._index)
        self._log_summary(stats, time.monotonic() - start)
        return stats

    @staticmethod
    def _log_summary(stats: RunStatistics, duration: float) -> None:
        logger.info(BANNER)
        logger.info("FINAL SUMMARY")
        logger.info(BANNER)
        logger.info(f"Total pending: {stats.pending_total}")
        logger.info(f"Processed: {stats.processed}")
        logger.info(f"Found in index: {stats.found_in_cache}")
        logger.info(f"Found in Google Books: {stats.found_google_books}")
        logger.info(f"Found in Open Library: {stats.found_open_library}")
        logger.info(f"Not found: {stats.not_found}")
        logger.info(f"Total in index: {stats.index_size}")
        logger.info(f"Run completed in {duration:.2f}s")
        logger.info(BANNER)
