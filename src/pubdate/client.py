"""Main library client for standalone usage."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pubdate.cache.index import ResolutionIndex
from pubdate.config import PubdateSettings
from pubdate.core.models import RunStatistics
from pubdate.resolution.registry import SourceRegistry
from pubdate.services.batch import BatchResolver

if TYPE_CHECKING:
    from pubdate.storage.base import Workbook

logger = logging.getLogger(__name__)


class PubdateClient:
    """
    Main client for the pubdate library.

    Opens the spreadsheet, hydrates the resolution index and fills in the
    publication dates of pending rows, without requiring the web server.

    Usage:
        async with PubdateClient() as client:
            stats = await client.process_pending(max_count=20)

    Settings are loaded from environment variables or can be passed explicitly.
    """

    def __init__(
        self,
        settings: PubdateSettings | None = None,
        *,
        spreadsheet_id: str | None = None,
        workbook: "Workbook | None" = None,
        registry: SourceRegistry | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            settings: Application settings. If not provided, loaded from environment.
            spreadsheet_id: Spreadsheet to open instead of the configured default.
            workbook: Already-open workbook; skips Google Sheets entirely.
            registry: Source registry to reuse; it is then not closed by this client.
        """
        self._settings = settings or PubdateSettings()
        self._spreadsheet_id = spreadsheet_id
        self._workbook = workbook
        self._registry = registry
        self._owns_registry = registry is None
        self._index: ResolutionIndex | None = None

    async def __aenter__(self) -> PubdateClient:
        """Initialize resources on context entry."""
        await self._initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Clean up resources on context exit."""
        await self.close()

    async def _initialize(self) -> None:
        """Open the workbook and load the index."""
        if self._workbook is None:
            from pubdate.storage.sheets import GoogleSheetsWorkbook

            workbook = GoogleSheetsWorkbook.from_settings(self._settings, self._spreadsheet_id)
            await workbook.load_info()
            self._workbook = workbook

        if self._registry is None:
            self._registry = SourceRegistry.from_settings(self._settings)

        store = await self._workbook.index_store(self._settings.index_sheet_name)
        self._index = ResolutionIndex(store)
        await self._index.load()

    async def close(self) -> None:
        """Close all resources."""
        if self._registry and self._owns_registry:
            await self._registry.close_all()
            self._registry = None

    @property
    def index(self) -> ResolutionIndex:
        return self._ensure_initialized()[2]

    def _ensure_initialized(self) -> tuple["Workbook", SourceRegistry, ResolutionIndex]:
        """The open workbook, registry and index; raises if not initialized."""
        if self._index is None or self._workbook is None or self._registry is None:
            raise RuntimeError(
                "Client not initialized. Use 'async with PubdateClient() as client:'"
            )
        return self._workbook, self._registry, self._index

    async def process_pending(
        self,
        max_count: int | None = None,
        *,
        sheet_name: str | None = None,
    ) -> RunStatistics:
        """
        Resolve the pending rows of a sheet.

        Args:
            max_count: Only process the first max_count pending rows
            sheet_name: Sheet with the ISBN rows (defaults to settings)

        Returns:
            Statistics for the run
        """
        workbook, registry, index = self._ensure_initialized()

        sheet_name = sheet_name or self._settings.default_sheet_name
        logger.info(f"Starting run for sheet: {workbook.title} / {sheet_name}")
        worksheet = await workbook.worksheet(sheet_name)

        resolver = BatchResolver(
            worksheet=worksheet,
            index=index,
            chain=registry.get_chain(),
            rate_limiter=registry.rate_limiter,
        )
        return await resolver.run(max_count)


async def process_spreadsheet(
    spreadsheet_id: str | None = None,
    sheet_name: str | None = None,
    max_count: int | None = None,
    *,
    settings: PubdateSettings | None = None,
) -> RunStatistics:
    """
    Resolve the pending rows of a spreadsheet (convenience function).
    """
    async with PubdateClient(settings, spreadsheet_id=spreadsheet_id) as client:
        return await client.process_pending(max_count, sheet_name=sheet_name)
