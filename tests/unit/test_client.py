"""Tests for the standalone library client."""

from __future__ import annotations

import pytest

from pubdate.client import PubdateClient
from pubdate.config import PubdateSettings
from pubdate.core.exceptions import ConfigurationError
from pubdate.core.types import SourceName
from pubdate.resolution.registry import SourceRegistry
from pubdate.storage.memory import InMemoryIndexStore, InMemoryWorkbook, InMemoryWorkSheet


@pytest.fixture
def registry(make_adapter, rate_limiter) -> SourceRegistry:
    registry = SourceRegistry(rate_limiter)
    registry.register(make_adapter(SourceName.GOOGLE_BOOKS, {"9780000000001": "2001-05"}))
    registry.register(make_adapter(SourceName.OPEN_LIBRARY, {"9780000000002": "1999"}))
    return registry


class TestPubdateClient:
    """Tests for PubdateClient."""

    async def test_process_pending(self, test_settings: PubdateSettings, registry: SourceRegistry):
        sheet = InMemoryWorkSheet([["9780000000001"], ["9780000000002"], ["9780000000009"]])
        workbook = InMemoryWorkbook({"Kobo": sheet})

        async with PubdateClient(test_settings, workbook=workbook, registry=registry) as client:
            stats = await client.process_pending()

        assert stats.found_google_books == 1
        assert stats.found_open_library == 1
        assert stats.not_found == 1
        assert sheet.value_at(2) == "2001-05"
        assert sheet.value_at(3) == "1999"
        assert workbook.index_title == "indice"
        assert len(workbook.index.rows) == 2

    async def test_index_loaded_on_entry(self, test_settings: PubdateSettings, registry: SourceRegistry):
        workbook = InMemoryWorkbook(
            {"Kobo": InMemoryWorkSheet()},
            InMemoryIndexStore([["9780134093413", "2008", "Open Library"]]),
        )

        async with PubdateClient(test_settings, workbook=workbook, registry=registry) as client:
            assert client.index.lookup("9780134093413") == "2008"

    async def test_sheet_name_override(self, test_settings: PubdateSettings, registry: SourceRegistry):
        other = InMemoryWorkSheet([["9780000000001"]])
        workbook = InMemoryWorkbook({"Kobo": InMemoryWorkSheet(), "Audible": other})

        async with PubdateClient(test_settings, workbook=workbook, registry=registry) as client:
            stats = await client.process_pending(sheet_name="Audible")

        assert stats.processed == 1
        assert other.value_at(2) == "2001-05"

    async def test_missing_sheet(self, test_settings: PubdateSettings, registry: SourceRegistry):
        workbook = InMemoryWorkbook({})

        async with PubdateClient(test_settings, workbook=workbook, registry=registry) as client:
            with pytest.raises(ConfigurationError):
                await client.process_pending()

    async def test_max_count(self, test_settings: PubdateSettings, registry: SourceRegistry):
        sheet = InMemoryWorkSheet([["9780000000001"], ["9780000000002"]])
        workbook = InMemoryWorkbook({"Kobo": sheet})

        async with PubdateClient(test_settings, workbook=workbook, registry=registry) as client:
            stats = await client.process_pending(max_count=1)

        assert stats.processed == 1
        assert sheet.value_at(3) is None

    async def test_requires_context_manager(self, test_settings: PubdateSettings):
        client = PubdateClient(test_settings, workbook=InMemoryWorkbook())
        with pytest.raises(RuntimeError):
            await client.process_pending()

    def test_index_requires_context_manager(self, test_settings: PubdateSettings):
        client = PubdateClient(test_settings, workbook=InMemoryWorkbook())
        with pytest.raises(RuntimeError, match="not initialized"):
            client.index

    async def test_without_spreadsheet_id(self, test_settings: PubdateSettings):
        """Opening Google Sheets needs a spreadsheet id."""
        with pytest.raises(ConfigurationError):
            async with PubdateClient(test_settings):
                pass
