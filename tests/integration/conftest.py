"""Integration test fixtures: the API over in-memory spreadsheets and mocked sources."""

from __future__ import annotations

from typing import AsyncIterator

import pytest
from httpx import ASGITransport, AsyncClient

from pubdate.config import PubdateSettings
from pubdate.storage.memory import InMemoryIndexStore, InMemoryWorkbook, InMemoryWorkSheet

# ============================================================================
# Spreadsheet Fixtures
# ============================================================================


@pytest.fixture
def kobo_sheet() -> InMemoryWorkSheet:
    """Work sheet with four pending rows and one already dated."""
    return InMemoryWorkSheet(
        [
            ["9780000000001", None],
            ["978-0-00-000000-2", ""],
            ["9780000000003", None],
            ["9780000000004", None],
            ["9780134093413", "2008"],
        ]
    )


@pytest.fixture
def index_store() -> InMemoryIndexStore:
    """Index sheet that already knows one of the pending ISBNs."""
    return InMemoryIndexStore(
        [["9780000000004", "1970", "Open Library", "2024-01-15T12:00:00+00:00"]]
    )


@pytest.fixture
def workbook(kobo_sheet: InMemoryWorkSheet, index_store: InMemoryIndexStore) -> InMemoryWorkbook:
    return InMemoryWorkbook({"Kobo": kobo_sheet}, index_store, title="Libros")


@pytest.fixture
def opened_spreadsheets() -> list[str | None]:
    """Spreadsheet ids the batch endpoint asked to open."""
    return []


# ============================================================================
# Application Fixtures
# ============================================================================


@pytest.fixture
async def test_app(
    test_settings: PubdateSettings,
    workbook: InMemoryWorkbook,
    opened_spreadsheets: list[str | None],
):
    """Create test FastAPI application with in-memory storage."""
    from pubdate.api.app import create_app
    from pubdate.api.dependencies import get_settings, get_workbook_factory
    from pubdate.resolution.registry import SourceRegistry

    app = create_app(cors_origins=["http://localhost:3000"])

    async def open_workbook(settings: PubdateSettings, spreadsheet_id: str | None):
        opened_spreadsheets.append(spreadsheet_id)
        return workbook

    app.dependency_overrides[get_settings] = lambda: test_settings
    app.dependency_overrides[get_workbook_factory] = lambda: open_workbook

    # ASGITransport does not run the lifespan
    registry = SourceRegistry.from_settings(test_settings)
    app.state.source_registry = registry

    yield app

    await registry.close_all()


@pytest.fixture
async def test_client(test_app) -> AsyncIterator[AsyncClient]:
    """Create async HTTP test client."""
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
