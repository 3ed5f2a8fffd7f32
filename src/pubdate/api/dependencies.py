"""FastAPI dependency injection."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Request

from pubdate.config import PubdateSettings
from pubdate.resolution.registry import SourceRegistry
from pubdate.storage.base import Workbook

WorkbookFactory = Callable[[PubdateSettings, "str | None"], Awaitable[Workbook]]


@lru_cache
def get_settings() -> PubdateSettings:
    """Get cached application settings."""
    return PubdateSettings()


async def get_source_registry(request: Request) -> SourceRegistry:
    """Get source registry from app state."""
    return request.app.state.source_registry


async def get_batch_lock(request: Request) -> asyncio.Lock:
    """Lock held for the whole of a batch run."""
    return request.app.state.batch_lock


async def open_google_sheets_workbook(
    settings: PubdateSettings,
    spreadsheet_id: str | None,
) -> Workbook:
    """Open a spreadsheet through the Sheets API."""
    from pubdate.storage.sheets import GoogleSheetsWorkbook

    workbook = GoogleSheetsWorkbook.from_settings(settings, spreadsheet_id)
    await workbook.load_info()
    return workbook


def get_workbook_factory() -> WorkbookFactory:
    """How the batch endpoint opens its spreadsheet."""
    return open_google_sheets_workbook


# Type aliases for cleaner dependency injection
Settings = Annotated[PubdateSettings, Depends(get_settings)]
Sources = Annotated[SourceRegistry, Depends(get_source_registry)]
BatchLock = Annotated[asyncio.Lock, Depends(get_batch_lock)]
OpenWorkbook = Annotated[WorkbookFactory, Depends(get_workbook_factory)]
