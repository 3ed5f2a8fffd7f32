"""Batch entry point: fill in publication dates of pending rows."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse

from pubdate.api.dependencies import BatchLock, OpenWorkbook, Settings, Sources
from pubdate.api.errors import unexpected_error_response
from pubdate.api.schemas import ProcessResponse, RunStatisticsResponse
from pubdate.client import PubdateClient
from pubdate.core.exceptions import PubdateError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/books", tags=["books"])


@router.get(
    "/process",
    response_model=ProcessResponse,
    operation_id="processPendingBooks",
    summary="Resolve pending publication dates",
    description=(
        "Resolve the publication date of every pending row (ISBN present, date empty) "
        "of a sheet, using the index sheet first and then Google Books and Open Library."
    ),
)
async def process_books(
    settings: Settings,
    sources: Sources,
    batch_lock: BatchLock,
    open_workbook: OpenWorkbook,
    spreadsheet_id: str | None = Query(default=None, description="Spreadsheet to process"),
    sheet_name: str | None = Query(default=None, description="Sheet with the ISBN rows"),
    max_isbn: int | None = Query(default=None, ge=1, description="Process at most this many rows"),
) -> ProcessResponse | JSONResponse:
    """Run one batch over the pending rows."""
    sheet_name = sheet_name or settings.default_sheet_name
    target = spreadsheet_id or settings.default_spreadsheet_id
    logger.info(f"Starting process for sheet: {target} / {sheet_name}")

    if batch_lock.locked():
        logger.info("Another batch run is in progress, waiting for it to finish")

    try:
        async with batch_lock:
            workbook = await open_workbook(settings, spreadsheet_id)
            async with PubdateClient(settings, workbook=workbook, registry=sources) as client:
                stats = await client.process_pending(max_isbn, sheet_name=sheet_name)
    except PubdateError:
        raise
    except Exception as e:
        logger.exception(f"Batch run failed: {e}")
        return unexpected_error_response("Error processing the request", e)

    return ProcessResponse(
        message="Process completed successfully",
        statistics=RunStatisticsResponse.from_stats(stats),
    )
