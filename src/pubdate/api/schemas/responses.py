"""Response schemas for API endpoints."""

from __future__ import annotations

from typing import Any, Literal

from pubdate.core.models import RunStatistics
from pubdate.core.types import SourceName

from .base import APIBaseSchema


class RunStatisticsResponse(APIBaseSchema):
    """Counters of one batch run."""

    processed: int
    found_in_cache: int
    found_google_books: int
    found_open_library: int
    not_found: int
    pending_total: int
    index_size: int

    @classmethod
    def from_stats(cls, stats: RunStatistics) -> "RunStatisticsResponse":
        return cls(**stats.to_dict())


class ProcessResponse(APIBaseSchema):
    """Result of the batch entry point."""

    message: str
    statistics: RunStatisticsResponse


class IsbnDateResponse(APIBaseSchema):
    """Publication date of one ISBN according to Google Books."""

    isbn: str
    published_date: str | None = None
    source: SourceName | None = None
    raw_data: Any = None


class HealthResponse(APIBaseSchema):
    """Health check response."""

    status: Literal["healthy", "degraded", "unhealthy"]
    version: str
