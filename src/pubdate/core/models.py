"""Domain models for resolution records and run bookkeeping."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .types import ResolutionStatus, SourceName


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ResolutionRecord(BaseModel):
    """A resolved publication date for one identifier."""

    model_config = ConfigDict(frozen=True)

    identifier: str = Field(..., min_length=1, description="Normalized ISBN")
    value: str = Field(..., min_length=1, description="Publication date as reported")
    source: SourceName | None = Field(default=None, description="Source that resolved it")
    resolved_at: datetime | None = Field(
        default_factory=utcnow, description="When it was resolved"
    )

    def to_row(self) -> list[str]:
        """Row layout of the index sheet: ISBN, Fecha, Fuente, Fecha_Busqueda."""
        return [
            self.identifier,
            self.value,
            self.source.label if self.source else "",
            self.resolved_at.isoformat() if self.resolved_at else "",
        ]


class SourceLookup(BaseModel):
    """Outcome of one lookup against one external source."""

    status: ResolutionStatus
    source: SourceName
    value: str | None = None
    error_message: str | None = None
    duration_ms: float = 0.0

    @property
    def found(self) -> bool:
        return self.status == ResolutionStatus.SUCCESS and bool(self.value)


class PendingItem(BaseModel):
    """A sheet row that has an ISBN but no publication date yet."""

    model_config = ConfigDict(frozen=True)

    row_position: int = Field(..., ge=1, description="1-based sheet row number")
    identifier: str = Field(..., min_length=1)


@dataclass
class RunStatistics:
    """Counters for one batch run. Owned by a single run() call."""

    processed: int = 0
    found_in_cache: int = 0
    found_google_books: int = 0
    found_open_library: int = 0
    not_found: int = 0

    # Informational, not part of the outcome counters
    pending_total: int = 0
    index_size: int = 0

    def record_outcome(self, source: SourceName | None) -> None:
        """Count one resolution outcome; None means nothing was found."""
        if source is None:
            self.not_found += 1
        elif source == SourceName.CACHE:
            self.found_in_cache += 1
        elif source == SourceName.GOOGLE_BOOKS:
            self.found_google_books += 1
        elif source == SourceName.OPEN_LIBRARY:
            self.found_open_library += 1
        else:
            raise ValueError(f"Unknown source: {source}")

    @property
    def resolved(self) -> int:
        return self.found_in_cache + self.found_google_books + self.found_open_library

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
