"""Storage contracts for the work sheet and the resolution index."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field

from pubdate.core.models import ResolutionRecord

INDEX_HEADERS = ["ISBN", "Fecha", "Fuente", "Fecha_Busqueda"]


class SheetRow(BaseModel):
    """One data row of the work sheet."""

    model_config = ConfigDict(frozen=True)

    row_position: int = Field(..., ge=1, description="1-based sheet row number")
    identifier_cell: str | None = None
    value_cell: str | None = None


class IndexRow(BaseModel):
    """One row of the index sheet, as stored. Any field may be missing."""

    model_config = ConfigDict(frozen=True)

    identifier: str | None = None
    value: str | None = None
    source: str | None = None
    resolved_at: str | None = None


@runtime_checkable
class WorkSheet(Protocol):
    """Rows of ISBNs to resolve, and the cells their dates go into."""

    async def list_rows(self) -> list[SheetRow]: ...

    async def set_value(self, row_position: int, value: str) -> None: ...


@runtime_checkable
class IndexStore(Protocol):
    """Durable record of already-resolved identifiers."""

    async def append_record(self, record: ResolutionRecord) -> None: ...

    async def list_records(self) -> list[IndexRow]: ...


@runtime_checkable
class Workbook(Protocol):
    """A spreadsheet holding a work sheet and an index sheet."""

    @property
    def title(self) -> str: ...

    async def worksheet(self, title: str) -> WorkSheet: ...

    async def index_store(self, title: str) -> IndexStore: ...
