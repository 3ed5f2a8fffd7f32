"""In-memory workbook, for tests and local dry runs."""

from __future__ import annotations

from pubdate.core.exceptions import ConfigurationError, StorageError
from pubdate.core.models import ResolutionRecord
from pubdate.storage.base import INDEX_HEADERS, IndexRow, SheetRow


class InMemoryWorkSheet:
    """Work sheet backed by a list of [isbn, date] rows (header excluded)."""

    def __init__(self, rows: list[list[str | None]] | None = None) -> None:
        self.rows: list[list[str | None]] = [list(r) + [None] * (2 - len(r)) for r in rows or []]
        self.writes: list[tuple[int, str]] = []

    async def list_rows(self) -> list[SheetRow]:
        return [
            SheetRow(row_position=i + 2, identifier_cell=row[0], value_cell=row[1])
            for i, row in enumerate(self.rows)
        ]

    async def set_value(self, row_position: int, value: str) -> None:
        index = row_position - 2
        if not 0 <= index < len(self.rows):
            raise StorageError(f"Row {row_position} out of range")
        self.rows[index][1] = value
        self.writes.append((row_position, value))

    def value_at(self, row_position: int) -> str | None:
        return self.rows[row_position - 2][1]


class InMemoryIndexStore:
    """Index sheet backed by a list of rows laid out like INDEX_HEADERS."""

    headers = INDEX_HEADERS

    def __init__(self, rows: list[list[str]] | None = None) -> None:
        self.rows: list[list[str]] = [list(r) for r in rows or []]
        self.fail_reads = False
        self.fail_writes = False

    async def append_record(self, record: ResolutionRecord) -> None:
        if self.fail_writes:
            raise StorageError("Index sheet is not writable")
        self.rows.append(record.to_row())

    async def list_records(self) -> list[IndexRow]:
        if self.fail_reads:
            raise StorageError("Index sheet is not readable")
        records = []
        for row in self.rows:
            padded = list(row) + [None] * (4 - len(row))
            records.append(
                IndexRow(
                    identifier=padded[0],
                    value=padded[1],
                    source=padded[2],
                    resolved_at=padded[3],
                )
            )
        return records


class InMemoryWorkbook:
    """Workbook made of in-memory sheets."""

    def __init__(
        self,
        sheets: dict[str, InMemoryWorkSheet] | None = None,
        index: InMemoryIndexStore | None = None,
        title: str = "in-memory",
    ) -> None:
        self._title = title
        self.sheets = dict(sheets or {})
        self.index = index
        self.index_title: str | None = None

    @property
    def title(self) -> str:
        return self._title

    async def worksheet(self, title: str) -> InMemoryWorkSheet:
        try:
            return self.sheets[title]
        except KeyError:
            raise ConfigurationError(f'Sheet "{title}" not found', {"sheet": title}) from None

    async def index_store(self, title: str) -> InMemoryIndexStore:
        if self.index is None:
            self.index = InMemoryIndexStore()
        self.index_title = title
        return self.index
