"""Spreadsheet storage: the work sheet and the index sheet."""

from .base import INDEX_HEADERS, IndexRow, IndexStore, SheetRow, Workbook, WorkSheet
from .memory import InMemoryIndexStore, InMemoryWorkbook, InMemoryWorkSheet

__all__ = [
    "INDEX_HEADERS",
    "IndexRow",
    "IndexStore",
    "SheetRow",
    "Workbook",
    "WorkSheet",
    "InMemoryIndexStore",
    "InMemoryWorkbook",
    "InMemoryWorkSheet",
]
