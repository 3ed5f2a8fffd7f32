"""In-memory resolution index, hydrated from and written back to the index sheet."""

from __future__ import annotations

import logging
from datetime import datetime

from pubdate.core.identifiers import try_normalize_identifier
from pubdate.core.models import ResolutionRecord, utcnow
from pubdate.core.types import SourceName
from pubdate.storage.base import IndexRow, IndexStore

logger = logging.getLogger(__name__)


def _parse_timestamp(value: str | None) -> datetime | None:
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None


class ResolutionIndex:
    """
    Identifier -> resolved publication date, with provenance.

    Hydrated once by load(), grown by record(), never evicted. Lookups return
    only the value; get_record() exposes the source and timestamp kept from
    the index sheet.
    """

    def __init__(self, store: IndexStore) -> None:
        self._store = store
        self._records: dict[str, ResolutionRecord] = {}

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._records

    async def load(self) -> int:
        """
        Hydrate from the store; returns the number of identifiers loaded.

        A read failure leaves the index empty and is only logged, the run can
        still resolve everything from the network.
        """
        self._records = {}
        try:
            rows = await self._store.list_records()
        except Exception as e:
            logger.warning(f"Failed to load index, continuing with an empty one: {e}")
            return 0

        for row in rows:
            record = self._record_from_row(row)
            # First occurrence wins
            if record is not None and record.identifier not in self._records:
                self._records[record.identifier] = record

        logger.info(f"Index loaded: {len(self._records)} ISBNs stored")
        return len(self._records)

    @staticmethod
    def _record_from_row(row: IndexRow) -> ResolutionRecord | None:
        identifier = try_normalize_identifier(row.identifier)
        value = (row.value or "").strip()
        if identifier is None or not value:
            return None
        return ResolutionRecord(
            identifier=identifier,
            value=value,
            source=SourceName.from_label(row.source),
            resolved_at=_parse_timestamp(row.resolved_at),
        )

    def lookup(self, identifier: str) -> str | None:
        record = self._records.get(identifier)
        return record.value if record else None

    def get_record(self, identifier: str) -> ResolutionRecord | None:
        return self._records.get(identifier)

    async def record(
        self,
        identifier: str,
        value: str,
        source: SourceName,
    ) -> ResolutionRecord:
        """
        Persist a new resolution and add it to memory.

        The in-memory entry is added even when the durable append fails, so
        the rest of the run still sees the identifier as resolved.
        """
        record = ResolutionRecord(
            identifier=identifier,
            value=value,
            source=source,
            resolved_at=utcnow(),
        )

        try:
            await self._store.append_record(record)
            logger.info(f"Saved to index (source: {source.label})")
        except Exception as e:
            logger.error(f"Failed to save {identifier} to index: {e}")

        self._records[identifier] = record
        return record
