"""Tests for the resolution index."""

from __future__ import annotations

import logging

from pubdate.cache.index import ResolutionIndex
from pubdate.core.types import SourceName
from pubdate.storage.memory import InMemoryIndexStore


class TestResolutionIndexLoad:
    """Tests for hydrating the index."""

    async def test_load_rows(self):
        store = InMemoryIndexStore(
            [
                ["9780134093413", "2008", "Open Library", "2024-01-15T12:00:00+00:00"],
                ["9780132350884", "2008-08-01", "Google Books", "2024-01-16T08:30:00Z"],
            ]
        )
        index = ResolutionIndex(store)

        loaded = await index.load()

        assert loaded == 2
        assert len(index) == 2
        assert index.lookup("9780134093413") == "2008"
        assert "9780132350884" in index

        record = index.get_record("9780132350884")
        assert record.source == SourceName.GOOGLE_BOOKS
        assert record.resolved_at.year == 2024

    async def test_identifiers_normalized(self):
        store = InMemoryIndexStore([["978-0-13-409341-3", "2008"]])
        index = ResolutionIndex(store)

        await index.load()

        assert index.lookup("9780134093413") == "2008"

    async def test_first_occurrence_wins(self):
        store = InMemoryIndexStore(
            [
                ["9780134093413", "2008", "Google Books"],
                ["9780134093413", "2009", "Open Library"],
            ]
        )
        index = ResolutionIndex(store)

        await index.load()

        assert len(index) == 1
        assert index.lookup("9780134093413") == "2008"

    async def test_incomplete_rows_skipped(self):
        store = InMemoryIndexStore(
            [
                ["9780134093413"],
                ["", "2001"],
                ["9780132350884", "   "],
                ["9781111111111", "1999", "", ""],
            ]
        )
        index = ResolutionIndex(store)

        assert await index.load() == 1
        record = index.get_record("9781111111111")
        assert record.source is None
        assert record.resolved_at is None

    async def test_unknown_source_label_and_bad_timestamp(self):
        store = InMemoryIndexStore([["9781111111111", "1999", "Biblioteca", "yesterday"]])
        index = ResolutionIndex(store)

        await index.load()

        record = index.get_record("9781111111111")
        assert record.value == "1999"
        assert record.source is None
        assert record.resolved_at is None

    async def test_read_failure_gives_empty_index(self, caplog):
        store = InMemoryIndexStore([["9780134093413", "2008"]])
        store.fail_reads = True
        index = ResolutionIndex(store)

        with caplog.at_level(logging.WARNING, logger="pubdate.cache.index"):
            loaded = await index.load()

        assert loaded == 0
        assert len(index) == 0
        assert "Failed to load index" in caplog.text

    async def test_load_replaces_previous_contents(self):
        store = InMemoryIndexStore([["9780134093413", "2008"]])
        index = ResolutionIndex(store)
        await index.load()
        store.rows = [["9780132350884", "2008-08-01"]]

        await index.load()

        assert index.lookup("9780134093413") is None
        assert index.lookup("9780132350884") == "2008-08-01"

    async def test_lookup_miss(self):
        index = ResolutionIndex(InMemoryIndexStore())
        await index.load()
        assert index.lookup("9780134093413") is None
        assert index.get_record("9780134093413") is None


class TestResolutionIndexRecord:
    """Tests for recording new resolutions."""

    async def test_record_appends_row(self):
        store = InMemoryIndexStore()
        index = ResolutionIndex(store)

        record = await index.record("9780134093413", "2008", SourceName.OPEN_LIBRARY)

        assert index.lookup("9780134093413") == "2008"
        assert len(store.rows) == 1
        row = store.rows[0]
        assert row[:3] == ["9780134093413", "2008", "Open Library"]
        assert row[3] == record.resolved_at.isoformat()

    async def test_record_survives_write_failure(self, caplog):
        """A failed append still leaves the identifier resolved in memory."""
        store = InMemoryIndexStore()
        store.fail_writes = True
        index = ResolutionIndex(store)

        with caplog.at_level(logging.ERROR, logger="pubdate.cache.index"):
            await index.record("9780134093413", "2008", SourceName.GOOGLE_BOOKS)

        assert index.lookup("9780134093413") == "2008"
        assert store.rows == []
        assert "Failed to save 9780134093413" in caplog.text

    async def test_recorded_entry_visible_after_reload(self):
        store = InMemoryIndexStore()
        index = ResolutionIndex(store)
        await index.record("9780134093413", "2008", SourceName.OPEN_LIBRARY)

        fresh = ResolutionIndex(store)
        await fresh.load()

        assert fresh.lookup("9780134093413") == "2008"
        assert fresh.get_record("9780134093413").source == SourceName.OPEN_LIBRARY
