"""Open Library adapter (secondary publication date source)."""

from __future__ import annotations

from typing import Any, ClassVar

from pubdate.core.types import SourceName
from pubdate.resolution.base import AbstractSourceAdapter


def bibkey(identifier: str) -> str:
    """Compound lookup key Open Library uses for ISBNs."""
    return f"ISBN:{identifier}"


class OpenLibraryAdapter(AbstractSourceAdapter):
    """
    Open Library Books API (free, no API key required).

    API Documentation: https://openlibrary.org/dev/docs/api/books
    """

    SOURCE_NAME: ClassVar[SourceName] = SourceName.OPEN_LIBRARY
    BASE_URL: ClassVar[str] = "https://openlibrary.org"

    async def fetch_isbn(self, identifier: str) -> tuple[int, Any]:
        """GET /api/books?bibkeys=ISBN:<identifier>&format=json&jscmd=data."""
        return await self._get_json(
            "/api/books",
            params={
                "bibkeys": bibkey(identifier),
                "format": "json",
                "jscmd": "data",
            },
        )

    def extract_published_date(self, identifier: str, data: Any) -> str | None:
        if not isinstance(data, dict):
            return None

        book = data.get(bibkey(identifier))
        if not isinstance(book, dict):
            return None

        publish_date = book.get("publish_date")
        if not publish_date:
            return None
        return str(publish_date).strip() or None
