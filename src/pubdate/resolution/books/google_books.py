"""Google Books adapter (primary publication date source)."""

from __future__ import annotations

from typing import Any, ClassVar

from pubdate.core.types import SourceName
from pubdate.resolution.base import AbstractSourceAdapter


class GoogleBooksAdapter(AbstractSourceAdapter):
    """
    Google Books volumes API.

    API Documentation: https://developers.google.com/books/docs/v1/using

    Works without API key but rate limits apply.
    """

    SOURCE_NAME: ClassVar[SourceName] = SourceName.GOOGLE_BOOKS
    BASE_URL: ClassVar[str] = "https://www.googleapis.com/books/v1"

    async def fetch_isbn(self, identifier: str) -> tuple[int, Any]:
        """GET /volumes?q=isbn:<identifier>."""
        params: dict[str, Any] = {"q": f"isbn:{identifier}"}
        if self.config.api_key:
            params["key"] = self.config.api_key
        return await self._get_json("/volumes", params=params)

    async def search_volumes(self, params: dict[str, Any]) -> tuple[int, Any]:
        """Free-form volumes search, used by the search proxy."""
        params = dict(params)
        if self.config.api_key and "key" not in params:
            params["key"] = self.config.api_key
        response = await self._get("/volumes", params=params)
        try:
            return response.status_code, response.json()
        except ValueError:
            return response.status_code, {"error": response.text}

    def extract_published_date(self, identifier: str, data: Any) -> str | None:
        if not isinstance(data, dict):
            return None

        total_items = data.get("totalItems") or 0
        items = data.get("items") or []
        if total_items <= 0 or not items:
            return None

        volume_info = items[0].get("volumeInfo") or {}
        published_date = volume_info.get("publishedDate")
        if not published_date:
            return None
        return str(published_date).strip() or None
