"""Request schemas for API endpoints."""

from __future__ import annotations

from typing import Any

from pydantic import Field

from .base import APIBaseSchema

# Query parameters the volumes proxy interprets itself
RECOGNIZED_VOLUME_PARAMS = frozenset({"q", "maxResults"})


class VolumeSearchParams(APIBaseSchema):
    """
    Parameters forwarded to the Google Books volumes search.

    `q` and `max_results` are recognized; every other query parameter goes
    into `passthrough`. Recognized fields always win: a passthrough key
    named like one of them is dropped.
    """

    q: str = Field(..., min_length=1, description="Google Books query string")
    max_results: int = Field(default=10, ge=0, le=40, description="Page size")
    passthrough: dict[str, str] = Field(default_factory=dict)

    @classmethod
    def from_query(cls, query: dict[str, str]) -> "VolumeSearchParams":
        passthrough = {k: v for k, v in query.items() if k not in RECOGNIZED_VOLUME_PARAMS}
        data: dict[str, Any] = {"q": query.get("q") or "", "passthrough": passthrough}
        if query.get("maxResults"):
            data["max_results"] = query["maxResults"]
        return cls(**data)

    def to_query(self) -> dict[str, Any]:
        params: dict[str, Any] = {
            k: v for k, v in self.passthrough.items() if k not in RECOGNIZED_VOLUME_PARAMS
        }
        params["q"] = self.q
        params["maxResults"] = self.max_results
        return params


class IsbnLookupRequest(APIBaseSchema):
    """Request body for a single ISBN date lookup."""

    isbn: str = Field(..., min_length=1, description="ISBN, separators allowed")
