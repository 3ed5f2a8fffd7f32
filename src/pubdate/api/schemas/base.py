"""Shared schema base and the error envelope."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict

from pubdate.core.exceptions import PubdateError


def to_camel_case(string: str) -> str:
    """found_in_cache -> foundInCache."""
    head, *rest = string.split("_")
    return head + "".join(part.capitalize() for part in rest)


class APIBaseSchema(BaseModel):
    """
    Base schema for all API models.

    Fields are snake_case in Python and camelCase on the wire; both spellings
    are accepted on input.
    """

    model_config = ConfigDict(
        alias_generator=to_camel_case,
        populate_by_name=True,
        from_attributes=True,
    )


class ErrorDetail(APIBaseSchema):
    """One error: a stable code, a readable message and optional context."""

    code: str
    message: str
    field: str | None = None
    details: dict[str, Any] | None = None

    @classmethod
    def from_error(cls, code: str, exc: PubdateError) -> "ErrorDetail":
        """Build from a PubdateError, lifting a "field" detail to the top level."""
        details = dict(exc.details)
        field = details.pop("field", None)
        return cls(code=code, message=exc.message, field=field, details=details or None)


class APIError(APIBaseSchema):
    """Body of every non-2xx response produced by this API."""

    error: ErrorDetail
