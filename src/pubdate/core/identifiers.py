"""ISBN identifier normalization."""

from __future__ import annotations

import re

from .exceptions import ValidationError

_SEPARATORS = re.compile(r"[-\s]")


def normalize_identifier(raw: str | None) -> str:
    """
    Normalize a raw ISBN cell into the key used for lookups and the index.

    Hyphens and whitespace are removed. No checksum validation is done, sheets
    routinely carry placeholder ISBNs that the sources still know about.

    Raises:
        ValidationError: if nothing is left after normalization
    """
    value = _SEPARATORS.sub("", raw or "").strip()
    if not value:
        raise ValidationError(f"Empty identifier: {raw!r}", {"raw": raw})
    return value


def try_normalize_identifier(raw: str | None) -> str | None:
    """Like normalize_identifier, returning None instead of raising."""
    try:
        return normalize_identifier(raw)
    except ValidationError:
        return None
