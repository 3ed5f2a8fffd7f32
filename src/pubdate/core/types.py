"""Core enums and type definitions."""

from enum import StrEnum


class SourceName(StrEnum):
    """Where a publication date came from."""

    CACHE = "cache"
    GOOGLE_BOOKS = "google_books"
    OPEN_LIBRARY = "open_library"

    @property
    def label(self) -> str:
        """Human-readable label, as written to the index sheet."""
        return _SOURCE_LABELS[self]

    @classmethod
    def from_label(cls, label: str | None) -> "SourceName | None":
        """Map an index sheet label (or enum value) back to a source."""
        if not label:
            return None
        text = label.strip()
        for source, source_label in _SOURCE_LABELS.items():
            if text == source_label or text == source.value:
                return source
        return None


_SOURCE_LABELS = {
    SourceName.CACHE: "Indice",
    SourceName.GOOGLE_BOOKS: "Google Books",
    SourceName.OPEN_LIBRARY: "Open Library",
}


class ResolutionStatus(StrEnum):
    """Status of a single source lookup."""

    SUCCESS = "success"
    NOT_FOUND = "not_found"
    ERROR = "error"
