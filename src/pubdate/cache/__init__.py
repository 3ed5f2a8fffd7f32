"""Resolution index (cache of already-resolved ISBNs)."""

from .index import ResolutionIndex

__all__ = [
    "ResolutionIndex",
]
