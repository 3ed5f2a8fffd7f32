"""Service layer for batch resolution."""

from pubdate.services.batch import BatchResolver, ResolutionOutcome

__all__ = [
    "BatchResolver",
    "ResolutionOutcome",
]
