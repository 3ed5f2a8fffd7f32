"""Core types, models, and utilities."""

from .exceptions import (
    ConfigurationError,
    LookupUnavailableError,
    PubdateError,
    ResolutionError,
    StorageError,
    ValidationError,
)
from .identifiers import normalize_identifier, try_normalize_identifier
from .models import (
    PendingItem,
    ResolutionRecord,
    RunStatistics,
    SourceLookup,
)
from .types import ResolutionStatus, SourceName

__all__ = [
    # Types
    "ResolutionStatus",
    "SourceName",
    # Identifiers
    "normalize_identifier",
    "try_normalize_identifier",
    # Models
    "PendingItem",
    "ResolutionRecord",
    "RunStatistics",
    "SourceLookup",
    # Exceptions
    "ConfigurationError",
    "LookupUnavailableError",
    "PubdateError",
    "ResolutionError",
    "StorageError",
    "ValidationError",
]
