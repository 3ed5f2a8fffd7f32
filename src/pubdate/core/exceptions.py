"""Custom exception hierarchy for pubdate."""

from typing import Any


class PubdateError(Exception):
    """Base exception for all pubdate errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(PubdateError):
    """Input validation failed."""

    pass


class ConfigurationError(PubdateError):
    """Required configuration for the storage target is missing or wrong."""

    pass


class StorageError(PubdateError):
    """Spreadsheet read or write failed."""

    pass


class ResolutionError(PubdateError):
    """Failed to resolve identifier."""

    pass


class LookupUnavailableError(ResolutionError):
    """External lookup source could not be reached or returned garbage."""

    def __init__(
        self,
        message: str,
        source: str,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.source = source
        self.status_code = status_code
