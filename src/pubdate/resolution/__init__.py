"""Resolution layer for fetching publication dates from external sources."""

from pubdate.resolution.base import (
    AbstractSourceAdapter,
    AdapterConfig,
    RateLimitConfig,
    RateLimiter,
)
from pubdate.resolution.chain import ChainResult, SourceChain
from pubdate.resolution.registry import DEFAULT_SOURCE_ORDER, SourceRegistry

__all__ = [
    # Base
    "AbstractSourceAdapter",
    "AdapterConfig",
    "RateLimitConfig",
    "RateLimiter",
    # Chain
    "ChainResult",
    "SourceChain",
    # Registry
    "DEFAULT_SOURCE_ORDER",
    "SourceRegistry",
]
