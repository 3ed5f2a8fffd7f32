"""API request and response schemas."""

from .base import APIBaseSchema, APIError, ErrorDetail, to_camel_case
from .requests import IsbnLookupRequest, VolumeSearchParams
from .responses import (
    HealthResponse,
    IsbnDateResponse,
    ProcessResponse,
    RunStatisticsResponse,
)

__all__ = [
    # Base
    "APIBaseSchema",
    "APIError",
    "ErrorDetail",
    "to_camel_case",
    # Requests
    "IsbnLookupRequest",
    "VolumeSearchParams",
    # Responses
    "HealthResponse",
    "IsbnDateResponse",
    "ProcessResponse",
    "RunStatisticsResponse",
]
