"""Error responses and exception handlers."""

from __future__ import annotations

import logging
import traceback
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from pubdate.api.schemas import APIError, ErrorDetail
from pubdate.core.exceptions import (
    ConfigurationError,
    LookupUnavailableError,
    PubdateError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def render_error(status_code: int, detail: ErrorDetail) -> JSONResponse:
    """Render a single structured error object."""
    return JSONResponse(
        status_code=status_code,
        content=APIError(error=detail).model_dump(by_alias=True, exclude_none=True),
    )


def error_response(
    status_code: int,
    code: str,
    message: str,
    details: dict[str, Any] | None = None,
) -> JSONResponse:
    return render_error(
        status_code,
        ErrorDetail(code=code, message=message, details=details or None),
    )


def unexpected_error_response(message: str, exc: Exception) -> JSONResponse:
    """500 response carrying the exception message and traceback."""
    return error_response(
        500,
        "internal_error",
        message,
        {
            "reason": str(exc),
            "type": type(exc).__name__,
            "traceback": traceback.format_exception(exc),
        },
    )


async def _handle_pubdate_error(request: Request, exc: PubdateError) -> JSONResponse:
    if isinstance(exc, ValidationError):
        return render_error(400, ErrorDetail.from_error("validation_error", exc))
    if isinstance(exc, ConfigurationError):
        return render_error(400, ErrorDetail.from_error("configuration_error", exc))
    if isinstance(exc, LookupUnavailableError):
        return error_response(502, "source_unavailable", exc.message, {"source": exc.source})

    logger.error(f"Request failed: {exc.message}")
    return render_error(500, ErrorDetail.from_error(type(exc).__name__, exc))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(PubdateError, _handle_pubdate_error)
