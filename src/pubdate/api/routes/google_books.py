"""Google Books proxy endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError

from pubdate.api.dependencies import Sources
from pubdate.api.errors import unexpected_error_response
from pubdate.api.schemas import IsbnDateResponse, IsbnLookupRequest, VolumeSearchParams
from pubdate.core.exceptions import PubdateError, ValidationError
from pubdate.core.identifiers import normalize_identifier
from pubdate.core.types import SourceName
from pubdate.resolution.registry import SourceRegistry

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/google-books", tags=["google-books"])


@router.get(
    "/volumes",
    operation_id="searchVolumes",
    summary="Search Google Books",
    description=(
        'Forward a volumes search to Google Books. "q" is required, "maxResults" '
        "defaults to 10 and any other query parameter is passed through."
    ),
)
async def search_volumes(request: Request, sources: Sources) -> JSONResponse:
    """Proxy a volumes search and return the upstream JSON unchanged."""
    query = dict(request.query_params)
    if not query.get("q"):
        raise ValidationError('The "q" parameter is required', {"field": "q"})

    try:
        params = VolumeSearchParams.from_query(query)
    except PydanticValidationError as e:
        raise ValidationError("Invalid search parameters", {"errors": e.errors(include_url=False)}) from e

    try:
        status_code, data = await sources.google_books.search_volumes(params.to_query())
    except PubdateError:
        raise
    except Exception as e:
        logger.error(f"Google Books search failed: {e}")
        return unexpected_error_response("Error talking to the Google Books API", e)

    return JSONResponse(status_code=status_code, content=data)


async def _lookup_isbn(raw_isbn: str | None, sources: SourceRegistry) -> IsbnDateResponse:
    if not raw_isbn:
        raise ValidationError('The "isbn" parameter is required', {"field": "isbn"})
    isbn = normalize_identifier(raw_isbn)

    adapter = sources.google_books
    # Upstream body is echoed as rawData whatever the status
    status_code, data = await adapter.search_volumes({"q": f"isbn:{isbn}"})
    published_date = None
    if 200 <= status_code < 300:
        published_date = adapter.extract_published_date(isbn, data)
    else:
        logger.info(f"Google Books answered HTTP {status_code} for ISBN {isbn}")

    return IsbnDateResponse(
        isbn=isbn,
        published_date=published_date,
        source=SourceName.GOOGLE_BOOKS if published_date else None,
        raw_data=data,
    )


@router.get(
    "/isbn",
    response_model=IsbnDateResponse,
    operation_id="lookupIsbnDate",
    summary="Publication date of an ISBN",
    description="Look up one ISBN on Google Books and return its publication date.",
)
async def lookup_isbn(sources: Sources, isbn: str | None = None) -> IsbnDateResponse:
    return await _lookup_isbn(isbn, sources)


@router.post(
    "/isbn",
    response_model=IsbnDateResponse,
    operation_id="lookupIsbnDateFromBody",
    summary="Publication date of an ISBN (JSON body)",
    description='Same as GET, with the ISBN in the query string or a JSON body {"isbn": ...}.',
)
async def lookup_isbn_from_body(
    sources: Sources,
    isbn: str | None = None,
    body: IsbnLookupRequest | None = None,
) -> IsbnDateResponse:
    return await _lookup_isbn(isbn or (body.isbn if body else None), sources)
