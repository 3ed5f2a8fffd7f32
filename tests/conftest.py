"""Shared test fixtures for all tests."""

from __future__ import annotations

import random

import pytest

from pubdate.config import PubdateSettings
from pubdate.resolution.base import RateLimitConfig, RateLimiter

# ============================================================================
# Settings Fixtures
# ============================================================================


@pytest.fixture
def test_settings() -> PubdateSettings:
    """Settings with no pauses and no .env file."""
    return PubdateSettings(
        _env_file=None,
        default_spreadsheet_id=None,
        default_sheet_name="Kobo",
        index_sheet_name="indice",
        request_delay_min_ms=0,
        request_delay_max_ms=0,
        cooldown_min_ms=0,
        cooldown_max_ms=0,
        cooldown_every=5,
    )


# ============================================================================
# Pacing Fixtures
# ============================================================================


@pytest.fixture
def sleeps() -> list[float]:
    """Durations passed to the fake sleep, in seconds."""
    return []


@pytest.fixture
def rate_limiter(sleeps: list[float]) -> RateLimiter:
    """
    Rate limiter that records instead of sleeping.

    Request pauses are 1 ms and cooldowns 1 s, so the two are easy to tell apart.
    """

    async def fake_sleep(seconds: float) -> None:
        sleeps.append(seconds)

    return RateLimiter(
        RateLimitConfig(
            request_delay_ms=(1, 1),
            cooldown_delay_ms=(1000, 1000),
            cooldown_every=5,
        ),
        rng=random.Random(1234),
        sleep=fake_sleep,
    )


# ============================================================================
# Sample Payloads
# ============================================================================


@pytest.fixture
def google_books_payload() -> dict:
    """Google Books volumes response for a found ISBN."""
    return {
        "kind": "books#volumes",
        "totalItems": 1,
        "items": [
            {
                "kind": "books#volume",
                "id": "hjEFCAAAQBAJ",
                "volumeInfo": {
                    "title": "Clean Code",
                    "authors": ["Robert C. Martin"],
                    "publishedDate": "2008-08-01",
                },
            }
        ],
    }


@pytest.fixture
def google_books_empty_payload() -> dict:
    """Google Books volumes response with no results."""
    return {"kind": "books#volumes", "totalItems": 0}


@pytest.fixture
def open_library_payload() -> dict:
    """Open Library books API response (jscmd=data) for ISBN 9780134093413."""
    return {
        "ISBN:9780134093413": {
            "url": "https://openlibrary.org/books/OL12345M/Clean_Code",
            "key": "/books/OL12345M",
            "title": "Clean Code",
            "publish_date": "2008",
        }
    }
