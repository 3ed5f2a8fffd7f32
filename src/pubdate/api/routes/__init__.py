"""API route modules."""

from .books import router as books_router
from .google_books import router as google_books_router
from .health import router as health_router

__all__ = [
    "books_router",
    "google_books_router",
    "health_router",
]
