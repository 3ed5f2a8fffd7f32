"""Book sources for publication dates."""

from pubdate.resolution.books.google_books import GoogleBooksAdapter
from pubdate.resolution.books.openlibrary import OpenLibraryAdapter

__all__ = [
    "GoogleBooksAdapter",
    "OpenLibraryAdapter",
]
