"""FastAPI application for pubdate."""

from pubdate.api.app import create_app

__all__ = ["create_app"]
