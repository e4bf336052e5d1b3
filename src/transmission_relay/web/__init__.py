"""FastAPI application serving the relay endpoints."""

from .app import create_app

__all__ = ["create_app"]
