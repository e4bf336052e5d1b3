"""
FastAPI Application
===================
HTTP surface of the transmission relay.

Run with:
    transmission-relay serve
or:
    uvicorn transmission_relay.web.app:create_app --factory
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from transmission_relay.config import Settings
from transmission_relay.exceptions import IOFailure
from transmission_relay.storage import DocumentStore, FileDocumentStore
from transmission_relay.validation import DocumentValidator

from .routes import router

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    store: DocumentStore | None = None,
) -> FastAPI:
    """Build the relay application.

    When no store is given, a file store at the configured data path is
    used and bootstrapped with the placeholder document if it is absent.

    Args:
        settings: Configuration (default: loaded from the environment)
        store: Document store shared by the upload and query paths

    Returns:
        The configured FastAPI application
    """
    settings = settings or Settings()

    if store is None:
        store = FileDocumentStore(settings.data_file_path)
        try:
            store.ensure_initialized()
        except IOFailure as e:
            # The API reports the store as unavailable until an upload succeeds
            logger.error(f"Failed to create initial data file: {e}")

    app = FastAPI(
        title="Transmission Relay",
        description="Issue document distribution and rendering",
        version="1.0.0",
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url=None,
        openapi_url="/openapi.json" if settings.DEBUG else None,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.settings = settings
    app.state.store = store
    app.state.validator = DocumentValidator()

    app.include_router(router)

    return app
