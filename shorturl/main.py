"""Main application module.

This module builds the FastAPI application, wires the URL store and
shortener service into it, and configures middleware and exception handlers.
"""

from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from shorturl.api import api_router
from shorturl.api.errors import register_exception_handlers
from shorturl.core.config import Settings, settings as default_settings
from shorturl.core.logging import setup_logging
from shorturl.middleware.logging import LoggingMiddleware
from shorturl.repositories.base import URLStore
from shorturl.repositories.factory import create_url_store
from shorturl.services.shortener import ShortenerService


def create_app(settings: Optional[Settings] = None, store: Optional[URLStore] = None) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        settings: Settings to use; defaults to the environment-derived settings
        store: Store to use; when omitted one is built from settings at startup
            and closed again at shutdown

    Returns:
        FastAPI: The configured application
    """
    settings = settings or default_settings
    setup_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")
        logger.info(f"Environment: {settings.ENVIRONMENT.value}")

        owns_store = store is None
        url_store = await create_url_store(settings) if owns_store else store

        app.state.store = url_store
        app.state.shortener_service = ShortenerService(url_store, settings.SHORT_ID_LENGTH)
        logger.info(f"Shortener service ready (short ID length: {settings.SHORT_ID_LENGTH} bytes)")

        try:
            yield
        finally:
            logger.info(f"Shutting down {settings.APP_NAME}")
            if owns_store:
                await url_store.close()

    app = FastAPI(
        title=settings.APP_NAME,
        description=settings.APP_DESCRIPTION,
        version=settings.APP_VERSION,
        docs_url="/api/docs" if settings.DEBUG else None,
        redoc_url="/api/redoc" if settings.DEBUG else None,
        openapi_url="/api/openapi.json" if settings.DEBUG else None,
        lifespan=lifespan,
    )
    app.state.settings = settings

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=settings.CORS_ALLOW_METHODS,
        allow_headers=settings.CORS_ALLOW_HEADERS,
        allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
    )

    if settings.REQUEST_LOGGING_ENABLED:
        app.add_middleware(LoggingMiddleware)

    register_exception_handlers(app)
    app.include_router(api_router)

    return app


def run() -> None:
    """Serve the application with uvicorn on the configured host and port."""
    uvicorn.run(
        "shorturl.main:create_app",
        factory=True,
        host=default_settings.HOST,
        port=default_settings.PORT,
        timeout_keep_alive=default_settings.SERVER_TIMEOUT_KEEP_ALIVE,
        log_config=None,
    )
