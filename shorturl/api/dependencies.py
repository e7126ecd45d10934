"""API dependencies for FastAPI.

This module provides dependency injection functions for FastAPI endpoints
to access the store, the shortener service and a request-scoped logger.
The store and service are created once at startup and kept on app.state.
"""

from fastapi import Request
from loguru import logger

from shorturl.core.config import Settings
from shorturl.middleware.logging import get_client_ip
from shorturl.repositories.base import URLStore
from shorturl.services.shortener import ShortenerService


def get_settings(request: Request) -> Settings:
    """Get the settings the application was created with."""
    return request.app.state.settings


def get_url_store(request: Request) -> URLStore:
    """Get the application's URL store."""
    return request.app.state.store


def get_shortener_service(request: Request) -> ShortenerService:
    """Get the application's URL shortening service."""
    return request.app.state.shortener_service


def get_request_logger(request: Request):
    """Get a logger bound to the request ID, caller IP address and user agent."""
    return logger.bind(
        request_id=getattr(request.state, "request_id", ""),
        client_ip=get_client_ip(request),
        user_agent=request.headers.get("user-agent", ""),
        path=request.url.path,
    )
