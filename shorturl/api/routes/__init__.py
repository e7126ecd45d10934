"""Routes package initialization.

This module exports the route collection for the application.
"""

from fastapi import APIRouter

from shorturl.api.routes import shortener, redirect, health

API_PREFIX = "/api"

# Create root router
api_router = APIRouter()

# Shortening lives at the root: POST /shorten
api_router.include_router(shortener.router)

# Include health check routes with API prefix
api_router.include_router(
    health.router,
    prefix=API_PREFIX
)

# Include redirect routes last at the root path (no prefix)
# so /{short_id} does not shadow the routes above
api_router.include_router(
    redirect.router
)

__all__ = ["api_router"]
