"""Health check endpoints for monitoring application status."""

import time

from fastapi import APIRouter, Depends, status

from shorturl.api import schemas
from shorturl.api.dependencies import get_settings, get_url_store
from shorturl.core.config import Settings
from shorturl.repositories.base import URLStore

router = APIRouter(tags=["health"])


@router.get(
    "/health",
    response_model=schemas.HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Get system health status",
    response_description="Health status of all system components"
)
async def health_check(
    store: URLStore = Depends(get_url_store),
    settings: Settings = Depends(get_settings),
):
    """Check health of the store."""
    store_health = await store.check_health()

    return {
        "status": "healthy" if store_health["status"] == "healthy" else "degraded",
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT.value,
        "timestamp": time.time(),
        "components": {"store": store_health},
    }


@router.get(
    "/health/ready",
    status_code=status.HTTP_200_OK,
    summary="Readiness probe",
    response_description="Application readiness status"
)
async def readiness_probe(store: URLStore = Depends(get_url_store)):
    """Check if application is ready to handle requests."""
    store_health = await store.check_health()
    components_status = {"api": True, "store": store_health["status"] == "healthy"}

    return {
        "ready": all(components_status.values()),
        "components": components_status
    }


@router.get(
    "/health/live",
    status_code=status.HTTP_200_OK,
    summary="Liveness probe",
    response_description="Application liveness status"
)
async def liveness_probe():
    """Simple check that application is running."""
    return {"alive": True}
