"""API request and response schemas.

This module contains Pydantic models for API request validation
and response serialization.
"""

from typing import Dict, Optional

from pydantic import BaseModel


class ShortenRequest(BaseModel):
    """Request schema for creating a shortened URL."""
    url: str = ""


class ShortenResponse(BaseModel):
    """Response schema for a created short URL."""
    short_url: str  # The short ID


class ErrorResponse(BaseModel):
    """Response schema for errors."""
    error: str


class ComponentHealth(BaseModel):
    status: str
    latency_ms: Optional[int] = None
    error: Optional[str] = None


class HealthResponse(BaseModel):
    """Response schema for the full health report."""
    status: str
    version: str
    environment: str
    timestamp: float
    components: Dict[str, ComponentHealth]
