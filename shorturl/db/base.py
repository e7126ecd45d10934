"""Database engine configuration for SQLAlchemy with SQLModel.

This module provides:
- Engine configuration per environment
- Idempotent schema initialisation
- Health check functionality
"""

from typing import Any, Dict
import asyncio
import logging

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import NullPool, StaticPool
from sqlalchemy.sql import text
from sqlmodel import SQLModel

from shorturl.core.config import Settings
from shorturl.models.url import URLMapping

logger = logging.getLogger(__name__)


def get_engine_config(settings: Settings) -> Dict[str, Any]:
    """Get the engine configuration for the configured database and environment.

    Args:
        settings: Application settings

    Returns:
        Dict: Keyword arguments for create_async_engine.
    """
    url = make_url(settings.SQLALCHEMY_DATABASE_URI)

    if url.get_backend_name() == "sqlite":
        # SQLite has no server-side pool; an in-memory database only
        # exists for the lifetime of its single connection.
        if url.database in (None, "", ":memory:"):
            return {"echo": settings.DB_ECHO, "poolclass": StaticPool}
        return {"echo": settings.DB_ECHO}

    if settings.ENVIRONMENT.value == "testing":
        return {"echo": settings.DB_ECHO, "poolclass": NullPool}

    return {
        "echo": settings.DB_ECHO,
        "pool_size": settings.DB_POOL_SIZE,
        "max_overflow": settings.DB_POOL_MAX_OVERFLOW,
        "pool_timeout": settings.DB_POOL_TIMEOUT,
        "pool_recycle": settings.DB_POOL_RECYCLE,
        "pool_pre_ping": True,
    }


def get_engine(settings: Settings) -> AsyncEngine:
    """Create and configure an async SQLAlchemy engine.

    Args:
        settings: Application settings

    Returns:
        AsyncEngine: Configured SQLAlchemy async engine instance.
    """
    engine_url = settings.SQLALCHEMY_DATABASE_URI
    engine_config = get_engine_config(settings)

    logger.info(
        f"Creating database engine with URL: "
        f"{make_url(engine_url).render_as_string(hide_password=True)}"
    )

    return create_async_engine(engine_url, **engine_config)


async def init_schema(engine: AsyncEngine) -> None:
    """Create the urls table and its created_at index if they do not exist.

    Safe to call on every startup.

    Args:
        engine: Engine bound to the target database
    """
    async with engine.begin() as conn:
        await conn.run_sync(
            SQLModel.metadata.create_all,
            tables=[URLMapping.__table__],
            checkfirst=True,
        )
    logger.info(f"Database schema ready (table '{URLMapping.__tablename__}')")


class DatabaseHealthCheck:
    """Health check functionality for the database connection."""

    @staticmethod
    async def check_connection(engine: AsyncEngine) -> Dict:
        """Check database connectivity and return status.

        Returns:
            Dict: Health check result containing status and latency information
        """
        loop = asyncio.get_running_loop()
        start_time = loop.time()
        status = "healthy"
        error_message = None
        latency_ms = 0

        try:
            async with engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            latency_ms = int((loop.time() - start_time) * 1000)
        except Exception as e:
            status = "unhealthy"
            error_message = str(e)
            logger.error(f"Database health check failed: {e}")

        return {
            "status": status,
            "latency_ms": latency_ms,
            "error": error_message,
        }
