"""URL Repository for the URL shortener application.

This module provides the URLRepository class, the relational URLStore
backed by SQLAlchemy's async engine.
"""

import logging
from typing import Dict

from sqlalchemy import insert, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from shorturl.db.base import DatabaseHealthCheck
from shorturl.db.session import SessionManager
from shorturl.models.url import URLMapping
from shorturl.repositories.base import (
    URLStore,
    RepositoryError,
    DuplicateEntityError,
    EntityNotFoundError,
)

logger = logging.getLogger(__name__)

# SQLSTATE for unique_violation
PG_UNIQUE_VIOLATION = "23505"


def is_unique_violation(error: IntegrityError) -> bool:
    """
    Check whether an IntegrityError was caused by a unique/primary key clash.

    PostgreSQL drivers expose the SQLSTATE on the wrapped exception; SQLite
    only reports it in the message.
    """
    orig = error.orig
    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if sqlstate is not None:
        return sqlstate == PG_UNIQUE_VIOLATION

    message = str(orig).lower()
    return "unique constraint" in message or "duplicate key" in message


class URLRepository(URLStore):
    """
    Relational store for URL mappings.

    Each operation runs in its own short-lived session, so a single
    repository instance can be shared by all requests.
    """

    def __init__(self, sessions: SessionManager):
        """
        Initialize the repository.

        Args:
            sessions: Session manager bound to the target database
        """
        self.sessions = sessions

    async def save(self, short_id: str, original_url: str) -> None:
        """
        Insert a new mapping.

        Args:
            short_id: The unique short ID
            original_url: The URL the short ID redirects to

        Raises:
            DuplicateEntityError: If the short ID already exists
            RepositoryError: On other database errors
        """
        try:
            async with self.sessions.transaction_context() as db:
                await db.execute(
                    insert(URLMapping).values(short_id=short_id, original_url=original_url)
                )
        except IntegrityError as e:
            if is_unique_violation(e):
                raise DuplicateEntityError(short_id) from e
            logger.error(f"Integrity error saving short ID '{short_id}': {e}")
            raise RepositoryError(f"Database error saving URL (id: {short_id}): {e}", short_id) from e
        except SQLAlchemyError as e:
            logger.error(f"Error saving short ID '{short_id}': {e}")
            raise RepositoryError(f"Database error saving URL (id: {short_id}): {e}", short_id) from e

    async def get(self, short_id: str) -> str:
        """
        Find the original URL for a short ID.

        Args:
            short_id: The short ID to look up

        Returns:
            The original URL

        Raises:
            EntityNotFoundError: If no mapping exists
            RepositoryError: On database errors
        """
        try:
            async with self.sessions.session() as db:
                query = select(URLMapping.original_url).where(URLMapping.short_id == short_id)
                result = await db.execute(query)
                original_url = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error(f"Error retrieving short ID '{short_id}': {e}")
            raise RepositoryError(f"Database error retrieving URL (id: {short_id}): {e}", short_id) from e

        if original_url is None:
            raise EntityNotFoundError(short_id)
        return original_url

    async def exists(self, short_id: str) -> bool:
        """
        Check if a short ID is already stored.

        Raises:
            RepositoryError: On database errors
        """
        try:
            async with self.sessions.session() as db:
                query = select(1).where(URLMapping.short_id == short_id).limit(1)
                result = await db.execute(query)
                return result.scalar_one_or_none() is not None
        except SQLAlchemyError as e:
            logger.error(f"Error checking existence of short ID '{short_id}': {e}")
            raise RepositoryError(f"Database error checking short ID (id: {short_id}): {e}", short_id) from e

    async def check_health(self) -> Dict:
        return await DatabaseHealthCheck.check_connection(self.sessions.engine)

    async def close(self) -> None:
        """Dispose of the engine's connection pool."""
        await self.sessions.dispose()
