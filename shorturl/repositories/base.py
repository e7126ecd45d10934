"""Store contract for the URL shortener application.

This module defines the URLStore interface that every storage backend
implements, and the exceptions those backends raise.
"""

from abc import ABC, abstractmethod
from typing import Dict, Optional

from shorturl.core.errors import ErrorKind


class RepositoryError(Exception):
    """Base exception for repository errors."""

    kind: ErrorKind = ErrorKind.STORAGE

    def __init__(self, message: str, short_id: Optional[str] = None):
        self.short_id = short_id
        super().__init__(message)


class EntityNotFoundError(RepositoryError):
    """Exception raised when no mapping exists for a short ID."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, short_id: str):
        super().__init__(f"No URL found for short ID '{short_id}'", short_id)


class DuplicateEntityError(RepositoryError):
    """Exception raised when the store's uniqueness constraint rejects a short ID."""

    kind = ErrorKind.ID_EXISTS

    def __init__(self, short_id: str):
        super().__init__(f"Short ID '{short_id}' already exists", short_id)


class URLStore(ABC):
    """
    Durable mapping from short ID to original URL.

    Implementations must be safe to call from many concurrent requests and
    must enforce short ID uniqueness themselves in save(): exists() is only
    a hint, because another writer can insert the same ID in between.
    """

    @abstractmethod
    async def save(self, short_id: str, original_url: str) -> None:
        """
        Insert a new mapping.

        Raises:
            DuplicateEntityError: If short_id is already stored
            RepositoryError: On other storage errors
        """

    @abstractmethod
    async def get(self, short_id: str) -> str:
        """
        Return the original URL stored for short_id.

        Raises:
            EntityNotFoundError: If no mapping exists
            RepositoryError: On other storage errors
        """

    @abstractmethod
    async def exists(self, short_id: str) -> bool:
        """
        Report whether short_id is stored.

        Raises:
            RepositoryError: On storage errors
        """

    async def check_health(self) -> Dict:
        """Return a health report with at least a "status" key."""
        return {"status": "healthy", "latency_ms": 0, "error": None}

    async def close(self) -> None:
        """Release any resources held by the store."""
