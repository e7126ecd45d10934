"""Repository layer for the URL shortener application.

This module provides the URLStore contract and its implementations,
keeping storage details out of the service layer.
"""

from shorturl.repositories.base import (
    URLStore,
    RepositoryError,
    EntityNotFoundError,
    DuplicateEntityError,
)
from shorturl.repositories.url_repository import URLRepository
from shorturl.repositories.memory_repository import InMemoryURLRepository
from shorturl.repositories.factory import create_url_store

__all__ = [
    # Contract and exceptions
    "URLStore",
    "RepositoryError",
    "EntityNotFoundError",
    "DuplicateEntityError",

    # Concrete stores
    "URLRepository",
    "InMemoryURLRepository",
    "create_url_store",
]
