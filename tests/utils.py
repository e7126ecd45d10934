"""Test utilities for URL shortener tests."""

import random
import string
from typing import List, Optional, Tuple

from shorturl.repositories.base import URLStore, DuplicateEntityError, EntityNotFoundError


def random_string(length: int = 10) -> str:
    """Generate a random alphanumeric string."""
    return ''.join(random.choice(string.ascii_letters + string.digits) for _ in range(length))


def random_url() -> str:
    """Generate a random URL for testing."""
    domain = f"{random_string(8)}.com"
    path = random_string(12)
    return f"https://{domain}/{path}"


class StubStore(URLStore):
    """
    Scriptable URLStore that records every call.

    Args:
        exists_result: Value returned by exists()
        exists_error: Exception raised by exists()
        save_error: Exception raised by save()
        get_error: Exception raised by get()
    """

    def __init__(
        self,
        exists_result: bool = False,
        exists_error: Optional[Exception] = None,
        save_error: Optional[Exception] = None,
        get_error: Optional[Exception] = None,
    ):
        self.exists_result = exists_result
        self.exists_error = exists_error
        self.save_error = save_error
        self.get_error = get_error
        self.urls = {}
        self.exists_calls: List[str] = []
        self.save_calls: List[Tuple[str, str]] = []
        self.get_calls: List[str] = []

    async def save(self, short_id: str, original_url: str) -> None:
        self.save_calls.append((short_id, original_url))
        if self.save_error is not None:
            raise self.save_error
        if short_id in self.urls:
            raise DuplicateEntityError(short_id)
        self.urls[short_id] = original_url

    async def get(self, short_id: str) -> str:
        self.get_calls.append(short_id)
        if self.get_error is not None:
            raise self.get_error
        if short_id not in self.urls:
            raise EntityNotFoundError(short_id)
        return self.urls[short_id]

    async def exists(self, short_id: str) -> bool:
        self.exists_calls.append(short_id)
        if self.exists_error is not None:
            raise self.exists_error
        return self.exists_result
