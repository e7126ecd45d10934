"""In-memory URL store.

Keeps mappings in a dict for the lifetime of the process. Useful for local
development without a database and as a fast store in tests.
"""

from datetime import datetime, timezone
from typing import Dict

from shorturl.models.url import URLMapping
from shorturl.repositories.base import URLStore, DuplicateEntityError, EntityNotFoundError


class InMemoryURLRepository(URLStore):
    """
    Process-local URLStore.

    save() checks and inserts without yielding to the event loop, so two
    coroutines can never both insert the same short ID.
    """

    def __init__(self):
        self._mappings: Dict[str, URLMapping] = {}

    async def save(self, short_id: str, original_url: str) -> None:
        if short_id in self._mappings:
            raise DuplicateEntityError(short_id)
        self._mappings[short_id] = URLMapping(
            short_id=short_id,
            original_url=original_url,
            created_at=datetime.now(timezone.utc),
        )

    async def get(self, short_id: str) -> str:
        mapping = self._mappings.get(short_id)
        if mapping is None:
            raise EntityNotFoundError(short_id)
        return mapping.original_url

    async def exists(self, short_id: str) -> bool:
        return short_id in self._mappings

    def __len__(self) -> int:
        return len(self._mappings)
