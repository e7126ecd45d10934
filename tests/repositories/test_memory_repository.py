"""Tests for the in-memory URL store."""

import asyncio

import pytest

from shorturl.core.errors import ErrorKind
from shorturl.repositories.base import DuplicateEntityError, EntityNotFoundError
from shorturl.repositories.memory_repository import InMemoryURLRepository


@pytest.mark.repository
class TestInMemoryURLRepository:

    @pytest.mark.asyncio
    async def test_save_get_exists(self, memory_store):
        assert await memory_store.exists("abc") is False

        await memory_store.save("abc", "https://example.com")

        assert await memory_store.exists("abc") is True
        assert await memory_store.get("abc") == "https://example.com"
        assert len(memory_store) == 1

    @pytest.mark.asyncio
    async def test_duplicate(self, memory_store):
        await memory_store.save("abc", "https://example.com/1")

        with pytest.raises(DuplicateEntityError) as excinfo:
            await memory_store.save("abc", "https://example.com/2")

        assert excinfo.value.kind == ErrorKind.ID_EXISTS
        assert await memory_store.get("abc") == "https://example.com/1"

    @pytest.mark.asyncio
    async def test_get_missing(self, memory_store):
        with pytest.raises(EntityNotFoundError) as excinfo:
            await memory_store.get("missing")

        assert excinfo.value.short_id == "missing"

    @pytest.mark.asyncio
    async def test_concurrent_saves_of_same_id(self):
        store = InMemoryURLRepository()

        results = await asyncio.gather(
            *(store.save("same", f"https://example.com/{i}") for i in range(10)),
            return_exceptions=True,
        )

        assert sum(1 for r in results if r is None) == 1
        assert all(isinstance(r, DuplicateEntityError) for r in results if r is not None)

    @pytest.mark.asyncio
    async def test_health_and_close(self, memory_store):
        assert (await memory_store.check_health())["status"] == "healthy"
        await memory_store.close()
