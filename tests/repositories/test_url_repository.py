"""Tests for the URL repository."""

import pytest
from sqlalchemy import select

from shorturl.core.errors import ErrorKind
from shorturl.models.url import URLMapping
from shorturl.repositories.base import DuplicateEntityError, EntityNotFoundError
from tests.utils import random_url


@pytest.mark.repository
class TestURLRepository:
    """Test suite for the relational URL store."""

    @pytest.mark.asyncio
    async def test_save_and_get(self, url_repository):
        test_url = random_url()

        await url_repository.save("testsave", test_url)

        assert await url_repository.get("testsave") == test_url

    @pytest.mark.asyncio
    async def test_save_persists_row(self, url_repository):
        """Test the row is committed with a creation timestamp."""
        test_url = random_url()
        await url_repository.save("persisted", test_url)

        async with url_repository.sessions.session() as db:
            result = await db.execute(select(URLMapping).where(URLMapping.short_id == "persisted"))
            row = result.scalar_one()

        assert row.original_url == test_url
        assert row.created_at is not None

    @pytest.mark.asyncio
    async def test_save_duplicate_short_id(self, url_repository):
        """Test the primary key rejects a second mapping for the same ID."""
        await url_repository.save("duplicate", random_url())

        with pytest.raises(DuplicateEntityError) as excinfo:
            await url_repository.save("duplicate", random_url())

        assert excinfo.value.kind == ErrorKind.ID_EXISTS
        assert excinfo.value.short_id == "duplicate"

    @pytest.mark.asyncio
    async def test_duplicate_save_keeps_original_mapping(self, url_repository):
        first_url = random_url()
        await url_repository.save("keepfirst", first_url)

        with pytest.raises(DuplicateEntityError):
            await url_repository.save("keepfirst", random_url())

        assert await url_repository.get("keepfirst") == first_url

    @pytest.mark.asyncio
    async def test_get_nonexistent(self, url_repository):
        with pytest.raises(EntityNotFoundError) as excinfo:
            await url_repository.get("zzz999")

        assert excinfo.value.kind == ErrorKind.NOT_FOUND
        assert excinfo.value.short_id == "zzz999"

    @pytest.mark.asyncio
    async def test_exists(self, url_repository):
        assert await url_repository.exists("present") is False

        await url_repository.save("present", random_url())

        assert await url_repository.exists("present") is True
        assert await url_repository.exists("absent") is False

    @pytest.mark.asyncio
    async def test_short_ids_are_case_sensitive(self, url_repository):
        await url_repository.save("AbC", "https://example.com/upper")
        await url_repository.save("abc", "https://example.com/lower")

        assert await url_repository.get("AbC") == "https://example.com/upper"
        assert await url_repository.get("abc") == "https://example.com/lower"

    @pytest.mark.asyncio
    async def test_health_check(self, url_repository):
        health = await url_repository.check_health()
        assert health["status"] == "healthy"
        assert health["error"] is None
