"""Test fixtures for the URL shortener application."""

import os
from typing import Generator

import pytest
import pytest_asyncio
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from shorturl.core.config import Settings
from shorturl.db.base import init_schema
from shorturl.db.session import SessionManager
from shorturl.main import create_app
from shorturl.repositories.memory_repository import InMemoryURLRepository
from shorturl.repositories.url_repository import URLRepository
from shorturl.services.shortener import ShortenerService


# Test database URL - using SQLite in-memory
TEST_SQLALCHEMY_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture(scope="session", autouse=True)
def setup_test_environment():
    """Set testing environment variables."""
    original_env = os.environ.copy()

    os.environ["ENVIRONMENT"] = "testing"
    os.environ["LOG_LEVEL"] = "WARNING"
    os.environ["LOG_TO_FILE"] = "false"

    yield

    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture
def test_settings() -> Settings:
    """Settings for tests that build an app."""
    return Settings(
        ENVIRONMENT="testing",
        STORE_BACKEND="memory",
        LOG_LEVEL="WARNING",
        LOG_TO_FILE=False,
        _env_file=None,
    )


@pytest_asyncio.fixture
async def test_engine():
    """Create test database engine with in-memory SQLite."""
    engine = create_async_engine(
        TEST_SQLALCHEMY_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False
    )

    await init_schema(engine)

    yield engine

    await engine.dispose()


@pytest.fixture
def url_repository(test_engine) -> URLRepository:
    """Relational store on the in-memory test database."""
    return URLRepository(SessionManager(test_engine))


@pytest.fixture
def memory_store() -> InMemoryURLRepository:
    return InMemoryURLRepository()


@pytest.fixture
def shortener_service(url_repository) -> ShortenerService:
    """Shortener service backed by the relational test store."""
    return ShortenerService(url_repository)


@pytest.fixture
def test_app(test_settings, memory_store) -> FastAPI:
    """Create FastAPI test app wired to an in-memory store."""
    return create_app(settings=test_settings, store=memory_store)


@pytest.fixture
def client(test_app) -> Generator[TestClient, None, None]:
    """Return FastAPI TestClient instance."""
    with TestClient(test_app, follow_redirects=False) as test_client:
        yield test_client
