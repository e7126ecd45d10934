"""Construction of the configured URLStore."""

import logging

from shorturl.core.config import Settings, StoreBackend
from shorturl.db.base import get_engine, init_schema
from shorturl.db.session import SessionManager
from shorturl.repositories.base import URLStore
from shorturl.repositories.memory_repository import InMemoryURLRepository
from shorturl.repositories.url_repository import URLRepository

logger = logging.getLogger(__name__)


async def create_url_store(settings: Settings) -> URLStore:
    """
    Build the store selected by STORE_BACKEND.

    For the database backend this creates the engine and makes sure the
    schema exists before the store is handed out. The engine is disposed
    again if schema initialisation fails.
    """
    if settings.STORE_BACKEND == StoreBackend.MEMORY:
        logger.warning("Using in-memory URL store; mappings are lost on restart")
        return InMemoryURLRepository()

    engine = get_engine(settings)
    try:
        await init_schema(engine)
    except Exception:
        await engine.dispose()
        raise

    logger.info("Database URL store initialised")
    return URLRepository(SessionManager(engine))
