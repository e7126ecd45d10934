"""Database module for the URL shortener application."""
from shorturl.db.base import get_engine, get_engine_config, init_schema, DatabaseHealthCheck
from shorturl.db.session import SessionManager

__all__ = [
    "get_engine",
    "get_engine_config",
    "init_schema",
    "DatabaseHealthCheck",
    "SessionManager",
]
