"""Core module for the URL shortener application."""

from shorturl.core.config import settings
from shorturl.core.errors import ErrorKind

__all__ = ["settings", "ErrorKind"]
