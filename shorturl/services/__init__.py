"""Service layer for the URL shortener application.

This package contains the service class implementing the business logic of the application.
Services orchestrate interactions with the store and provide domain-specific operations.
"""

from shorturl.services.shortener import ShortenerService

__all__ = ["ShortenerService"]
