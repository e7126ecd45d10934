"""Exceptions for the URL shortener service layer.

This module contains the exception hierarchy for the service layer,
providing domain-specific exceptions that abstract underlying storage details.
Each exception carries an ErrorKind, and the short ID it concerns where
there is one.
"""

from typing import Optional

from shorturl.core.errors import ErrorKind


class ServiceError(Exception):
    """Base exception for all service-level errors."""

    kind: ErrorKind = ErrorKind.STORAGE

    def __init__(self, message: str, short_id: Optional[str] = None):
        self.short_id = short_id
        super().__init__(message)


class URLValidationError(ServiceError):
    """Input failed validation checks."""
    pass


class InvalidURLError(URLValidationError):
    """The URL is not an absolute http(s) URL."""

    kind = ErrorKind.INVALID_URL

    def __init__(self, url: object):
        self.url = url
        super().__init__(f"Invalid URL: {url}")


class EmptyShortIDError(URLValidationError):
    """The short ID is empty or whitespace."""

    kind = ErrorKind.EMPTY_SHORT_ID

    def __init__(self):
        super().__init__("Short ID must not be empty")


class URLCreationError(ServiceError):
    """Error occurred during URL creation."""
    pass


class ShortIDGenerationError(URLCreationError):
    """The random source failed while drawing a candidate ID."""

    kind = ErrorKind.ID_GENERATION


class CollisionExhaustedError(URLCreationError):
    """Every candidate ID in the retry budget was already taken."""

    kind = ErrorKind.COLLISION_EXHAUSTED

    def __init__(self, attempts: int):
        self.attempts = attempts
        super().__init__(
            f"Short ID generation retry limit exceeded: all {attempts} candidates collided"
        )


class ShortIDConflictError(URLCreationError):
    """Saving failed because another writer stored the same ID first."""

    kind = ErrorKind.ID_EXISTS

    def __init__(self, short_id: str):
        super().__init__(f"Failed to save short ID '{short_id}': ID already exists", short_id)


class URLNotFoundError(ServiceError):
    """URL with the specified short ID was not found."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, short_id: str):
        super().__init__(f"URL with short ID '{short_id}' not found", short_id)


class StorageError(ServiceError):
    """The store failed for a reason other than not-found or duplicate ID."""

    kind = ErrorKind.STORAGE
