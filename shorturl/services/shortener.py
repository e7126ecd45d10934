"""URL shortening service for the URL shortener application.

This module contains the ShortenerService class which implements the
business logic for URL shortening and lookup.
"""

import base64
import logging
import secrets

from pydantic import AnyUrl, TypeAdapter, ValidationError

from shorturl.repositories.base import (
    URLStore,
    RepositoryError,
    DuplicateEntityError,
    EntityNotFoundError,
)
from shorturl.services.exceptions import (
    InvalidURLError,
    EmptyShortIDError,
    ShortIDGenerationError,
    CollisionExhaustedError,
    ShortIDConflictError,
    URLNotFoundError,
    StorageError,
)

logger = logging.getLogger(__name__)

DEFAULT_ID_LENGTH = 6
MAX_ID_ATTEMPTS = 10

ALLOWED_SCHEMES = ("http", "https")

_url_adapter = TypeAdapter(AnyUrl)


def _has_control_chars(value: str) -> bool:
    return any(ord(c) < 0x20 or ord(c) == 0x7f for c in value)


def is_valid_url(url) -> bool:
    """
    Check that a URL is an absolute http or https URL with a host.

    Args:
        url: URL to validate

    Returns:
        bool: True if the URL is valid, False otherwise
    """
    if not isinstance(url, str) or not url.strip():
        return False

    # Stored and redirected to verbatim; AnyUrl would silently strip these
    if url != url.strip() or _has_control_chars(url):
        return False

    try:
        parsed = _url_adapter.validate_python(url)
    except ValidationError:
        return False

    return parsed.scheme in ALLOWED_SCHEMES and bool(parsed.host)


class ShortenerService:
    """
    Service for URL shortening business logic.

    Generates random short IDs, keeps retrying while candidates collide,
    and stores the accepted mapping. The store passed in is the only shared
    state; the service itself holds no per-request data.
    """

    def __init__(
        self,
        store: URLStore,
        id_length: int = DEFAULT_ID_LENGTH,
        max_attempts: int = MAX_ID_ATTEMPTS,
    ):
        """
        Initialize the URL shortening service.

        Args:
            store: Storage backend for URL mappings
            id_length: Random bytes per short ID; non-positive values fall back to the default
            max_attempts: Number of candidates to try before giving up
        """
        if id_length <= 0:
            id_length = DEFAULT_ID_LENGTH
        self.store = store
        self.id_length = id_length
        self.max_attempts = max_attempts

    async def create_short_url(self, original_url: str) -> str:
        """
        Create a short ID for a URL and store the mapping.

        Args:
            original_url: The original URL to shorten

        Returns:
            str: The new short ID

        Raises:
            InvalidURLError: If the URL is not an absolute http(s) URL
            ShortIDGenerationError: If the random source fails
            CollisionExhaustedError: If every candidate in the budget collided
            ShortIDConflictError: If a concurrent writer saved the same ID first
            StorageError: If the store fails
        """
        if not is_valid_url(original_url):
            raise InvalidURLError(original_url)

        short_id = await self._generate_unique_short_id()

        try:
            await self.store.save(short_id, original_url)
        except DuplicateEntityError as e:
            # Lost the race between exists() and save(); the caller may retry
            logger.warning(f"Short ID '{short_id}' was taken before it could be saved")
            raise ShortIDConflictError(short_id) from e
        except RepositoryError as e:
            logger.error(f"Error saving short ID '{short_id}': {e}")
            raise StorageError(f"Failed to save URL for short ID '{short_id}'", short_id) from e

        logger.debug(f"Stored short ID '{short_id}'")
        return short_id

    async def get_original_url(self, short_id: str) -> str:
        """
        Look up the original URL for a short ID.

        Args:
            short_id: The short ID to look up

        Returns:
            str: The original URL

        Raises:
            EmptyShortIDError: If short_id is empty or whitespace
            URLNotFoundError: If no mapping exists
            StorageError: If the store fails
        """
        if not short_id or not short_id.strip():
            raise EmptyShortIDError()

        try:
            return await self.store.get(short_id)
        except EntityNotFoundError as e:
            raise URLNotFoundError(short_id) from e
        except RepositoryError as e:
            logger.error(f"Error retrieving short ID '{short_id}': {e}")
            raise StorageError(f"Failed to retrieve URL for short ID '{short_id}'", short_id) from e

    async def _generate_unique_short_id(self) -> str:
        """
        Draw candidates until one is not already stored.

        Storage and random-source failures abort immediately; only
        collisions are retried.

        Returns:
            str: A short ID that was free at the time of the check

        Raises:
            ShortIDGenerationError: If the random source fails
            StorageError: If the existence check fails
            CollisionExhaustedError: If every candidate collided
        """
        for attempt in range(1, self.max_attempts + 1):
            candidate = self._generate_short_id()

            try:
                exists = await self.store.exists(candidate)
            except RepositoryError as e:
                logger.error(f"Error checking whether short ID '{candidate}' exists: {e}")
                raise StorageError(
                    f"Failed to check whether short ID '{candidate}' exists", candidate
                ) from e

            if not exists:
                return candidate

            logger.debug(f"Short ID collision on attempt {attempt}/{self.max_attempts}: '{candidate}'")

        logger.error(f"All {self.max_attempts} short ID candidates collided")
        raise CollisionExhaustedError(self.max_attempts)

    def _generate_short_id(self) -> str:
        """
        Generate a random URL-safe short ID.

        Draws id_length bytes from the OS CSPRNG and encodes them as
        base64url without padding.

        Returns:
            str: A random short ID

        Raises:
            ShortIDGenerationError: If random bytes cannot be drawn
        """
        try:
            raw = secrets.token_bytes(self.id_length)
        except (OSError, NotImplementedError) as e:
            raise ShortIDGenerationError(f"Failed to generate random bytes: {e}") from e

        return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")
