"""Error kinds shared by the repository and service layers.

Every exception raised by this package carries one of these kinds so
callers can branch on what went wrong without depending on concrete
exception classes.
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Closed set of failure categories."""

    INVALID_URL = "invalid_url"
    EMPTY_SHORT_ID = "empty_short_id"
    COLLISION_EXHAUSTED = "collision_exhausted"
    ID_EXISTS = "id_exists"
    NOT_FOUND = "not_found"
    STORAGE = "storage"
    ID_GENERATION = "id_generation"
