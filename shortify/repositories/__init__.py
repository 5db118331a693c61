"""Repository layer for the URL shortener service.

This module provides repository classes that abstract database operations
and implement the Repository pattern for clean separation of concerns.
"""

from shortify.repositories.base import (
    BaseRepository,
    DuplicateKeyError,
    RepositoryError,
    StoreUnavailableError,
)
from shortify.repositories.short_link_repository import ShortLinkRepository

__all__ = [
    # Base classes and exceptions
    "BaseRepository",
    "RepositoryError",
    "DuplicateKeyError",
    "StoreUnavailableError",

    # Concrete repositories
    "ShortLinkRepository",
]
