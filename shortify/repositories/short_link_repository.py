"""Short link repository for the URL shortener service.

This module provides the ShortLinkRepository class, the persistence gateway
for short code to long URL mappings.
"""

import logging
from datetime import datetime
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from shortify.models.short_link import ShortLink
from shortify.repositories.base import (
    STORE_ERRORS,
    BaseRepository,
    DuplicateKeyError,
    StoreUnavailableError,
    is_unique_violation,
)

logger = logging.getLogger(__name__)


class ShortLinkRepository(BaseRepository[ShortLink]):
    """
    Repository for ShortLink database operations.

    Uniqueness of short codes is left entirely to the database: ``create``
    never checks for an existing row first, so concurrent writers race at
    the unique constraint and exactly one of them wins.
    """

    def __init__(self):
        """Initialize the repository with the ShortLink model type."""
        super().__init__(ShortLink)

    async def create(
        self,
        db: AsyncSession,
        short_code: str,
        long_url: str,
        is_custom: bool = False,
        expires_at: Optional[datetime] = None,
    ) -> ShortLink:
        """
        Insert a new short link.

        Args:
            db: Database session
            short_code: The code the link will be reachable under
            long_url: The URL to redirect to
            is_custom: Whether the caller picked the code
            expires_at: Optional requested expiry (stored only)

        Returns:
            The created ShortLink entity

        Raises:
            DuplicateKeyError: If the short code already exists
            StoreUnavailableError: On transport or other database errors
        """
        data = {
            "short_code": short_code,
            "long_url": long_url,
            "is_custom": is_custom,
            "expires_at": expires_at,
        }
        try:
            return await self.insert(db, data)
        except IntegrityError as e:
            if is_unique_violation(e):
                raise DuplicateKeyError(self.model_type, "short_code", short_code) from e
            raise StoreUnavailableError(f"Database error creating short link: {e}") from e

    async def get_by_short_code(self, db: AsyncSession, short_code: str) -> Optional[ShortLink]:
        """
        Find a short link by its exact short code.

        Raises:
            StoreUnavailableError: On database errors
        """
        try:
            query = select(self.model_type).where(self.model_type.short_code == short_code)
            result = await db.execute(query)
            return result.scalar_one_or_none()
        except STORE_ERRORS as e:
            logger.error(f"Error retrieving short link '{short_code}': {e}")
            raise StoreUnavailableError(f"Error retrieving short link by code: {e}") from e

    async def lookup(self, db: AsyncSession, short_code: str) -> Optional[str]:
        """
        Resolve a short code to its long URL.

        Only the long_url column is read. Matching is exact and case-sensitive.

        Args:
            db: Database session
            short_code: The code to look up

        Returns:
            The long URL if the code exists, None otherwise

        Raises:
            StoreUnavailableError: On database errors
        """
        try:
            # TODO: add `expires_at > now()` once expired links should stop resolving
            query = select(self.model_type.long_url).where(self.model_type.short_code == short_code)
            result = await db.execute(query)
            return result.scalar_one_or_none()
        except STORE_ERRORS as e:
            logger.error(f"Error looking up short code '{short_code}': {e}")
            raise StoreUnavailableError(f"Error looking up short code: {e}") from e
