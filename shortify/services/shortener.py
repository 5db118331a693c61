"""URL shortening service for the URL shortener application.

This module contains the ShortLinkService class which implements the business
logic for allocating short codes and resolving them back to long URLs.
"""

import logging
from datetime import datetime
from typing import Callable, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from shortify.core.config import URL_SAFE_ALPHABET
from shortify.models.short_link import ShortLink
from shortify.repositories.base import DuplicateKeyError, StoreUnavailableError
from shortify.repositories.short_link_repository import ShortLinkRepository
from shortify.services.codegen import DEFAULT_CODE_LENGTH, generate_short_code
from shortify.services.exceptions import (
    CustomCodeAlreadyExistsError,
    ShortCodeGenerationError,
    URLCreationError,
    URLLookupError,
)

logger = logging.getLogger(__name__)


class ShortLinkService:
    """
    Service for URL shortening business logic.

    Inputs are expected to be validated already; this service only decides
    which code to use and maps repository failures onto service errors.
    """

    def __init__(
        self,
        repository: ShortLinkRepository,
        code_length: int = DEFAULT_CODE_LENGTH,
        alphabet: str = URL_SAFE_ALPHABET,
        max_attempts: int = 5,
        code_generator: Callable[[int, str], str] = generate_short_code,
    ):
        """
        Initialize the URL shortening service.

        Args:
            repository: Repository for short link data access
            code_length: Length of generated codes
            alphabet: Characters generated codes are drawn from
            max_attempts: Inserts to try with fresh generated codes before giving up
            code_generator: Callable producing a code from (length, alphabet)
        """
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.repository = repository
        self.code_length = code_length
        self.alphabet = alphabet
        self.max_attempts = max_attempts
        self.code_generator = code_generator

    async def shorten(
        self,
        db: AsyncSession,
        long_url: str,
        custom_alias: Optional[str] = None,
        expires_at: Optional[datetime] = None,
    ) -> ShortLink:
        """
        Create a short link, using the alias if given or a generated code otherwise.

        Args:
            db: Database session
            long_url: Validated long URL
            custom_alias: Validated caller-chosen code, if any
            expires_at: Requested expiry, stored as-is

        Returns:
            ShortLink: The persisted link

        Raises:
            CustomCodeAlreadyExistsError: If the alias is taken
            ShortCodeGenerationError: If every generated code collided
            URLCreationError: If the store failed
        """
        if custom_alias:
            return await self._create_with_alias(db, long_url, custom_alias, expires_at)
        return await self._create_with_generated_code(db, long_url, expires_at)

    async def resolve(self, db: AsyncSession, short_code: str) -> Optional[str]:
        """
        Resolve a short code to the long URL it was created for.

        Expiry is not consulted.

        Returns:
            The long URL, or None if no link has that code

        Raises:
            URLLookupError: If the store failed
        """
        try:
            return await self.repository.lookup(db, short_code)
        except StoreUnavailableError as e:
            raise URLLookupError(f"Failed to resolve short code '{short_code}'") from e

    async def _create_with_alias(
        self,
        db: AsyncSession,
        long_url: str,
        alias: str,
        expires_at: Optional[datetime],
    ) -> ShortLink:
        try:
            return await self.repository.create(
                db, short_code=alias, long_url=long_url, is_custom=True, expires_at=expires_at
            )
        except DuplicateKeyError as e:
            raise CustomCodeAlreadyExistsError(f"Custom alias '{alias}' is already in use") from e
        except StoreUnavailableError as e:
            raise URLCreationError(f"Failed to create short link: {e}") from e

    async def _create_with_generated_code(
        self,
        db: AsyncSession,
        long_url: str,
        expires_at: Optional[datetime],
    ) -> ShortLink:
        for attempt in range(1, self.max_attempts + 1):
            short_code = self.code_generator(self.code_length, self.alphabet)
            try:
                return await self.repository.create(
                    db, short_code=short_code, long_url=long_url, expires_at=expires_at
                )
            except DuplicateKeyError:
                logger.warning(
                    f"Generated short code '{short_code}' collided "
                    f"(attempt {attempt}/{self.max_attempts})"
                )
            except StoreUnavailableError as e:
                raise URLCreationError(f"Failed to create short link: {e}") from e

        raise ShortCodeGenerationError(self.max_attempts)
