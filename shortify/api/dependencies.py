"""API dependencies for FastAPI.

This module provides dependency injection functions for FastAPI endpoints
to access settings, repositories and service instances.
"""

from fastapi import Depends, Request

from shortify.core.config import Settings
from shortify.repositories.short_link_repository import ShortLinkRepository
from shortify.services.shortener import ShortLinkService


def get_settings(request: Request) -> Settings:
    """Get the settings the application was created with."""
    return request.app.state.settings


async def get_short_link_repository() -> ShortLinkRepository:
    """Get an instance of the short link repository."""
    return ShortLinkRepository()


async def get_shortener_service(
    repository: ShortLinkRepository = Depends(get_short_link_repository),
    settings: Settings = Depends(get_settings),
) -> ShortLinkService:
    """Get an instance of the URL shortening service."""
    return ShortLinkService(
        repository=repository,
        code_length=settings.SHORT_CODE_LENGTH,
        alphabet=settings.SHORT_CODE_ALPHABET,
        max_attempts=settings.SHORT_CODE_MAX_ATTEMPTS,
    )


def get_base_url(settings: Settings = Depends(get_settings)) -> str:
    """Get the base URL for shortened links."""
    return settings.BASE_URL.rstrip("/")
