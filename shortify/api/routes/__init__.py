"""Routes package initialization.

This module assembles the route collection for the application.
"""

from fastapi import APIRouter

from shortify.api.routes import health, redirect, shortener


def build_api_router(api_prefix: str) -> APIRouter:
    """Create the root router with every route mounted.

    The redirect routes catch any single path segment, so they go last.
    """
    api_router = APIRouter()

    api_router.include_router(health.probe_router)
    api_router.include_router(shortener.router, prefix=api_prefix)
    api_router.include_router(health.router, prefix=api_prefix)

    # Short links live directly at /{short_code}
    api_router.include_router(redirect.router)

    return api_router


__all__ = ["build_api_router"]
