"""API package for the URL shortener service.

This package contains the API layer components including routes,
request/response schemas, and dependency providers.
"""

from shortify.api.routes import build_api_router

__all__ = ["build_api_router"]
