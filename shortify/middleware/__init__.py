"""HTTP middleware for the URL shortener service."""

from shortify.middleware.logging import RequestLoggingMiddleware

__all__ = ["RequestLoggingMiddleware"]
