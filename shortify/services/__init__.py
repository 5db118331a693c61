"""Service layer for the URL shortener application.

Services orchestrate repositories and hold the short link business rules.
"""

from shortify.services.codegen import generate_short_code
from shortify.services.shortener import ShortLinkService

__all__ = ["ShortLinkService", "generate_short_code"]
