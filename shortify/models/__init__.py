"""
Data models for the URL shortener service.

Importing this package registers every table with SQLModel metadata.
"""

from sqlmodel import SQLModel

from shortify.models.short_link import ShortLink

__all__ = [
    "SQLModel",
    "ShortLink",
]
