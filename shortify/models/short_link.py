"""Short link data model.

This module defines the ShortLink model for storing shortened URLs in the database.
"""
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel

MAX_URL_LENGTH = 2048
MAX_SHORT_CODE_LENGTH = 30


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ShortLinkBase(SQLModel):
    """Base model for short link data."""

    short_code: str = Field(
        max_length=MAX_SHORT_CODE_LENGTH,
        unique=True,  # Creates the unique constraint the store arbitrates on
        description="Unique code for the shortened URL",
    )
    long_url: str = Field(
        max_length=MAX_URL_LENGTH,
        description="The original (long) URL to redirect to",
    )
    is_custom: bool = Field(
        default=False,
        description="Whether the short code was supplied by the caller",
    )
    expires_at: Optional[datetime] = Field(
        default=None,
        sa_type=DateTime(timezone=True),
        description="Requested expiry; stored but not checked on read",
    )


class ShortLink(ShortLinkBase, table=True):
    """
    Short link model for storing shortened URLs in the database.

    Rows are inserted once and never updated. The short_code column is
    what the redirect route looks up.
    """

    __tablename__ = "short_links"

    id: Optional[int] = Field(default=None, primary_key=True)
    created_at: datetime = Field(
        default_factory=utcnow,
        sa_type=DateTime(timezone=True),
        nullable=False,
        description="Timestamp when this short link was created",
    )
