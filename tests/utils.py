"""Test utilities for URL shortener tests."""

import random
import string
from datetime import datetime
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from shortify.core.config import Settings
from shortify.models.short_link import ShortLink

TEST_BASE_URL = "http://sho.rt"

# Test database URL - using SQLite in-memory
TEST_SQLALCHEMY_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


def make_test_settings(**overrides) -> Settings:
    """Settings isolated from the developer's environment and .env file."""
    values = dict(
        ENVIRONMENT="testing",
        DATABASE_URL=TEST_SQLALCHEMY_DATABASE_URL,
        DB_CREATE_TABLES=False,
        BASE_URL=TEST_BASE_URL,
        LOG_LEVEL="WARNING",
    )
    values.update(overrides)
    return Settings(_env_file=None, **values)


def random_string(length: int = 10) -> str:
    """Generate a random alphanumeric string."""
    return "".join(random.choice(string.ascii_letters + string.digits) for _ in range(length))


def random_url() -> str:
    """Generate a random URL for testing."""
    domain = f"{random_string(8)}.com"
    path = random_string(12)
    return f"https://{domain}/{path}"


async def create_test_link(
    db: AsyncSession,
    short_code: Optional[str] = None,
    long_url: Optional[str] = None,
    is_custom: bool = False,
    expires_at: Optional[datetime] = None,
) -> ShortLink:
    """Create and commit a ShortLink directly, bypassing the repository."""
    link = ShortLink(
        short_code=short_code or random_string(6),
        long_url=long_url or random_url(),
        is_custom=is_custom,
        expires_at=expires_at,
    )
    db.add(link)
    await db.commit()
    return link


async def count_links(db: AsyncSession) -> int:
    result = await db.execute(select(func.count()).select_from(ShortLink))
    return result.scalar_one()
