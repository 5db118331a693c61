"""Basic tests to verify test DB setup."""

import pytest
from sqlalchemy import select, text

from shortify.models.short_link import ShortLink


@pytest.mark.asyncio
async def test_table_exists(test_engine):
    """Verify the short_links table exists in the database."""
    async with test_engine.connect() as conn:
        result = await conn.execute(text("SELECT name FROM sqlite_master WHERE type='table'"))
        tables = [row[0] for row in result.fetchall()]

    assert "short_links" in tables


@pytest.mark.asyncio
async def test_short_code_has_unique_index(test_engine):
    """The unique constraint on short_code is what arbitrates duplicate inserts."""
    async with test_engine.connect() as conn:
        result = await conn.execute(text("PRAGMA index_list('short_links')"))
        unique_indexes = [row[1] for row in result.fetchall() if row[2] == 1]

        columns = []
        for index_name in unique_indexes:
            info = await conn.execute(text(f"PRAGMA index_info('{index_name}')"))
            columns.extend(row[2] for row in info.fetchall())

    assert "short_code" in columns


@pytest.mark.asyncio
async def test_create_and_read_row(test_db):
    link = ShortLink(short_code="setup1", long_url="https://example.com")
    test_db.add(link)
    await test_db.commit()

    result = await test_db.execute(select(ShortLink).where(ShortLink.short_code == "setup1"))
    retrieved = result.scalars().first()

    assert retrieved is not None
    assert retrieved.long_url == "https://example.com"
    assert retrieved.is_custom is False
    assert retrieved.expires_at is None
    assert retrieved.created_at is not None
