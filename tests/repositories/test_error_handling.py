"""Tests for repository error handling."""

from unittest.mock import patch

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError

from shortify.repositories.base import (
    DuplicateKeyError,
    StoreUnavailableError,
    is_unique_violation,
)
from shortify.repositories.short_link_repository import ShortLinkRepository
from tests.utils import count_links, random_url


@pytest.mark.repository
class TestRepositoryErrorHandling:
    """Tests for error handling in the repository."""

    @pytest.fixture
    def repository(self):
        return ShortLinkRepository()

    @pytest.mark.asyncio
    async def test_lookup_database_error(self, test_db, repository):
        with patch.object(test_db, "execute", side_effect=SQLAlchemyError("Test database error")):
            with pytest.raises(StoreUnavailableError) as excinfo:
                await repository.lookup(test_db, "errortest")

        assert "Test database error" in str(excinfo.value)

    @pytest.mark.asyncio
    async def test_lookup_connection_refused(self, test_db, repository):
        with patch.object(test_db, "execute", side_effect=ConnectionRefusedError("refused")):
            with pytest.raises(StoreUnavailableError):
                await repository.lookup(test_db, "errortest")

    @pytest.mark.asyncio
    async def test_get_by_short_code_database_error(self, test_db, repository):
        with patch.object(test_db, "execute", side_effect=SQLAlchemyError("boom")):
            with pytest.raises(StoreUnavailableError):
                await repository.get_by_short_code(test_db, "errortest")

    @pytest.mark.asyncio
    async def test_create_transport_error(self, test_db, repository):
        error = OperationalError("INSERT INTO short_links", {}, Exception("connection lost"))

        with patch.object(test_db, "commit", side_effect=error):
            with pytest.raises(StoreUnavailableError) as excinfo:
                await repository.create(test_db, short_code="down", long_url=random_url())

        assert not isinstance(excinfo.value, DuplicateKeyError)
        assert await count_links(test_db) == 0

    @pytest.mark.asyncio
    async def test_create_non_unique_integrity_error(self, test_db, repository):
        error = IntegrityError("INSERT INTO short_links", {}, Exception("NOT NULL constraint failed: short_links.long_url"))

        with patch.object(test_db, "commit", side_effect=error):
            with pytest.raises(StoreUnavailableError) as excinfo:
                await repository.create(test_db, short_code="notnull", long_url=random_url())

        assert not isinstance(excinfo.value, DuplicateKeyError)

    @pytest.mark.asyncio
    async def test_failed_rollback_keeps_original_error(self, test_db, repository):
        error = OperationalError("INSERT INTO short_links", {}, Exception("connection lost"))

        with patch.object(test_db, "commit", side_effect=error), \
                patch.object(test_db, "rollback", side_effect=OperationalError("ROLLBACK", {}, Exception("gone"))):
            with pytest.raises(StoreUnavailableError) as excinfo:
                await repository.create(test_db, short_code="down2", long_url=random_url())

        assert "connection lost" in str(excinfo.value)


@pytest.mark.parametrize(
    "message, expected",
    [
        ("UNIQUE constraint failed: short_links.short_code", True),
        ('duplicate key value violates unique constraint "short_links_short_code_key"', True),
        ("NOT NULL constraint failed: short_links.long_url", False),
        ("FOREIGN KEY constraint failed", False),
    ],
)
def test_is_unique_violation(message, expected):
    error = IntegrityError("INSERT", {}, Exception(message))
    assert is_unique_violation(error) is expected
