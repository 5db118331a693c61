"""Test fixtures for the URL shortener service."""

from typing import AsyncGenerator

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

from shortify.core.config import Settings
from shortify.db.base import build_session_factory
from shortify.main import create_app
# Import models to ensure they're registered with SQLModel metadata
from shortify.models.short_link import ShortLink  # noqa: F401
from tests.utils import TEST_SQLALCHEMY_DATABASE_URL, make_test_settings


@pytest.fixture
def test_settings() -> Settings:
    return make_test_settings()


@pytest_asyncio.fixture
async def test_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create a fresh in-memory SQLite database for each test."""
    engine = create_async_engine(
        TEST_SQLALCHEMY_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def test_db(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a database session on the test engine."""
    async with build_session_factory(test_engine)() as session:
        yield session


@pytest.fixture
def test_app(test_settings, test_engine) -> FastAPI:
    """Create the application bound to the test engine."""
    app = create_app(settings=test_settings, engine=test_engine)
    yield app
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(test_app) -> AsyncGenerator[httpx.AsyncClient, None]:
    """Return an HTTP client that calls the application in-process."""
    transport = httpx.ASGITransport(app=test_app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as test_client:
        yield test_client
