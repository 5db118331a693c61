"""Database base configuration for SQLAlchemy with SQLModel.

This module provides the async engine and session factory used by the
application. There is no module-level engine: the application factory
builds one (or receives one) and owns its lifecycle.
It includes:
- Engine configuration per environment
- Session factory construction
- Table creation
- Health check functionality
"""

from typing import Any, Dict, Optional
import asyncio
import logging

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool, StaticPool
from sqlalchemy.sql import text
from sqlmodel import SQLModel

from shortify.core.config import EnvironmentType, Settings, settings as default_settings

# Registers the tables on SQLModel.metadata
from shortify import models  # noqa: F401

logger = logging.getLogger(__name__)


def get_engine_config(settings: Settings) -> Dict[str, Any]:
    """Get the engine configuration for the configured database and environment.

    Args:
        settings: Application settings

    Returns:
        Dict: Keyword arguments for ``create_async_engine``.
    """
    config: Dict[str, Any] = {"echo": settings.DB_ECHO}

    if settings.is_sqlite:
        config["connect_args"] = {"check_same_thread": False}
        database = make_url(settings.DATABASE_URL).database
        if not database or database == ":memory:":
            # Every connection to :memory: is a new database, so share one
            config["poolclass"] = StaticPool
        return config

    if settings.ENVIRONMENT == EnvironmentType.TESTING:
        config["poolclass"] = NullPool
        return config

    config.update(
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_POOL_MAX_OVERFLOW,
        pool_timeout=settings.DB_POOL_TIMEOUT,
        pool_recycle=settings.DB_POOL_RECYCLE,
        pool_pre_ping=True,
    )
    return config


def get_engine(settings: Optional[Settings] = None) -> AsyncEngine:
    """Create and configure an async SQLAlchemy engine.

    Args:
        settings: Application settings, defaults to the module-level settings

    Returns:
        AsyncEngine: Configured SQLAlchemy async engine instance.
    """
    settings = settings or default_settings
    engine_url = make_url(settings.DATABASE_URL)

    logger.info(f"Creating database engine for {engine_url.render_as_string(hide_password=True)}")

    return create_async_engine(engine_url, **get_engine_config(settings))


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    """Build the async session factory bound to ``engine``."""
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


async def create_tables(engine: AsyncEngine) -> None:
    """Create any missing tables registered on SQLModel metadata."""
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    logger.info("Database tables are in place")


class DatabaseHealthCheck:
    """Health check functionality for the database connection."""

    @staticmethod
    async def check_connection(session_factory: async_sessionmaker) -> Dict:
        """Check database connectivity and return status.

        Args:
            session_factory: Session factory owned by the application

        Returns:
            Dict: Health check result containing status and latency information
        """
        loop = asyncio.get_running_loop()
        start_time = loop.time()
        status = "healthy"
        error_message = None
        latency_ms = 0

        try:
            async with session_factory() as session:
                await session.execute(text("SELECT 1"))
            latency_ms = int((loop.time() - start_time) * 1000)
        except Exception as e:
            status = "unhealthy"
            error_message = str(e)
            logger.error(f"Database health check failed: {e}")

        return {
            "status": status,
            "latency_ms": latency_ms,
            "error": error_message,
        }
