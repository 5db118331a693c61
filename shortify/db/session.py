"""Session management for database operations.

The engine and session factory live on ``app.state``; this module turns
them into a per-request FastAPI dependency.
"""

from typing import AsyncGenerator
import logging

from fastapi import Depends, Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

logger = logging.getLogger(__name__)


def get_session_factory(request: Request) -> async_sessionmaker:
    """Return the session factory the application was started with."""
    return request.app.state.session_factory


async def get_db(
    session_factory: async_sessionmaker = Depends(get_session_factory),
) -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for database sessions.

    Opens one session per request and closes it afterwards, rolling back
    anything left uncommitted.

    Yields:
        AsyncSession: A SQLAlchemy async session object.

    Example:
        ```python
        @router.get("/{short_code}")
        async def redirect(short_code: str, db: AsyncSession = Depends(get_db)):
            return await repository.lookup(db, short_code)
        ```
    """
    async with session_factory() as session:
        try:
            yield session
        except SQLAlchemyError:
            logger.exception("Database error during request session")
            await session.rollback()
            raise
