"""Base repository implementation for the URL shortener service.

This module provides a generic BaseRepository class that follows the Repository pattern
for database operations, along with the error types every repository raises.
"""

from typing import Any, Dict, Generic, Type, TypeVar
import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel

# Type variable for model types
T = TypeVar("T", bound=SQLModel)

# Errors that mean the store could not be reached or did not answer
STORE_ERRORS = (SQLAlchemyError, OSError)

logger = logging.getLogger(__name__)


class RepositoryError(Exception):
    """Base exception for repository errors."""
    pass


class StoreUnavailableError(RepositoryError):
    """The database could not complete the operation (connection or driver fault)."""
    pass


class DuplicateKeyError(RepositoryError):
    """Exception raised when a unique constraint is violated."""

    def __init__(self, model_type: Type[SQLModel], field_name: str, value: Any):
        self.model_type = model_type
        self.field_name = field_name
        self.value = value
        model_name = getattr(model_type, "__name__", "Entity")
        super().__init__(f"{model_name} with {field_name}={value} already exists")


def is_unique_violation(error: IntegrityError) -> bool:
    """Tell a unique-constraint violation apart from other integrity errors."""
    message = str(error.orig if error.orig is not None else error).lower()
    return "unique" in message or "duplicate key" in message


class BaseRepository(Generic[T]):
    """
    Base repository with the operations every entity needs.

    Each write commits on its own: a request performs at most one write,
    so there is no outer transaction to join.

    Type parameters:
        T: The SQLModel type this repository manages
    """

    def __init__(self, model_type: Type[T]):
        """
        Initialize the repository with a specific model type.

        Args:
            model_type: The SQLModel class this repository will work with
        """
        self.model_type = model_type

    async def insert(self, db: AsyncSession, data: Dict[str, Any]) -> T:
        """
        Insert and commit a new entity.

        Args:
            db: Database session
            data: Column values for the new row

        Returns:
            The created entity

        Raises:
            IntegrityError: When a constraint rejects the row (session rolled back)
            StoreUnavailableError: On any other database error
        """
        entity = self.model_type(**data)
        db.add(entity)
        try:
            await db.commit()
        except IntegrityError:
            await self._rollback(db)
            raise
        except STORE_ERRORS as e:
            logger.error(f"Error creating {self.model_type.__name__}: {e}")
            await self._rollback(db)
            raise StoreUnavailableError(f"Database error creating entity: {e}") from e
        return entity

    async def _rollback(self, db: AsyncSession) -> None:
        # A dead connection can fail the rollback too; the original error wins.
        try:
            await db.rollback()
        except STORE_ERRORS as e:
            logger.warning(f"Rollback failed after database error: {e}")
