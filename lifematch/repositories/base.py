"""Base repository class for database operations."""
import logging
from typing import Any, Generic, List, Optional, Type, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.expression import Select

from lifematch.core.exceptions import ConflictError, DatabaseError
from lifematch.models.base import Base

logger = logging.getLogger(__name__)

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Base repository with common database operations."""

    def __init__(self, model: Type[ModelType], session: AsyncSession) -> None:
        """Initialize repository.

        Args:
            model: SQLAlchemy model class
            session: SQLAlchemy async session
        """
        self.model = model
        self.session = session

    async def get(self, key: Any) -> Optional[ModelType]:
        """Get model by primary key.

        Args:
            key: Primary key value

        Returns:
            Model instance if found, None otherwise

        Raises:
            DatabaseError: If database operation fails
        """
        try:
            return await self.session.get(self.model, key)
        except SQLAlchemyError as e:
            logger.error("Error getting %s with key %s: %s", self.model.__name__, key, str(e))
            raise DatabaseError(
                message=f"Failed to get {self.model.__name__}",
                context={"primary_key": key},
                original_error=e,
            ) from e

    async def list(self, query: Optional[Select] = None) -> List[ModelType]:
        """Run a select and return every row.

        Args:
            query: Optional custom query to execute

        Returns:
            List of model instances
        """
        if query is None:
            query = select(self.model)
        try:
            result = await self.session.execute(query)
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error("Error listing %s: %s", self.model.__name__, str(e))
            raise DatabaseError(
                message=f"Failed to list {self.model.__name__}",
                original_error=e,
            ) from e

    async def create(self, **kwargs: Any) -> ModelType:
        """Create new model instance.

        Args:
            **kwargs: Model attribute values

        Returns:
            Created model instance

        Raises:
            ConflictError: If a uniqueness constraint rejects the row
            DatabaseError: If database operation fails
        """
        db_obj = self.model(**kwargs)
        self.session.add(db_obj)
        await self._flush(f"create {self.model.__name__}")
        return db_obj

    async def update(self, db_obj: ModelType, **kwargs: Any) -> ModelType:
        """Update model instance.

        Args:
            db_obj: Model instance to update
            **kwargs: New attribute values

        Returns:
            Updated model instance
        """
        for key, value in kwargs.items():
            setattr(db_obj, key, value)
        await self._flush(f"update {self.model.__name__}")
        return db_obj

    async def delete(self, db_obj: ModelType) -> None:
        """Delete model instance.

        Args:
            db_obj: Model instance to delete
        """
        await self.session.delete(db_obj)
        await self._flush(f"delete {self.model.__name__}")

    async def _flush(self, action: str) -> None:
        try:
            await self.session.flush()
        except IntegrityError as e:
            logger.warning("Integrity error during %s: %s", action, str(e.orig))
            raise ConflictError(
                f"Could not {action}: duplicate entry",
                context={"action": action},
                original_error=e,
            ) from e
        except SQLAlchemyError as e:
            logger.error("Error during %s: %s", action, str(e))
            raise DatabaseError(
                message=f"Failed to {action}",
                context={"action": action},
                original_error=e,
            ) from e
