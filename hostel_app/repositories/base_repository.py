"""
Base repository with standardized CRUD operations and error translation.

SQLAlchemy failures never leave this layer raw: integrity violations become
``ConflictError`` and everything else becomes ``DatabaseError``.
"""

from typing import Generic, List, Optional, Type, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from hostel_app.core.exceptions import ConflictError, DatabaseError
from hostel_app.core.logging import get_logger
from hostel_app.db.base import Base

logger = get_logger(__name__)

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Base repository with standardized operations.
    """

    def __init__(self, model: Type[ModelType], db: Session):
        """
        Initialize repository.

        Args:
            model: SQLAlchemy model class
            db: Database session
        """
        self.model = model
        self.db = db

    # ==================== Transaction Management ====================

    def commit(self) -> None:
        """Commit current transaction."""
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise ConflictError(f"{self.model.__name__} conflicts with existing data") from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Commit failed: {e}", exc_info=True)
            raise DatabaseError() from e

    def rollback(self) -> None:
        """Rollback current transaction."""
        self.db.rollback()

    # ==================== Create Operations ====================

    def create(self, entity: ModelType, commit: bool = True) -> ModelType:
        """
        Persist a new entity.

        Args:
            entity: Entity to create
            commit: Whether to commit immediately

        Returns:
            Created entity

        Raises:
            ConflictError: If a unique constraint is violated
            DatabaseError: If the store fails
        """
        try:
            self.db.add(entity)
            if commit:
                self.db.commit()
            else:
                self.db.flush()
        except IntegrityError as e:
            self.db.rollback()
            raise ConflictError(f"{self.model.__name__} already exists") from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Create failed: {e}", exc_info=True)
            raise DatabaseError() from e

        logger.debug(f"Created {self.model.__name__} with id: {entity.id}")
        return entity

    # ==================== Read Operations ====================

    def get_by_id(self, entity_id: str) -> Optional[ModelType]:
        """Get entity by primary key."""
        try:
            return self.db.get(self.model, entity_id)
        except SQLAlchemyError as e:
            logger.error(f"Get by id failed: {e}", exc_info=True)
            raise DatabaseError() from e

    def find_all(self, *criteria, order_by=None) -> List[ModelType]:
        """List entities matching the given criteria."""
        query = select(self.model).where(*criteria)
        if order_by is not None:
            query = query.order_by(*order_by)
        try:
            return list(self.db.scalars(query).all())
        except SQLAlchemyError as e:
            logger.error(f"List failed: {e}", exc_info=True)
            raise DatabaseError() from e

    def find_one(self, *criteria) -> Optional[ModelType]:
        """Return the first entity matching the given criteria."""
        try:
            return self.db.scalars(select(self.model).where(*criteria).limit(1)).first()
        except SQLAlchemyError as e:
            logger.error(f"Lookup failed: {e}", exc_info=True)
            raise DatabaseError() from e

    # ==================== Delete Operations ====================

    def delete(self, entity: ModelType, commit: bool = True) -> None:
        """Hard-delete an entity."""
        try:
            self.db.delete(entity)
            if commit:
                self.db.commit()
            else:
                self.db.flush()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Delete failed: {e}", exc_info=True)
            raise DatabaseError() from e
