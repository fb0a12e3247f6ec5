"""
SQLAlchemy implementation of the Base Repository.
"""

from typing import Any, Generic, Optional, Type, TypeVar

import structlog
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from helpdesk.core.exceptions import PersistenceException, ValidationException
from helpdesk.domain.repositories.base import BaseRepository
from helpdesk.infrastructure.database import Base

ModelType = TypeVar("ModelType", bound=Base)

logger = structlog.get_logger(__name__)


class SQLAlchemyRepository(BaseRepository[ModelType], Generic[ModelType]):
    """Generic repository implementation for SQLAlchemy models."""

    def __init__(self, db: Session, model: Type[ModelType]):
        self.db = db
        self.model = model

    def get_by_id(self, id: int) -> Optional[ModelType]:
        return self.db.get(self.model, id)

    def exists(self, id: int) -> bool:
        return self.db.query(self.model.id).filter(self.model.id == id).first() is not None

    def create(self, db_obj: ModelType) -> ModelType:
        self.db.add(db_obj)
        self._commit("create")
        self.db.refresh(db_obj)
        return db_obj

    def save(self, db_obj: ModelType, operation: str = "save") -> ModelType:
        self.db.add(db_obj)
        self._commit(operation, entity_id=db_obj.id)
        self.db.refresh(db_obj)
        return db_obj

    def delete(self, db_obj: ModelType) -> None:
        entity_id = db_obj.id
        self.db.delete(db_obj)
        self._commit("delete", entity_id=entity_id)

    def _commit(self, operation: str, **context: Any) -> None:
        """Commit, translating store failures into application errors."""
        entity = self.model.__name__
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            logger.warning(
                "Integrity constraint violated",
                entity=entity, operation=operation, error=str(exc.orig), **context,
            )
            raise ValidationException(
                f"{entity} {operation} conflicts with existing data",
                details={"entity": entity, "operation": operation},
            ) from exc
        except StaleDataError as exc:
            self.db.rollback()
            logger.warning("Concurrent modification detected", entity=entity, operation=operation, **context)
            raise PersistenceException(
                "The record was changed by another request. Please try again."
            ) from exc
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("Database operation failed", entity=entity, operation=operation, **context)
            raise PersistenceException() from exc
