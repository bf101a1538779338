# backend/app/repositories/base_repository.py
"""
Base Repository Pattern for the mentorship booking platform.

Repositories never commit on their own. They flush so generated ids and
constraint violations surface inside the caller's unit of work; the
``transaction()`` helper is for insert paths that must observe an
``IntegrityError`` themselves (booking creation, service replacement).
"""

from abc import ABC, abstractmethod
from contextlib import contextmanager
import logging
from typing import Any, Dict, Generic, Iterator, List, Optional, Type, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.database.session_utils import get_dialect_name

from ..core.exceptions import RepositoryException

T = TypeVar("T")

logger = logging.getLogger(__name__)


class IRepository(ABC, Generic[T]):
    """Data access contract shared by every repository."""

    @abstractmethod
    def get_by_id(self, id: str) -> Optional[T]:
        """Entity with this primary key, or None."""

    @abstractmethod
    def create(self, **kwargs: Any) -> T:
        """
        Insert a new entity and flush it.

        Raises:
            IntegrityError: If a database constraint rejects the row
            RepositoryException: If the insert fails for any other reason
        """


class BaseRepository(IRepository[T]):
    """
    Generic SQLAlchemy implementation of ``IRepository``.

    Attributes:
        db: Session owned by the service layer
        model: Mapped class this repository reads and writes
    """

    def __init__(self, db: Session, model: Type[T]):
        self.db = db
        self.model = model
        self.logger = logging.getLogger(f"{__name__}.{model.__name__}")

    @property
    def dialect_name(self) -> str:
        return get_dialect_name(self.db)

    @contextmanager
    def transaction(self) -> Iterator[Session]:
        """Commit on success; roll back and re-raise the original error otherwise."""
        try:
            yield self.db
            self.db.commit()
        except SQLAlchemyError as exc:
            self.logger.error("Repository transaction failed: %s", exc)
            self.db.rollback()
            raise
        except Exception:
            self.db.rollback()
            raise

    def _failure(self, action: str, exc: SQLAlchemyError) -> RepositoryException:
        self.logger.error("Error %s %s: %s", action, self.model.__name__, exc)
        return RepositoryException(f"Failed to {action} {self.model.__name__}: {exc}")

    def get_by_id(self, id: str) -> Optional[T]:
        try:
            return self.db.get(self.model, id)
        except SQLAlchemyError as e:
            raise self._failure("load", e) from e

    def create(self, **kwargs: Any) -> T:
        try:
            entity = self.model(**kwargs)
            self.db.add(entity)
            self.db.flush()
            return entity
        except IntegrityError:
            raise
        except SQLAlchemyError as e:
            raise self._failure("create", e) from e

    def bulk_create(self, rows: List[Dict[str, Any]]) -> List[T]:
        """Insert several entities with a single flush."""
        try:
            entities = [self.model(**row) for row in rows]
            self.db.add_all(entities)
            self.db.flush()
            return entities
        except IntegrityError:
            raise
        except SQLAlchemyError as e:
            raise self._failure("bulk create", e) from e
