# backend/app/repositories/mentor_service_repository.py
"""
Mentor Service Repository for the mentorship booking platform.

Handles the priced offerings of each mentor. The service layer replaces a
mentor's whole list at once (delete then insert, same transaction).
"""

import logging
from typing import Any, Dict, List, Optional, Sequence, cast

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.exceptions import RepositoryException
from ..models.mentor_service import MentorService
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class MentorServiceRepository(BaseRepository[MentorService]):
    """Repository for MentorService rows."""

    def __init__(self, db: Session):
        super().__init__(db, MentorService)
        self.logger = logging.getLogger(__name__)

    def list_for_mentor(self, mentor_id: str) -> List[MentorService]:
        """All services of a mentor, newest first."""
        try:
            return cast(
                List[MentorService],
                self.db.query(MentorService)
                .filter(MentorService.mentor_id == mentor_id)
                .order_by(MentorService.created_at.desc(), MentorService.id.desc())
                .all(),
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error listing services for mentor {mentor_id}: {str(e)}")
            raise RepositoryException(f"Failed to list services: {str(e)}")

    def get_for_mentor(self, service_id: str, mentor_id: str) -> Optional[MentorService]:
        """A service only if it belongs to the given mentor."""
        try:
            return cast(
                Optional[MentorService],
                self.db.query(MentorService)
                .filter(MentorService.id == service_id, MentorService.mentor_id == mentor_id)
                .first(),
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error getting service {service_id}: {str(e)}")
            raise RepositoryException(f"Failed to retrieve service: {str(e)}")

    def delete_for_mentor(self, mentor_id: str) -> int:
        """Delete every service of a mentor; returns the number of rows removed."""
        try:
            deleted = (
                self.db.query(MentorService)
                .filter(MentorService.mentor_id == mentor_id)
                .delete(synchronize_session="fetch")
            )
            self.db.flush()
            return int(deleted or 0)
        except SQLAlchemyError as e:
            self.logger.error(f"Error deleting services for mentor {mentor_id}: {str(e)}")
            raise RepositoryException(f"Failed to delete services: {str(e)}")

    def create_many(self, mentor_id: str, rows: Sequence[Dict[str, Any]]) -> List[MentorService]:
        """Insert services for a mentor in one flush."""
        if not rows:
            return []
        return self.bulk_create([{**row, "mentor_id": mentor_id} for row in rows])
