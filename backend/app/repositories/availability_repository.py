# backend/app/repositories/availability_repository.py
"""
Availability Repository for the mentorship booking platform.

Stores one weekly schedule document per mentor. Writes are
insert-or-replace keyed by mentor id; concurrent writers are not ordered and
the last commit wins.
"""

import logging
from typing import Any, Dict, Optional, cast

from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
import ulid

from ..core.exceptions import RepositoryException
from ..models.availability import MentorAvailability
from ..models.types import now_utc
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class AvailabilityRepository(BaseRepository[MentorAvailability]):
    """Repository for mentor weekly schedules."""

    def __init__(self, db: Session):
        super().__init__(db, MentorAvailability)
        self.logger = logging.getLogger(__name__)

    def get_for_mentor(self, mentor_id: str) -> Optional[MentorAvailability]:
        """Stored availability for a mentor, or None when never saved."""
        try:
            return cast(
                Optional[MentorAvailability],
                self.db.query(MentorAvailability)
                .filter(MentorAvailability.mentor_id == mentor_id)
                .populate_existing()
                .first(),
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error getting availability for mentor {mentor_id}: {str(e)}")
            raise RepositoryException(f"Failed to retrieve availability: {str(e)}")

    def upsert(
        self, mentor_id: str, timezone: str, schedule: Dict[str, Any]
    ) -> MentorAvailability:
        """
        Insert or fully replace the mentor's availability document.

        Uses ``INSERT ... ON CONFLICT (mentor_id) DO UPDATE`` on PostgreSQL and
        SQLite; other dialects fall back to select-then-write.
        """
        now = now_utc()
        values = {
            "id": str(ulid.ULID()),
            "mentor_id": mentor_id,
            "timezone": timezone,
            "schedule": schedule,
            "created_at": now,
            "updated_at": now,
        }
        dialect = self.dialect_name

        try:
            if dialect in ("postgresql", "sqlite"):
                insert_fn = pg_insert if dialect == "postgresql" else sqlite_insert
                stmt = insert_fn(MentorAvailability).values(**values)
                stmt = stmt.on_conflict_do_update(
                    index_elements=[MentorAvailability.mentor_id],
                    set_={
                        "timezone": stmt.excluded.timezone,
                        "schedule": stmt.excluded.schedule,
                        "updated_at": stmt.excluded.updated_at,
                    },
                )
                self.db.execute(stmt)
                self.db.flush()
            else:
                existing = self.get_for_mentor(mentor_id)
                if existing is None:
                    self.db.add(MentorAvailability(**values))
                else:
                    existing.timezone = timezone
                    existing.schedule = schedule
                    existing.updated_at = now
                self.db.flush()
        except IntegrityError:
            raise
        except SQLAlchemyError as e:
            self.logger.error(f"Error upserting availability for mentor {mentor_id}: {str(e)}")
            raise RepositoryException(f"Failed to save availability: {str(e)}")

        saved = self.get_for_mentor(mentor_id)
        if saved is None:
            raise RepositoryException(f"Availability for mentor {mentor_id} missing after upsert")
        return saved
