# backend/app/repositories/booking_repository.py
"""
Booking Repository for the mentorship booking platform.

Implements all data access operations for booking management. Every query
that reasons about occupied time ignores both cancelled variants; no-shows
and completed sessions still occupy their slot.
"""

from datetime import datetime
import logging
from typing import List, Optional, cast

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.exceptions import RepositoryException
from ..models.booking import CANCELLED_STATUSES, Booking
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)

_CANCELLED_VALUES = [status.value for status in CANCELLED_STATUSES]


class BookingRepository(BaseRepository[Booking]):
    """
    Repository for Booking data access.

    Conflict queries compare the stored ``[session_start, session_end)``
    columns, so they are the same SQL on SQLite and PostgreSQL.
    """

    def __init__(self, db: Session):
        super().__init__(db, Booking)
        self.logger = logging.getLogger(__name__)

    def _active_for_mentor(self, mentor_id: str):
        return self.db.query(Booking).filter(
            Booking.mentor_id == mentor_id,
            Booking.status.notin_(_CANCELLED_VALUES),
        )

    def has_overlapping_booking(
        self,
        mentor_id: str,
        start: datetime,
        end: datetime,
        exclude_booking_id: Optional[str] = None,
    ) -> bool:
        """
        True if any non-cancelled booking of the mentor strictly overlaps ``[start, end)``.

        Touching intervals (existing end == start) are not conflicts.
        """
        try:
            query = self._active_for_mentor(mentor_id).filter(
                Booking.session_start < end,
                Booking.session_end > start,
            )
            if exclude_booking_id:
                query = query.filter(Booking.id != exclude_booking_id)
            return query.first() is not None
        except SQLAlchemyError as e:
            self.logger.error(f"Error checking time conflict: {str(e)}")
            raise RepositoryException(f"Failed to check conflict: {str(e)}")

    def get_overlapping_bookings(
        self, mentor_id: str, start: datetime, end: datetime
    ) -> List[Booking]:
        """Non-cancelled bookings of the mentor intersecting ``[start, end)``, by start."""
        try:
            return cast(
                List[Booking],
                self._active_for_mentor(mentor_id)
                .filter(Booking.session_start < end, Booking.session_end > start)
                .order_by(Booking.session_start)
                .all(),
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error getting bookings by time range: {str(e)}")
            raise RepositoryException(f"Failed to get bookings by time: {str(e)}")

    def get_starting_between(
        self, mentor_id: str, start: datetime, end: datetime
    ) -> List[Booking]:
        """Non-cancelled bookings whose session starts in ``[start, end)``, by start."""
        try:
            return cast(
                List[Booking],
                self._active_for_mentor(mentor_id)
                .filter(Booking.session_start >= start, Booking.session_start < end)
                .order_by(Booking.session_start)
                .all(),
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error getting booked times for mentor {mentor_id}: {str(e)}")
            raise RepositoryException(f"Failed to get booked times: {str(e)}")

    def has_active_booking_between(self, student_id: str, mentor_id: str) -> bool:
        """True if the student holds any non-cancelled booking with the mentor."""
        try:
            return (
                self._active_for_mentor(mentor_id)
                .filter(Booking.student_id == student_id)
                .first()
                is not None
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error checking student/mentor booking: {str(e)}")
            raise RepositoryException(f"Failed to check booking: {str(e)}")

    def get_for_update(self, booking_id: str) -> Optional[Booking]:
        """Load a booking row-locked for a status change (lock is a no-op on SQLite)."""
        try:
            return cast(
                Optional[Booking],
                self.db.query(Booking)
                .filter(Booking.id == booking_id)
                .populate_existing()
                .with_for_update()
                .first(),
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error loading booking {booking_id}: {str(e)}")
            raise RepositoryException(f"Failed to retrieve booking: {str(e)}")
