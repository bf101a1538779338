# backend/app/services/conflict_checker.py
"""
Conflict Checker Service for the mentorship booking platform.

Handles booking conflict detection and temporal validation:
- Checking if a proposed session overlaps an existing non-cancelled booking
- Rejecting sessions that do not start in the future
- Listing a mentor's booked intervals for a day

All checks work in UTC-instant space using the half-open overlap rule, so a
session ending at 11:00 never conflicts with one starting at 11:00.
"""

from datetime import date, datetime
import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from ..core.exceptions import PastSessionException
from ..core.timezone_utils import utc_day_bounds, utc_now
from ..domain.time_slots import SessionInterval, ensure_utc, range_from_session
from ..repositories import RepositoryFactory
from ..repositories.booking_repository import BookingRepository
from .base import BaseService

logger = logging.getLogger(__name__)


class ConflictChecker(BaseService):
    """
    Service for checking booking conflicts and time validation.

    Duration is always a parameter; callers pass the booking's own length.
    """

    def __init__(self, db: Session, repository: Optional[BookingRepository] = None):
        """
        Initialize conflict checker service.

        Args:
            db: Database session
            repository: Optional BookingRepository instance
        """
        super().__init__(db)
        self.logger = logging.getLogger(__name__)
        self.repository = repository or RepositoryFactory.create_booking_repository(db)

    @BaseService.measure_operation("has_conflict")
    def has_conflict(
        self,
        mentor_id: str,
        proposed_start: datetime,
        duration_minutes: int,
        exclude_booking_id: Optional[str] = None,
    ) -> bool:
        """
        Check if ``[proposed_start, proposed_start + duration)`` overlaps a booking.

        Args:
            mentor_id: The mentor to check
            proposed_start: Session start (naive values are UTC)
            duration_minutes: Length of the proposed session
            exclude_booking_id: Optional booking to ignore

        Returns:
            True if any non-cancelled booking strictly overlaps
        """
        interval = range_from_session(proposed_start, duration_minutes)
        conflict = self.repository.has_overlapping_booking(
            mentor_id, interval.start, interval.end, exclude_booking_id
        )
        if conflict:
            self.logger.warning(
                f"Booking conflict for mentor {mentor_id} at "
                f"{interval.start.isoformat()} ({duration_minutes} min)"
            )
        return conflict

    def ensure_future(self, session_start: datetime, now: Optional[datetime] = None) -> datetime:
        """
        Require ``session_start`` to be strictly after ``now``.

        Returns:
            The session start normalised to UTC

        Raises:
            PastSessionException: if the session starts now or earlier
        """
        start = ensure_utc(session_start)
        reference = ensure_utc(now) if now is not None else utc_now()
        if start <= reference:
            raise PastSessionException(start.isoformat())
        return start

    @BaseService.measure_operation("get_booked_times")
    def get_booked_times(self, mentor_id: str, day: date) -> List[Dict[str, Any]]:
        """
        Non-cancelled bookings starting within the UTC calendar ``day``.

        Returns:
            ``[{"session_start": datetime, "duration_minutes": int}, ...]`` by start
        """
        start, end = utc_day_bounds(day)
        bookings = self.repository.get_starting_between(mentor_id, start, end)
        return [
            {"session_start": booking.session_start, "duration_minutes": booking.duration_minutes}
            for booking in bookings
        ]

    def get_busy_intervals(self, mentor_id: str, window: SessionInterval) -> List[SessionInterval]:
        """Occupied intervals of the mentor intersecting ``window``."""
        return [
            booking.interval
            for booking in self.repository.get_overlapping_bookings(
                mentor_id, window.start, window.end
            )
        ]
