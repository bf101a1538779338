# backend/app/services/availability_service.py
"""
Availability Service for the mentorship booking platform.

This service handles the mentor's recurring weekly schedule:
- validating and saving it (insert-or-replace, last writer wins)
- reading it for the public profile and the mentor dashboard
- expanding it into concrete bookable UTC slots for a given date
"""

from __future__ import annotations

from datetime import date, datetime
import logging
from typing import TYPE_CHECKING, Any, List, NamedTuple, Optional

from sqlalchemy.orm import Session

from ..core.config import settings
from ..core.enums import Weekday
from ..core.exceptions import (
    BusinessRuleException,
    MentorNotFoundException,
    RepositoryException,
    ScheduleValidationException,
    ServiceException,
    ValidationException,
)
from ..core.timezone_utils import is_known_timezone, local_to_utc, utc_now
from ..domain.schedule import WeeklySchedule, validate_timezone, validate_weekly_schedule
from ..domain.time_slots import SessionInterval
from ..models.availability import MentorAvailability
from ..repositories.factory import RepositoryFactory
from .base import BaseService
from .conflict_checker import ConflictChecker

if TYPE_CHECKING:
    from ..repositories.availability_repository import AvailabilityRepository
    from ..repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)


class AvailabilityView(NamedTuple):
    """Schedule as shown to its owner on the dashboard."""

    timezone: Optional[str]
    schedule: WeeklySchedule
    updated_at: Optional[datetime]
    requires_timezone: bool


class AvailabilityService(BaseService):
    """Service for mentor weekly availability."""

    def __init__(
        self,
        db: Session,
        repository: Optional["AvailabilityRepository"] = None,
        user_repository: Optional["UserRepository"] = None,
        conflict_checker: Optional[ConflictChecker] = None,
    ):
        super().__init__(db)
        self.logger = logging.getLogger(__name__)
        self.repository = repository or RepositoryFactory.create_availability_repository(db)
        self.user_repository = user_repository or RepositoryFactory.create_user_repository(db)
        self.conflict_checker = conflict_checker or ConflictChecker(db)

    def _require_mentor(self, mentor_id: str) -> None:
        if self.user_repository.get_mentor(mentor_id) is None:
            raise MentorNotFoundException(mentor_id)

    def _read_schedule(self, record: MentorAvailability) -> WeeklySchedule:
        try:
            return record.weekly_schedule
        except ScheduleValidationException as exc:
            # Rows are validated on write; a bad row means the column was edited out of band
            self.logger.error(
                f"Stored availability for mentor {record.mentor_id} is invalid: {exc.message}"
            )
            raise ServiceException(
                "Stored availability is corrupted", code="CORRUPT_AVAILABILITY"
            ) from exc

    @BaseService.measure_operation("save_availability")
    def save_availability(
        self, mentor_id: str, timezone: Any, schedule: Any
    ) -> MentorAvailability:
        """
        Validate and store the mentor's full weekly schedule.

        Validation runs before the store is touched: the timezone first, then
        the schedule, raising the first violation as ``ScheduleValidationException``.
        The saved document is the normalised form (slots sorted by start,
        every weekday present).
        """
        if not timezone or schedule is None:
            raise ValidationException(
                "Timezone and schedule are required", code="MISSING_REQUIRED_FIELDS"
            )
        tz_name = validate_timezone(timezone)
        normalised = validate_weekly_schedule(schedule)

        try:
            with self.transaction():
                record = self.repository.upsert(mentor_id, tz_name, normalised.to_document())
        except RepositoryException as exc:
            raise ServiceException("Failed to save availability") from exc

        self.log_operation(
            "save_availability",
            mentor_id=mentor_id,
            timezone=tz_name,
            slot_count=sum(len(ranges) for ranges in normalised.days.values()),
        )
        return record

    @BaseService.measure_operation("get_public_availability")
    def get_public_availability(self, mentor_id: str) -> Optional[MentorAvailability]:
        """Stored availability of an existing mentor, or None if never saved."""
        self._require_mentor(mentor_id)
        return self.repository.get_for_mentor(mentor_id)

    @BaseService.measure_operation("get_dashboard_availability")
    def get_dashboard_availability(self, mentor_id: str) -> AvailabilityView:
        """Own schedule for the dashboard; an empty week plus a timezone prompt when unset."""
        record = self.repository.get_for_mentor(mentor_id)
        if record is None:
            return AvailabilityView(
                timezone=None,
                schedule=WeeklySchedule.empty(),
                updated_at=None,
                requires_timezone=True,
            )
        return AvailabilityView(
            timezone=record.timezone,
            schedule=self._read_schedule(record),
            updated_at=record.updated_at,
            requires_timezone=not record.timezone,
        )

    @BaseService.measure_operation("get_bookable_slots")
    def get_bookable_slots(
        self,
        mentor_id: str,
        day: date,
        duration_minutes: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> List[SessionInterval]:
        """
        Concrete free sessions for the mentor on ``day`` (mentor-local date).

        Each weekly range for that weekday is converted to UTC in the mentor's
        timezone and cut into consecutive ``duration_minutes`` slots. Slots
        that have started already or overlap a non-cancelled booking are dropped.
        """
        duration = duration_minutes or settings.default_session_duration_minutes
        self._require_mentor(mentor_id)

        record = self.repository.get_for_mentor(mentor_id)
        if record is None:
            return []
        if not is_known_timezone(record.timezone):
            raise BusinessRuleException(
                f"Mentor timezone {record.timezone} is not a known IANA timezone",
                code="UNKNOWN_TIMEZONE",
            )

        schedule = self._read_schedule(record)
        ranges = schedule.ranges_for(Weekday.from_index(day.weekday()))
        if not ranges:
            return []

        windows: List[SessionInterval] = []
        for time_range in ranges:
            start = local_to_utc(day, time_range.start.to_time(), record.timezone)
            end = local_to_utc(day, time_range.end.to_time(), record.timezone)
            # A range swallowed by a DST gap has no length left
            if start < end:
                windows.append(SessionInterval(start, end))
        if not windows:
            return []

        span = SessionInterval(min(w.start for w in windows), max(w.end for w in windows))
        busy = self.conflict_checker.get_busy_intervals(mentor_id, span)
        reference = now or utc_now()

        slots = [
            slot
            for window in windows
            for slot in window.split(duration)
            if slot.start > reference and not any(slot.overlaps(b) for b in busy)
        ]
        self.logger.debug(
            f"Mentor {mentor_id} has {len(slots)} bookable slots on {day.isoformat()}"
        )
        return slots
