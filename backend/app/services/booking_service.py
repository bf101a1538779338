# backend/app/services/booking_service.py
"""
Booking Service for the mentorship booking platform.

Handles the booking lifecycle:
- creating a booking with snapshot pricing, atomically with its conflict check
- moving a booking through its status state machine
- recording payment status reported by the payment collaborator

Creation order: mentor, service, session date, then (under the per-mentor
lock, inside one transaction) conflict check and insert. Notifications go
out only after commit and never affect the result.
"""

from datetime import datetime
import logging
from typing import Any, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.booking_lock import mentor_booking_lock
from ..core.config import settings
from ..core.enums import UserType
from ..core.exceptions import (
    BookingConflictException,
    BookingNotFoundException,
    ForbiddenException,
    InvalidStatusTransitionException,
    MentorNotFoundException,
    RepositoryException,
    ServiceException,
    ServiceNotFoundException,
    ValidationException,
)
from ..core.timezone_utils import parse_session_date, utc_now
from ..domain.time_slots import range_from_session
from ..models.booking import Booking, BookingStatus, PaymentStatus
from ..models.user import User
from ..monitoring.prometheus_metrics import prometheus_metrics
from ..repositories.factory import RepositoryFactory
from .base import BaseService
from .conflict_checker import ConflictChecker
from .notification_service import NotificationService

logger = logging.getLogger(__name__)

# Which target statuses each role may request
_STUDENT_TARGETS = frozenset({BookingStatus.CANCELLED_BY_STUDENT})
_MENTOR_TARGETS = frozenset(
    {
        BookingStatus.CONFIRMED,
        BookingStatus.COMPLETED,
        BookingStatus.NO_SHOW,
        BookingStatus.CANCELLED_BY_MENTOR,
    }
)


class BookingService(BaseService):
    """
    Service layer for booking operations.

    Centralizes booking business logic and coordinates between
    repositories, the conflict checker and notifications.
    """

    def __init__(
        self,
        db: Session,
        notification_service: Optional[NotificationService] = None,
        conflict_checker: Optional[ConflictChecker] = None,
    ):
        super().__init__(db)
        self.logger = logging.getLogger(__name__)
        self.repository = RepositoryFactory.create_booking_repository(db)
        self.user_repository = RepositoryFactory.create_user_repository(db)
        self.service_repository = RepositoryFactory.create_mentor_service_repository(db)
        self.conflict_checker = conflict_checker or ConflictChecker(db, self.repository)
        self.notification_service = notification_service or NotificationService()

    @BaseService.measure_operation("create_booking")
    def create_booking(
        self,
        student: User,
        mentor_id: Any,
        service_id: Any,
        session_date: Any,
        session_topic: Optional[str] = None,
        notes: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> Booking:
        """
        Create a pending booking for ``student`` with a mentor.

        Raises:
            ValidationException: missing fields, bad or past session date
            NotFoundException: unknown mentor, or service not owned by the mentor
            BookingConflictException: slot overlaps an existing booking
            ServiceException: persistence failure (rolled back)
        """
        if not mentor_id or not service_id or not session_date:
            raise ValidationException(
                "Missing required fields: mentorId, serviceId, sessionDate",
                code="MISSING_REQUIRED_FIELDS",
            )

        # 1. Mentor
        mentor = self.user_repository.get_mentor(mentor_id)
        if mentor is None:
            raise MentorNotFoundException(str(mentor_id))

        # 2. Service owned by that mentor
        service = self.service_repository.get_for_mentor(str(service_id), mentor.id)
        if service is None:
            raise ServiceNotFoundException(str(service_id))

        # 3. Session start
        session_start = self.conflict_checker.ensure_future(
            parse_session_date(session_date), now=now
        )
        duration = settings.default_session_duration_minutes
        interval = range_from_session(session_start, duration)

        # 4. Check + insert, serialised per mentor
        try:
            with mentor_booking_lock(self.db, mentor.id):
                with self.repository.transaction():
                    if self.conflict_checker.has_conflict(mentor.id, session_start, duration):
                        prometheus_metrics.inc_booking_conflict("check")
                        raise BookingConflictException(
                            details={
                                "mentor_id": mentor.id,
                                "session_start": session_start.isoformat(),
                                "duration_minutes": duration,
                            }
                        )
                    booking = self.repository.create(
                        mentor_id=mentor.id,
                        student_id=student.id,
                        service_id=service.id,
                        session_start=interval.start,
                        session_end=interval.end,
                        duration_minutes=duration,
                        session_topic=session_topic or None,
                        notes=notes or None,
                        status=BookingStatus.PENDING.value,
                        payment_status=PaymentStatus.PENDING.value,
                        **service.pricing_snapshot(),
                    )
        except IntegrityError as exc:
            prometheus_metrics.inc_booking_conflict("constraint")
            self.logger.warning(f"Booking insert rejected by constraint for mentor {mentor.id}: {exc}")
            raise BookingConflictException() from exc
        except SQLAlchemyError as exc:
            self.logger.error(f"Booking transaction failed for mentor {mentor.id}: {exc}")
            raise ServiceException("Failed to create booking") from exc
        except RepositoryException as exc:
            raise ServiceException("Failed to create booking") from exc

        self.log_operation(
            "create_booking",
            booking_id=booking.id,
            mentor_id=mentor.id,
            student_id=student.id,
            session_start=session_start.isoformat(),
        )

        # 5. Fire-and-forget
        self.notification_service.notify_booking_created(booking)
        return booking

    def _check_actor(self, booking: Booking, actor: User, target: BookingStatus) -> None:
        if not booking.is_participant(actor.id):
            raise ForbiddenException(
                "You do not have access to this booking", code="NOT_BOOKING_PARTICIPANT"
            )
        if actor.id == booking.mentor_id and actor.user_type == UserType.MENTOR.value:
            allowed = _MENTOR_TARGETS
        else:
            allowed = _STUDENT_TARGETS
        if target not in allowed:
            raise ForbiddenException(
                f"You are not allowed to set status {target.value}",
                code="STATUS_NOT_ALLOWED_FOR_ROLE",
            )

    @BaseService.measure_operation("transition_status")
    def transition_status(
        self,
        booking_id: str,
        new_status: Any,
        actor: User,
        reason: Optional[str] = None,
    ) -> Booking:
        """
        Apply a lifecycle transition requested by a participant.

        Raises:
            ValidationException: unknown status value
            BookingNotFoundException: no such booking
            ForbiddenException: actor is not a participant or may not set this status
            InvalidStatusTransitionException: the state machine forbids the move
        """
        try:
            target = BookingStatus(new_status)
        except ValueError:
            raise ValidationException(f"Invalid booking status: {new_status}", code="INVALID_STATUS")

        with self.transaction():
            booking = self.repository.get_for_update(booking_id)
            if booking is None:
                raise BookingNotFoundException(booking_id)
            self._check_actor(booking, actor, target)

            current = booking.status_enum
            if not current.can_transition_to(target):
                raise InvalidStatusTransitionException(current.value, target.value)

            now = utc_now()
            if target.is_cancelled:
                booking.cancel(target, actor.id, reason, at=now)
            elif target is BookingStatus.COMPLETED:
                booking.complete(at=now)
            elif target is BookingStatus.NO_SHOW:
                booking.mark_no_show()
            else:
                booking.confirm()
            self.db.flush()

        prometheus_metrics.inc_status_transition(current.value, target.value)
        self.log_operation(
            "transition_status",
            booking_id=booking.id,
            from_status=current.value,
            to_status=target.value,
            actor_id=actor.id,
        )
        self.notification_service.notify_status_changed(booking, current.value)
        return booking

    @BaseService.measure_operation("update_payment_status")
    def update_payment_status(self, booking_id: str, payment_status: Any) -> Booking:
        """Record the payment state reported by the payment collaborator."""
        try:
            status = PaymentStatus(payment_status)
        except ValueError:
            raise ValidationException(
                f"Invalid payment status: {payment_status}", code="INVALID_PAYMENT_STATUS"
            )

        with self.transaction():
            booking = self.repository.get_for_update(booking_id)
            if booking is None:
                raise BookingNotFoundException(booking_id)
            booking.payment_status = status.value
            self.db.flush()

        self.log_operation("update_payment_status", booking_id=booking_id, payment_status=status.value)
        return booking

    @BaseService.measure_operation("has_booking_with_mentor")
    def has_booking_with_mentor(self, student_id: str, mentor_id: str) -> bool:
        """True if the student holds any non-cancelled booking with the mentor."""
        return self.repository.has_active_booking_between(student_id, mentor_id)

    def get_booking(self, booking_id: str) -> Booking:
        booking = self.repository.get_by_id(booking_id)
        if booking is None:
            raise BookingNotFoundException(booking_id)
        return booking
