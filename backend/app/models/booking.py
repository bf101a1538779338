# backend/app/models/booking.py
"""
Booking model for the mentorship booking platform.

A booking is an independent ledger entry between a student and a mentor.
Pricing is snapshotted from the mentor's service at booking time, so later
price edits (or deleting the service row entirely) never alter history.

Session times are UTC instants. ``session_end`` is stored alongside
``session_start`` so overlap queries are plain column comparisons on every
dialect.
"""

from datetime import datetime, timedelta
from enum import Enum
import logging
from typing import Any, FrozenSet, Optional

from sqlalchemy import CheckConstraint, Column, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import relationship
import ulid

from ..core.constants import DEFAULT_MEETING_PLATFORM
from ..database import Base
from ..domain.time_slots import SessionInterval, ensure_utc
from .types import UTCDateTime, now_utc

logger = logging.getLogger(__name__)


class BookingStatus(str, Enum):
    """Booking lifecycle statuses."""

    PENDING = "pending"  # Created, awaiting mentor confirmation / payment
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED_BY_STUDENT = "cancelled_by_student"
    CANCELLED_BY_MENTOR = "cancelled_by_mentor"
    NO_SHOW = "no_show"

    @property
    def is_cancelled(self) -> bool:
        return self in CANCELLED_STATUSES

    @property
    def is_terminal(self) -> bool:
        return not _TRANSITIONS[self]

    def can_transition_to(self, target: "BookingStatus") -> bool:
        """True if moving from this status to ``target`` is a legal lifecycle step."""
        return BookingStatus(target) in _TRANSITIONS[self]


CANCELLED_STATUSES: FrozenSet[BookingStatus] = frozenset(
    {BookingStatus.CANCELLED_BY_STUDENT, BookingStatus.CANCELLED_BY_MENTOR}
)

_TRANSITIONS = {
    BookingStatus.PENDING: frozenset(
        {
            BookingStatus.CONFIRMED,
            BookingStatus.CANCELLED_BY_STUDENT,
            BookingStatus.CANCELLED_BY_MENTOR,
        }
    ),
    BookingStatus.CONFIRMED: frozenset(
        {
            BookingStatus.COMPLETED,
            BookingStatus.CANCELLED_BY_STUDENT,
            BookingStatus.CANCELLED_BY_MENTOR,
            BookingStatus.NO_SHOW,
        }
    ),
    BookingStatus.COMPLETED: frozenset(),
    BookingStatus.CANCELLED_BY_STUDENT: frozenset(),
    BookingStatus.CANCELLED_BY_MENTOR: frozenset(),
    BookingStatus.NO_SHOW: frozenset(),
}


class PaymentStatus(str, Enum):
    """Payment state as reported by the external payment collaborator."""

    PENDING = "pending"
    PAID = "paid"
    REFUNDED = "refunded"
    FAILED = "failed"


def _in_clause(column: str, enum_class: Any) -> str:
    values = ", ".join(f"'{member.value}'" for member in enum_class)
    return f"{column} IN ({values})"


class Booking(Base):
    """
    Session booked by a student with a mentor.

    Design: the row is self-contained. It keeps the price snapshot and the
    session interval, and only weakly references the service it came from.
    """

    __tablename__ = "bookings"

    id = Column(String(26), primary_key=True, index=True, default=lambda: str(ulid.ULID()))

    # Core relationships
    mentor_id = Column(String(26), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    student_id = Column(String(26), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    service_id = Column(
        String(26), ForeignKey("mentor_services.id", ondelete="SET NULL"), nullable=True
    )

    # Session interval (UTC)
    session_start = Column(UTCDateTime(), nullable=False)
    session_end = Column(UTCDateTime(), nullable=False)
    duration_minutes = Column(Integer, nullable=False)

    # Pricing snapshot (whole currency units)
    mentor_price = Column(Integer, nullable=False)
    platform_fee = Column(Integer, nullable=False, default=0)
    taxes_fee = Column(Integer, nullable=False, default=0)
    total_price = Column(Integer, nullable=False)

    status = Column(String(30), nullable=False, default=BookingStatus.PENDING.value, index=True)
    payment_status = Column(String(20), nullable=False, default=PaymentStatus.PENDING.value)

    # Session details
    session_topic = Column(String(500), nullable=True)
    notes = Column(Text, nullable=True)
    meeting_link = Column(String(500), nullable=True)
    meeting_platform = Column(String(50), nullable=False, default=DEFAULT_MEETING_PLATFORM)

    # Lifecycle tracking
    cancellation_reason = Column(Text, nullable=True)
    cancelled_at = Column(UTCDateTime(), nullable=True)
    cancelled_by = Column(String(26), ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    completed_at = Column(UTCDateTime(), nullable=True)

    created_at = Column(UTCDateTime(), nullable=False, default=now_utc)
    updated_at = Column(UTCDateTime(), nullable=False, default=now_utc, onupdate=now_utc)

    mentor = relationship("User", foreign_keys=[mentor_id])
    student = relationship("User", foreign_keys=[student_id])
    service = relationship("MentorService", foreign_keys=[service_id])

    __table_args__ = (
        CheckConstraint(_in_clause("status", BookingStatus), name="ck_bookings_status"),
        CheckConstraint(
            _in_clause("payment_status", PaymentStatus), name="ck_bookings_payment_status"
        ),
        CheckConstraint("duration_minutes > 0", name="ck_bookings_duration_positive"),
        CheckConstraint("session_end > session_start", name="ck_bookings_interval_order"),
        CheckConstraint("mentor_price > 0", name="ck_bookings_mentor_price_positive"),
        CheckConstraint("platform_fee >= 0", name="ck_bookings_platform_fee_non_negative"),
        CheckConstraint("taxes_fee >= 0", name="ck_bookings_taxes_fee_non_negative"),
        CheckConstraint(
            "total_price = mentor_price + platform_fee + taxes_fee",
            name="ck_bookings_total_matches",
        ),
        Index("ix_bookings_mentor_session", "mentor_id", "session_start", "session_end"),
        Index("ix_bookings_student_mentor", "student_id", "mentor_id"),
    )

    def __init__(self, **kwargs: Any) -> None:
        """Derive ``session_end`` from start and duration when not given."""
        super().__init__(**kwargs)
        if self.session_end is None and self.session_start is not None and self.duration_minutes:
            self.session_end = ensure_utc(self.session_start) + timedelta(
                minutes=self.duration_minutes
            )

    def __repr__(self) -> str:
        return (
            f"<Booking {self.id}: student={self.student_id}, mentor={self.mentor_id}, "
            f"start={self.session_start}, status={self.status}>"
        )

    @property
    def status_enum(self) -> BookingStatus:
        return BookingStatus(self.status)

    @property
    def interval(self) -> SessionInterval:
        return SessionInterval(self.session_start, self.session_end)

    @property
    def is_cancelled(self) -> bool:
        return self.status_enum.is_cancelled

    def is_participant(self, user_id: str) -> bool:
        return user_id in (self.student_id, self.mentor_id)

    def cancel(
        self,
        status: BookingStatus,
        cancelled_by_user_id: str,
        reason: Optional[str] = None,
        at: Optional[datetime] = None,
    ) -> None:
        """Move to a cancelled variant and record who cancelled and why."""
        if not status.is_cancelled:
            raise ValueError(f"{status.value} is not a cancellation status")
        self.status = status.value
        self.cancelled_at = at or now_utc()
        self.cancelled_by = cancelled_by_user_id
        self.cancellation_reason = reason
        logger.info(f"Booking {self.id} cancelled by user {cancelled_by_user_id}")

    def complete(self, at: Optional[datetime] = None) -> None:
        self.status = BookingStatus.COMPLETED.value
        self.completed_at = at or now_utc()
        logger.info(f"Booking {self.id} marked as completed")

    def confirm(self) -> None:
        self.status = BookingStatus.CONFIRMED.value

    def mark_no_show(self) -> None:
        self.status = BookingStatus.NO_SHOW.value
        logger.info(f"Booking {self.id} marked as no-show")
