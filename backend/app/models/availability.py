# backend/app/models/availability.py
"""
Mentor availability model.

One row per mentor holding the whole recurring weekly schedule as a JSON
document plus the timezone the schedule is expressed in. Saves replace the
entire document; there are no per-slot rows.

Classes:
    MentorAvailability: The weekly schedule of a single mentor
"""

import logging

from sqlalchemy import JSON, Column, ForeignKey, String, UniqueConstraint
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import relationship
import ulid

from ..database import Base
from ..domain.schedule import WeeklySchedule
from .types import UTCDateTime, now_utc

logger = logging.getLogger(__name__)


class MentorAvailability(Base):
    """Weekly availability document, e.g. ``{"monday": [{"start": "09:00", "end": "17:00"}], ...}``."""

    __tablename__ = "mentor_availability"

    id = Column(String(26), primary_key=True, default=lambda: str(ulid.ULID()))
    mentor_id = Column(
        String(26),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    # IANA identifier, e.g. 'America/New_York'
    timezone = Column(String(100), nullable=False)
    schedule = Column(JSON().with_variant(JSONB(), "postgresql"), nullable=False, default=dict)

    created_at = Column(UTCDateTime(), nullable=False, default=now_utc)
    updated_at = Column(UTCDateTime(), nullable=False, default=now_utc, onupdate=now_utc)

    mentor = relationship("User", back_populates="availability")

    __table_args__ = (UniqueConstraint("mentor_id", name="uq_mentor_availability_mentor"),)

    @property
    def weekly_schedule(self) -> WeeklySchedule:
        """Typed view of the stored document (missing days read as empty)."""
        return WeeklySchedule.from_document(self.schedule)

    def __repr__(self) -> str:
        return f"<MentorAvailability mentor={self.mentor_id} tz={self.timezone}>"
