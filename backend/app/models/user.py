# backend/app/models/user.py
"""
User model for the mentorship booking platform.

Both students and mentors are rows in ``users``, told apart by ``user_type``.
Registration, credentials and profile details are handled by the auth
collaborator; this model carries only what the booking engine needs to
verify identities and roles.
"""

import logging

from sqlalchemy import Boolean, CheckConstraint, Column, String
from sqlalchemy.orm import relationship
import ulid

from ..core.enums import UserType
from ..database import Base
from .types import UTCDateTime, now_utc

logger = logging.getLogger(__name__)


class User(Base):
    """
    Account shared by students and mentors.

    Relationships:
        availability: One-to-one MentorAvailability (mentors only)
        services: One-to-many MentorService (mentors only)
    """

    __tablename__ = "users"

    id = Column(String(26), primary_key=True, index=True, default=lambda: str(ulid.ULID()))
    email = Column(String(255), unique=True, index=True, nullable=False)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    user_type = Column(String(20), nullable=False, index=True, default=UserType.STUDENT.value)
    is_active = Column(Boolean, nullable=False, default=True)

    created_at = Column(UTCDateTime(), nullable=False, default=now_utc)
    updated_at = Column(UTCDateTime(), nullable=False, default=now_utc, onupdate=now_utc)

    availability = relationship(
        "MentorAvailability",
        back_populates="mentor",
        uselist=False,
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    services = relationship(
        "MentorService",
        back_populates="mentor",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (
        CheckConstraint("user_type IN ('student', 'mentor')", name="ck_users_user_type"),
    )

    @property
    def is_mentor(self) -> bool:
        return self.user_type == UserType.MENTOR.value

    @property
    def is_student(self) -> bool:
        return self.user_type == UserType.STUDENT.value

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def __repr__(self) -> str:
        return f"<User {self.id} {self.user_type}>"
