# backend/app/models/mentor_service.py
"""
Mentor service pricing model.

Each row is one priced offering of a mentor. All amounts are whole currency
units; the student-facing total is always the sum of its parts.
"""

from sqlalchemy import CheckConstraint, Column, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship
import ulid

from ..database import Base
from .types import UTCDateTime, now_utc


class MentorService(Base):
    """
    A mentor's price for one kind of session.

    Attributes:
        mentor_price: What the mentor receives
        platform_fee: Platform's cut
        taxes_fee: Taxes collected on top
        total_price: What the student pays (mentor_price + platform_fee + taxes_fee)
    """

    __tablename__ = "mentor_services"

    id = Column(String(26), primary_key=True, default=lambda: str(ulid.ULID()))
    mentor_id = Column(
        String(26),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    service_name = Column(String(255), nullable=False)
    mentor_price = Column(Integer, nullable=False)
    platform_fee = Column(Integer, nullable=False, default=0)
    taxes_fee = Column(Integer, nullable=False, default=0)
    total_price = Column(Integer, nullable=False)

    created_at = Column(UTCDateTime(), nullable=False, default=now_utc)
    updated_at = Column(UTCDateTime(), nullable=False, default=now_utc, onupdate=now_utc)

    mentor = relationship("User", back_populates="services")

    __table_args__ = (
        UniqueConstraint("mentor_id", "service_name", name="uq_mentor_services_mentor_name"),
        CheckConstraint("mentor_price > 0", name="ck_mentor_services_mentor_price_positive"),
        CheckConstraint("platform_fee >= 0", name="ck_mentor_services_platform_fee_non_negative"),
        CheckConstraint("taxes_fee >= 0", name="ck_mentor_services_taxes_fee_non_negative"),
        CheckConstraint("total_price > 0", name="ck_mentor_services_total_positive"),
        CheckConstraint(
            "total_price = mentor_price + platform_fee + taxes_fee",
            name="ck_mentor_services_total_matches",
        ),
    )

    def pricing_snapshot(self) -> dict[str, int]:
        """Price fields copied onto a booking at creation time."""
        return {
            "mentor_price": self.mentor_price,
            "platform_fee": self.platform_fee,
            "taxes_fee": self.taxes_fee,
            "total_price": self.total_price,
        }

    def __repr__(self) -> str:
        return f"<MentorService {self.service_name!r} mentor={self.mentor_id} total={self.total_price}>"
