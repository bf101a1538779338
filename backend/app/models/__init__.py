"""
Database models for the mentorship booking platform.

Importing this package registers every table on ``Base.metadata``:
- Users (students and mentors)
- Mentor availability (weekly schedule document)
- Mentor services (pricing)
- Bookings
"""

from .availability import MentorAvailability
from .booking import CANCELLED_STATUSES, Booking, BookingStatus, PaymentStatus
from .mentor_service import MentorService
from .user import User

__all__ = [
    "User",
    "MentorAvailability",
    "MentorService",
    "Booking",
    "BookingStatus",
    "PaymentStatus",
    "CANCELLED_STATUSES",
]
