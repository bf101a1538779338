# backend/tests/helpers.py
"""Constants and test doubles shared by fixtures and test modules."""

from datetime import datetime, timedelta, timezone

from app.auth import create_access_token
from app.core.enums import Weekday
from app.models.booking import Booking
from app.models.user import User

# A fixed Monday in the future, so "future session" checks never drift
FUTURE_MONDAY = datetime(2031, 3, 3, tzinfo=timezone.utc)


def empty_week() -> dict:
    return {day.value: [] for day in Weekday}


def auth_headers_for(user: User, expires_delta: timedelta | None = None) -> dict:
    token = create_access_token(user.id, user.user_type, expires_delta=expires_delta)
    return {"Authorization": f"Bearer {token}"}


class RecordingNotifier:
    """Notifier double that remembers what it was told."""

    def __init__(self) -> None:
        self.created: list[str] = []
        self.status_changes: list[tuple[str, str, str]] = []

    def booking_created(self, booking: Booking) -> None:
        self.created.append(booking.id)

    def booking_status_changed(self, booking: Booking, previous_status: str) -> None:
        self.status_changes.append((booking.id, previous_status, booking.status))


class FailingNotifier:
    def booking_created(self, booking: Booking) -> None:
        raise RuntimeError("smtp down")

    def booking_status_changed(self, booking: Booking, previous_status: str) -> None:
        raise RuntimeError("smtp down")
