# backend/app/services/notification_service.py
"""
Notification Service for the mentorship booking platform.

Booking emails are sent by an external collaborator. This module defines the
interface the booking engine talks to, a default implementation that only
logs, and the service that dispatches fire-and-forget after commit: a failed
send is logged and counted, never raised to the caller.
"""

import logging
from typing import Optional, Protocol

from ..models.booking import Booking
from ..monitoring.prometheus_metrics import prometheus_metrics

logger = logging.getLogger(__name__)


class BookingNotifier(Protocol):
    """Outbound notification channel (email, push, ...)."""

    def booking_created(self, booking: Booking) -> None:
        ...

    def booking_status_changed(self, booking: Booking, previous_status: str) -> None:
        ...


class LoggingNotifier:
    """Default notifier: records what would have been sent."""

    def booking_created(self, booking: Booking) -> None:
        logger.info(
            "Booking request notification",
            extra={
                "booking_id": booking.id,
                "mentor_id": booking.mentor_id,
                "student_id": booking.student_id,
                "session_start": booking.session_start.isoformat(),
            },
        )

    def booking_status_changed(self, booking: Booking, previous_status: str) -> None:
        logger.info(
            "Booking status notification",
            extra={
                "booking_id": booking.id,
                "from_status": previous_status,
                "to_status": booking.status,
            },
        )


class NotificationService:
    """Dispatches booking notifications without letting failures escape."""

    def __init__(self, notifier: Optional[BookingNotifier] = None):
        self.notifier: BookingNotifier = notifier or LoggingNotifier()
        self.logger = logging.getLogger(__name__)

    def notify_booking_created(self, booking: Booking) -> bool:
        try:
            self.notifier.booking_created(booking)
        except Exception:
            self.logger.error(
                f"Failed to send booking notification for {booking.id}", exc_info=True
            )
            prometheus_metrics.record_notification_outcome("booking_created", "error")
            return False
        prometheus_metrics.record_notification_outcome("booking_created", "sent")
        return True

    def notify_status_changed(self, booking: Booking, previous_status: str) -> bool:
        try:
            self.notifier.booking_status_changed(booking, previous_status)
        except Exception:
            self.logger.error(
                f"Failed to send status notification for {booking.id}", exc_info=True
            )
            prometheus_metrics.record_notification_outcome("booking_status_changed", "error")
            return False
        prometheus_metrics.record_notification_outcome("booking_status_changed", "sent")
        return True
