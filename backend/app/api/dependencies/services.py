# backend/app/api/dependencies/services.py
"""
Service layer dependencies for dependency injection.

This module provides factory functions that create service instances
with their required dependencies properly injected.
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from ...services.availability_service import AvailabilityService
from ...services.booking_service import BookingService
from ...services.conflict_checker import ConflictChecker
from ...services.mentor_pricing_service import MentorPricingService
from ...services.notification_service import NotificationService
from .database import get_db


def get_notification_service() -> NotificationService:
    """
    Get notification service instance.

    The default notifier only logs; deployments that deliver email swap it
    through ``app.dependency_overrides``.
    """
    return NotificationService()


def get_conflict_checker(db: Session = Depends(get_db)) -> ConflictChecker:
    return ConflictChecker(db)


def get_availability_service(
    db: Session = Depends(get_db),
    conflict_checker: ConflictChecker = Depends(get_conflict_checker),
) -> AvailabilityService:
    """
    Get availability service instance.

    Args:
        db: Database session
        conflict_checker: Used to drop booked slots from the bookable view

    Returns:
        AvailabilityService instance
    """
    return AvailabilityService(db, conflict_checker=conflict_checker)


def get_mentor_pricing_service(db: Session = Depends(get_db)) -> MentorPricingService:
    """Provide mentor pricing service instance for dependency injection."""

    return MentorPricingService(db)


def get_booking_service(
    db: Session = Depends(get_db),
    notification_service: NotificationService = Depends(get_notification_service),
    conflict_checker: ConflictChecker = Depends(get_conflict_checker),
) -> BookingService:
    """
    Get booking service instance with all dependencies.

    Args:
        db: Database session
        notification_service: Notified after a booking commits
        conflict_checker: Shared overlap and future-start checks

    Returns:
        BookingService instance
    """
    return BookingService(
        db,
        notification_service=notification_service,
        conflict_checker=conflict_checker,
    )
