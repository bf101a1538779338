# backend/app/api/dependencies/__init__.py
"""
Central export point for all dependencies.

This module re-exports all dependencies from submodules
for convenient access throughout the application.
"""

from .auth import get_current_user, require_mentor, require_student
from .database import get_db
from .services import (
    get_availability_service,
    get_booking_service,
    get_conflict_checker,
    get_mentor_pricing_service,
    get_notification_service,
)

__all__ = [
    # Auth
    "get_current_user",
    "require_mentor",
    "require_student",
    # Database
    "get_db",
    # Services
    "get_availability_service",
    "get_booking_service",
    "get_conflict_checker",
    "get_mentor_pricing_service",
    "get_notification_service",
]
