# backend/app/repositories/__init__.py
"""
Repository Pattern Implementation for the mentorship booking platform.

This package provides the repository layer for data access,
separating business logic from database queries.

Key Components:
- BaseRepository: Foundation for all repositories with generic CRUD operations
- IRepository: Interface defining required methods for all repositories
- RepositoryFactory: Factory for creating repository instances
- UserRepository: Identity and role lookups
- AvailabilityRepository: Weekly schedule upserts
- MentorServiceRepository: Mentor pricing rows
- BookingRepository: Booking ledger and conflict queries

Usage:
    from app.repositories import RepositoryFactory

    # In a service:
    repository = RepositoryFactory.create_booking_repository(db)
    clash = repository.has_overlapping_booking(mentor_id, start, end)
"""

from .availability_repository import AvailabilityRepository
from .base_repository import BaseRepository, IRepository
from .booking_repository import BookingRepository
from .factory import RepositoryFactory
from .mentor_service_repository import MentorServiceRepository
from .user_repository import UserRepository

__all__ = [
    "IRepository",
    "BaseRepository",
    "RepositoryFactory",
    "UserRepository",
    "AvailabilityRepository",
    "MentorServiceRepository",
    "BookingRepository",
]
