# backend/app/repositories/user_repository.py
"""
User Repository for the mentorship booking platform.

Read-only lookups used to verify identities and roles. Accounts are created
by the external registration flow.
"""

import logging
from typing import Any, Optional, cast

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.enums import UserType
from ..core.exceptions import RepositoryException
from ..models.user import User
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class UserRepository(BaseRepository[User]):
    """Repository for User data access."""

    def __init__(self, db: Session):
        """Initialize with User model."""
        super().__init__(db, User)
        self.logger = logging.getLogger(__name__)

    def get_by_id(self, id: Any) -> Optional[User]:
        if id is None:
            return None
        return super().get_by_id(str(id))

    def get_mentor(self, mentor_id: str) -> Optional[User]:
        """
        Get an active user with ``user_type = mentor``.

        Used by: AvailabilityService, MentorPricingService, BookingService
        """
        try:
            return cast(
                Optional[User],
                self.db.query(User)
                .filter(
                    User.id == str(mentor_id),
                    User.user_type == UserType.MENTOR.value,
                    User.is_active.is_(True),
                )
                .first(),
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error getting mentor {mentor_id}: {str(e)}")
            raise RepositoryException(f"Failed to retrieve mentor: {str(e)}")
