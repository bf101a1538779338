# backend/app/services/mentor_pricing_service.py
"""
Mentor Pricing Service for the mentorship booking platform.

Lists a mentor's priced services and replaces the whole list at once.
A replacement is validated completely before any row is deleted, then the
delete and the inserts share one transaction.
"""

import logging
from typing import TYPE_CHECKING, Any, List, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.exceptions import (
    MentorNotFoundException,
    PricingValidationException,
    RepositoryException,
    ServiceException,
)
from ..domain.pricing import validate_service_list
from ..models.mentor_service import MentorService
from ..repositories.factory import RepositoryFactory
from .base import BaseService

if TYPE_CHECKING:
    from ..repositories.mentor_service_repository import MentorServiceRepository
    from ..repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)


class MentorPricingService(BaseService):
    """Service for a mentor's priced offerings."""

    def __init__(
        self,
        db: Session,
        repository: Optional["MentorServiceRepository"] = None,
        user_repository: Optional["UserRepository"] = None,
    ):
        super().__init__(db)
        self.logger = logging.getLogger(__name__)
        self.repository = repository or RepositoryFactory.create_mentor_service_repository(db)
        self.user_repository = user_repository or RepositoryFactory.create_user_repository(db)

    @BaseService.measure_operation("list_public_services")
    def list_public_services(self, mentor_id: str) -> List[MentorService]:
        """Services of an existing mentor, newest first (404 for unknown mentors)."""
        if self.user_repository.get_mentor(mentor_id) is None:
            raise MentorNotFoundException(mentor_id)
        return self.repository.list_for_mentor(mentor_id)

    @BaseService.measure_operation("list_own_services")
    def list_own_services(self, mentor_id: str) -> List[MentorService]:
        return self.repository.list_for_mentor(mentor_id)

    @BaseService.measure_operation("replace_services")
    def replace_services(self, mentor_id: str, items: Any) -> List[MentorService]:
        """
        Replace every service of the mentor with ``items``.

        Raises:
            PricingValidationException: before any write, for the first bad item
        """
        prices = validate_service_list(items)

        try:
            with self.repository.transaction():
                removed = self.repository.delete_for_mentor(mentor_id)
                created = self.repository.create_many(mentor_id, [p.to_row() for p in prices])
        except IntegrityError as exc:
            # Only reachable if a constraint disagrees with validation
            self.logger.error(f"Service replace rejected by database for mentor {mentor_id}: {exc}")
            raise PricingValidationException("Service list violates pricing constraints") from exc
        except SQLAlchemyError as exc:
            raise ServiceException("Failed to save services") from exc
        except RepositoryException as exc:
            raise ServiceException("Failed to save services") from exc

        self.log_operation(
            "replace_services",
            mentor_id=mentor_id,
            removed_count=removed,
            created_count=len(created),
        )
        return created
