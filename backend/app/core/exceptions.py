# backend/app/core/exceptions.py
"""
Domain-specific exceptions for the mentorship booking platform.

These exceptions provide clear, business-focused error messages
that can be caught and handled appropriately at the API layer.
"""

from typing import Any, Dict, Optional

from fastapi import HTTPException, status

from .enums import ScheduleErrorKind

HTTP_422_UNPROCESSABLE: int = getattr(status, "HTTP_422_UNPROCESSABLE_CONTENT", 422)


class DomainException(Exception):
    """Base exception for all domain-specific errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_http_exception(self) -> HTTPException:
        """Convert to HTTPException using the class status code."""
        return HTTPException(
            status_code=self.status_code,
            detail={
                "message": self.message,
                "code": self.code,
                "details": self.details,
            },
        )


class ValidationException(DomainException):
    """Raised when business validation fails."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundException(DomainException):
    """Raised when a requested resource is not found."""

    status_code = status.HTTP_404_NOT_FOUND


class ConflictException(DomainException):
    """Raised when there's a conflict with existing data."""

    status_code = status.HTTP_409_CONFLICT


class BusinessRuleException(DomainException):
    """Raised when a business rule is violated."""

    status_code = HTTP_422_UNPROCESSABLE


class UnauthorizedException(DomainException):
    """Raised when user is not authenticated."""

    status_code = status.HTTP_401_UNAUTHORIZED


class ForbiddenException(DomainException):
    """Raised when user lacks permission for an action."""

    status_code = status.HTTP_403_FORBIDDEN


class ServiceException(DomainException):
    """Raised when a service operation fails."""

    def to_http_exception(self) -> HTTPException:
        return HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "message": self.message or "An error occurred processing your request",
                "code": self.code,
                "details": self.details if self.details else {},
            },
        )


# Specific business exceptions


class ScheduleValidationException(ValidationException):
    """A weekly schedule or timezone failed validation; carries the first violation."""

    def __init__(
        self,
        kind: ScheduleErrorKind,
        message: str,
        *,
        day: Optional[str] = None,
    ):
        details: Dict[str, Any] = {"kind": kind.value}
        if day:
            details["day"] = day
        super().__init__(message=message, code=kind.value, details=details)
        self.kind = kind
        self.day = day


class PricingValidationException(ValidationException):
    """Raised when a mentor service price row is malformed."""

    def __init__(self, message: str, *, index: Optional[int] = None):
        details = {"index": index} if index is not None else {}
        super().__init__(message=message, code="INVALID_PRICING", details=details)


class InvalidSessionDateException(ValidationException):
    """Raised when a session date cannot be parsed as an instant."""

    def __init__(self, value: Any = None):
        super().__init__(
            message="Invalid session date format",
            code="INVALID_SESSION_DATE",
            details={"value": str(value)} if value is not None else {},
        )


class PastSessionException(ValidationException):
    """Raised when a proposed session does not start strictly in the future."""

    def __init__(self, session_start: Any = None):
        super().__init__(
            message="Session date must be in the future",
            code="PAST_SESSION",
            details={"session_start": str(session_start)} if session_start is not None else {},
        )


class MentorNotFoundException(NotFoundException):
    def __init__(self, mentor_id: str):
        super().__init__(
            message="Mentor not found",
            code="MENTOR_NOT_FOUND",
            details={"mentor_id": mentor_id},
        )


class ServiceNotFoundException(NotFoundException):
    def __init__(self, service_id: str):
        super().__init__(
            message="Service not found",
            code="SERVICE_NOT_FOUND",
            details={"service_id": service_id},
        )


class BookingNotFoundException(NotFoundException):
    def __init__(self, booking_id: str):
        super().__init__(
            message="Booking not found",
            code="BOOKING_NOT_FOUND",
            details={"booking_id": booking_id},
        )


class BookingConflictException(ConflictException):
    """Raised when a booking conflicts with existing bookings."""

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message=message
            or "This time slot is already booked. Please select a different time.",
            code="SLOT_CONFLICT",
            details=details or {},
        )


class InvalidStatusTransitionException(BusinessRuleException):
    """Raised when a booking status change is not allowed by the lifecycle."""

    def __init__(self, current: str, requested: str):
        super().__init__(
            message=f"Cannot change booking status from {current} to {requested}",
            code="INVALID_STATUS_TRANSITION",
            details={"current_status": current, "requested_status": requested},
        )


class RepositoryException(Exception):
    """
    Exception raised for repository layer errors.

    This exception is used when data access operations fail,
    such as database connection issues, query failures, or
    constraint violations.
    """
