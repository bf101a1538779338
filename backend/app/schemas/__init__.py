# backend/app/schemas/__init__.py
"""
Pydantic schemas for the mentorship booking platform.

Requests use camelCase aliases on the wire; responses are built from ORM
objects and serialised with the same aliases.
"""

from .availability import (
    AvailabilityResponse,
    AvailabilityUpdate,
    BookableSlotResponse,
    DashboardAvailabilityResponse,
)
from .base_responses import ApiResponse, ErrorResponse, HealthResponse
from .booking import (
    BookedSlot,
    BookedTimesResponse,
    BookingCheckResponse,
    BookingCreate,
    BookingResponse,
    BookingStatusUpdate,
    PaymentStatusUpdate,
)
from .mentor_service import MentorServiceResponse, MentorServicesUpdate

__all__ = [
    "ApiResponse",
    "ErrorResponse",
    "HealthResponse",
    "AvailabilityUpdate",
    "AvailabilityResponse",
    "DashboardAvailabilityResponse",
    "BookableSlotResponse",
    "MentorServicesUpdate",
    "MentorServiceResponse",
    "BookingCreate",
    "BookingStatusUpdate",
    "PaymentStatusUpdate",
    "BookingResponse",
    "BookedSlot",
    "BookedTimesResponse",
    "BookingCheckResponse",
]
