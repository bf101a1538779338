"""Booking request and response schemas."""

from datetime import datetime
from typing import Any, List, Optional

from pydantic import ConfigDict, Field

from ..core.constants import MAX_NOTES_LENGTH, MAX_REASON_LENGTH, MAX_TOPIC_LENGTH
from ..models.booking import BookingStatus, PaymentStatus
from ._strict_base import CamelResponseModel, StrictRequestModel


class BookingCreate(StrictRequestModel):
    """
    Body of ``POST /bookings``.

    Required fields are optional here so a missing field yields the single
    "Missing required fields" message rather than one error per field.
    """

    mentor_id: Optional[str] = None
    service_id: Optional[str] = None
    session_date: Optional[Any] = Field(default=None, description="ISO-8601 instant, UTC")
    session_topic: Optional[str] = Field(default=None, max_length=MAX_TOPIC_LENGTH)
    notes: Optional[str] = Field(default=None, max_length=MAX_NOTES_LENGTH)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "mentorId": "01J0MENTOR00000000000000000",
                "serviceId": "01J0SERVICE0000000000000000",
                "sessionDate": "2026-03-02T15:00:00Z",
                "sessionTopic": "Preparing for system design interviews",
            }
        }
    )


class BookingStatusUpdate(StrictRequestModel):
    """Body of ``PATCH /bookings/{booking_id}/status``."""

    status: BookingStatus
    reason: Optional[str] = Field(default=None, max_length=MAX_REASON_LENGTH)


class PaymentStatusUpdate(StrictRequestModel):
    """Body of ``PATCH /bookings/{booking_id}/payment-status`` (payment collaborator)."""

    payment_status: PaymentStatus


class BookingResponse(CamelResponseModel):
    id: str
    mentor_id: str
    student_id: str
    service_id: Optional[str] = None
    session_start: datetime = Field(alias="sessionDate")
    session_end: datetime
    duration_minutes: int
    session_topic: Optional[str] = None
    notes: Optional[str] = None
    meeting_link: Optional[str] = None
    meeting_platform: Optional[str] = None
    mentor_price: int
    platform_fee: int
    taxes_fee: int
    total_price: int
    status: BookingStatus
    payment_status: PaymentStatus
    cancellation_reason: Optional[str] = None
    cancelled_at: Optional[datetime] = None
    cancelled_by: Optional[str] = None
    completed_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class BookedSlot(CamelResponseModel):
    session_start: datetime = Field(alias="sessionDate")
    duration_minutes: int


class BookedTimesResponse(CamelResponseModel):
    """Occupied intervals for a mentor's day (top-level key kept for the booking widget)."""

    success: bool = True
    booked_slots: List[BookedSlot]


class BookingCheckResponse(CamelResponseModel):
    success: bool = True
    has_booking: bool
