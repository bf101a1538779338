# backend/app/routes/bookings.py
"""
Booking routes.

All business logic delegated to BookingService and ConflictChecker.

Endpoints:
    GET /booked-times/{mentor_id} - Occupied intervals for one UTC day
    GET /check/{mentor_id} - Whether the student already booked this mentor
    POST / - Create a pending booking
    GET /{booking_id} - Booking details (participants only)
    PATCH /{booking_id}/status - Lifecycle transition
    PATCH /{booking_id}/payment-status - Payment state from the payment collaborator
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ..api.dependencies import (
    get_booking_service,
    get_conflict_checker,
    get_current_user,
    require_student,
)
from ..core.exceptions import DomainException
from ..core.timezone_utils import parse_calendar_date
from ..models.booking import Booking
from ..models.user import User
from ..schemas.base_responses import ApiResponse
from ..schemas.booking import (
    BookedSlot,
    BookedTimesResponse,
    BookingCheckResponse,
    BookingCreate,
    BookingResponse,
    BookingStatusUpdate,
    PaymentStatusUpdate,
)
from ..services.booking_service import BookingService
from ..services.conflict_checker import ConflictChecker
from .mentors import handle_domain_exception

logger = logging.getLogger(__name__)

router = APIRouter(tags=["bookings"])


def _ensure_participant(booking: Booking, user: User) -> None:
    if not booking.is_participant(user.id):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Access denied")


@router.get("/booked-times/{mentor_id}", response_model=BookedTimesResponse)
def get_booked_times(
    mentor_id: str,
    date: Optional[str] = Query(default=None, description="UTC date, YYYY-MM-DD"),
    conflict_checker: ConflictChecker = Depends(get_conflict_checker),
) -> BookedTimesResponse:
    try:
        day = parse_calendar_date(date)
        booked = conflict_checker.get_booked_times(mentor_id, day)
    except DomainException as e:
        handle_domain_exception(e)

    return BookedTimesResponse(booked_slots=[BookedSlot(**row) for row in booked])


@router.get("/check/{mentor_id}", response_model=BookingCheckResponse)
def check_existing_booking(
    mentor_id: str,
    current_user: User = Depends(require_student),
    booking_service: BookingService = Depends(get_booking_service),
) -> BookingCheckResponse:
    try:
        has_booking = booking_service.has_booking_with_mentor(current_user.id, mentor_id)
    except DomainException as e:
        handle_domain_exception(e)
    return BookingCheckResponse(has_booking=has_booking)


@router.post(
    "",
    response_model=ApiResponse[BookingResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_booking(
    payload: BookingCreate,
    current_user: User = Depends(require_student),
    booking_service: BookingService = Depends(get_booking_service),
) -> ApiResponse[BookingResponse]:
    """
    Book a session with a mentor.

    Price fields are copied from the chosen service at this moment; later
    price edits do not change the booking. An overlapping booking for the
    same mentor yields 409.
    """
    try:
        booking = booking_service.create_booking(
            current_user,
            payload.mentor_id,
            payload.service_id,
            payload.session_date,
            session_topic=payload.session_topic,
            notes=payload.notes,
        )
    except DomainException as e:
        handle_domain_exception(e)

    return ApiResponse(
        data=BookingResponse.model_validate(booking),
        message="Booking created successfully",
    )


@router.get("/{booking_id}", response_model=ApiResponse[BookingResponse])
def get_booking(
    booking_id: str,
    current_user: User = Depends(get_current_user),
    booking_service: BookingService = Depends(get_booking_service),
) -> ApiResponse[BookingResponse]:
    try:
        booking = booking_service.get_booking(booking_id)
    except DomainException as e:
        handle_domain_exception(e)
    _ensure_participant(booking, current_user)
    return ApiResponse(data=BookingResponse.model_validate(booking))


@router.patch("/{booking_id}/status", response_model=ApiResponse[BookingResponse])
def update_booking_status(
    booking_id: str,
    payload: BookingStatusUpdate,
    current_user: User = Depends(get_current_user),
    booking_service: BookingService = Depends(get_booking_service),
) -> ApiResponse[BookingResponse]:
    try:
        booking = booking_service.transition_status(
            booking_id, payload.status, current_user, reason=payload.reason
        )
    except DomainException as e:
        handle_domain_exception(e)

    return ApiResponse(
        data=BookingResponse.model_validate(booking),
        message="Booking status updated successfully",
    )


@router.patch("/{booking_id}/payment-status", response_model=ApiResponse[BookingResponse])
def update_payment_status(
    booking_id: str,
    payload: PaymentStatusUpdate,
    current_user: User = Depends(get_current_user),
    booking_service: BookingService = Depends(get_booking_service),
) -> ApiResponse[BookingResponse]:
    try:
        booking = booking_service.get_booking(booking_id)
        _ensure_participant(booking, current_user)
        booking = booking_service.update_payment_status(booking_id, payload.payment_status)
    except DomainException as e:
        handle_domain_exception(e)

    return ApiResponse(data=BookingResponse.model_validate(booking))
