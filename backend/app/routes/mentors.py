# backend/app/routes/mentors.py
"""
Public mentor routes.

Endpoints:
    GET /{mentor_id}/availability - Stored weekly schedule or null
    GET /{mentor_id}/services - Mentor's priced services, newest first
    GET /{mentor_id}/slots - Bookable UTC sessions for one mentor-local date
"""

import logging
from typing import List, NoReturn, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ..api.dependencies import get_availability_service, get_mentor_pricing_service
from ..core.exceptions import DomainException
from ..core.timezone_utils import parse_calendar_date
from ..schemas.availability import AvailabilityResponse, BookableSlotResponse
from ..schemas.base_responses import ApiResponse
from ..schemas.mentor_service import MentorServiceResponse
from ..services.availability_service import AvailabilityService
from ..services.mentor_pricing_service import MentorPricingService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["mentors"])


def handle_domain_exception(exc: DomainException) -> NoReturn:
    """Convert domain exceptions to HTTP exceptions."""
    if hasattr(exc, "to_http_exception"):
        raise exc.to_http_exception()
    raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))


@router.get(
    "/{mentor_id}/availability",
    response_model=ApiResponse[Optional[AvailabilityResponse]],
)
def get_mentor_availability(
    mentor_id: str,
    availability_service: AvailabilityService = Depends(get_availability_service),
) -> ApiResponse[Optional[AvailabilityResponse]]:
    try:
        record = availability_service.get_public_availability(mentor_id)
    except DomainException as e:
        handle_domain_exception(e)

    if record is None:
        return ApiResponse(data=None, message="No availability set for this mentor")
    return ApiResponse(data=AvailabilityResponse.model_validate(record))


@router.get(
    "/{mentor_id}/services",
    response_model=ApiResponse[List[MentorServiceResponse]],
)
def get_mentor_services(
    mentor_id: str,
    pricing_service: MentorPricingService = Depends(get_mentor_pricing_service),
) -> ApiResponse[List[MentorServiceResponse]]:
    try:
        services = pricing_service.list_public_services(mentor_id)
    except DomainException as e:
        handle_domain_exception(e)
    return ApiResponse(data=[MentorServiceResponse.model_validate(s) for s in services])


@router.get(
    "/{mentor_id}/slots",
    response_model=ApiResponse[List[BookableSlotResponse]],
)
def get_bookable_slots(
    mentor_id: str,
    date: Optional[str] = Query(default=None, description="Mentor-local date, YYYY-MM-DD"),
    duration: Optional[int] = Query(default=None, ge=15, le=240),
    availability_service: AvailabilityService = Depends(get_availability_service),
) -> ApiResponse[List[BookableSlotResponse]]:
    """
    Free sessions a student can book on ``date``.

    The weekly schedule is expanded in the mentor's timezone; past slots and
    slots overlapping a non-cancelled booking are left out.
    """
    try:
        day = parse_calendar_date(date)
        slots = availability_service.get_bookable_slots(mentor_id, day, duration)
    except DomainException as e:
        handle_domain_exception(e)

    return ApiResponse(
        data=[
            BookableSlotResponse(
                start_time=slot.start,
                end_time=slot.end,
                duration_minutes=slot.duration_minutes,
            )
            for slot in slots
        ]
    )
