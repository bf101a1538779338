# backend/app/routes/dashboard.py
"""
Mentor dashboard routes.

Endpoints:
    GET /mentor/availability - Own schedule in editor format
    PUT /mentor/availability - Validate and store the full weekly schedule
    GET /mentor/services - Own priced services
    PUT /mentor/services - Validated full replacement of the service list
"""

import logging
from typing import List

from fastapi import APIRouter, Depends

from ..api.dependencies import (
    get_availability_service,
    get_mentor_pricing_service,
    require_mentor,
)
from ..core.exceptions import DomainException
from ..models.user import User
from ..schemas.availability import (
    AvailabilityResponse,
    AvailabilityUpdate,
    DashboardAvailabilityResponse,
    dashboard_schedule,
)
from ..schemas.base_responses import ApiResponse
from ..schemas.mentor_service import MentorServiceResponse, MentorServicesUpdate
from ..services.availability_service import AvailabilityService
from ..services.mentor_pricing_service import MentorPricingService
from .mentors import handle_domain_exception

logger = logging.getLogger(__name__)

router = APIRouter(tags=["dashboard"])


@router.get("/mentor/availability", response_model=DashboardAvailabilityResponse)
def get_own_availability(
    current_user: User = Depends(require_mentor),
    availability_service: AvailabilityService = Depends(get_availability_service),
) -> DashboardAvailabilityResponse:
    try:
        view = availability_service.get_dashboard_availability(current_user.id)
    except DomainException as e:
        handle_domain_exception(e)

    return DashboardAvailabilityResponse(
        schedule=dashboard_schedule(view.schedule),
        timezone=view.timezone,
        requires_timezone=view.requires_timezone,
    )


@router.put("/mentor/availability", response_model=ApiResponse[AvailabilityResponse])
def save_own_availability(
    payload: AvailabilityUpdate,
    current_user: User = Depends(require_mentor),
    availability_service: AvailabilityService = Depends(get_availability_service),
) -> ApiResponse[AvailabilityResponse]:
    """
    Replace the mentor's weekly schedule.

    The first validation failure is returned as a 400 with its message; the
    stored schedule is untouched in that case.
    """
    try:
        record = availability_service.save_availability(
            current_user.id, payload.timezone, payload.schedule
        )
    except DomainException as e:
        handle_domain_exception(e)

    return ApiResponse(
        data=AvailabilityResponse.model_validate(record),
        message="Availability saved successfully",
    )


@router.get("/mentor/services", response_model=ApiResponse[List[MentorServiceResponse]])
def get_own_services(
    current_user: User = Depends(require_mentor),
    pricing_service: MentorPricingService = Depends(get_mentor_pricing_service),
) -> ApiResponse[List[MentorServiceResponse]]:
    try:
        services = pricing_service.list_own_services(current_user.id)
    except DomainException as e:
        handle_domain_exception(e)
    return ApiResponse(data=[MentorServiceResponse.model_validate(s) for s in services])


@router.put("/mentor/services", response_model=ApiResponse[List[MentorServiceResponse]])
def replace_own_services(
    payload: MentorServicesUpdate,
    current_user: User = Depends(require_mentor),
    pricing_service: MentorPricingService = Depends(get_mentor_pricing_service),
) -> ApiResponse[List[MentorServiceResponse]]:
    try:
        services = pricing_service.replace_services(current_user.id, payload.services)
    except DomainException as e:
        handle_domain_exception(e)

    return ApiResponse(
        data=[MentorServiceResponse.model_validate(s) for s in services],
        message="Services saved successfully",
    )
