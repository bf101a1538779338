"""
Availability schemas.

The weekly schedule is validated by the domain layer, which reports the first
violation with a precise message; request fields are therefore left untyped
here so malformed documents reach that validator intact.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import ConfigDict, Field

from ..core.enums import Weekday
from ..domain.schedule import WeeklySchedule
from ._strict_base import CamelResponseModel, StrictRequestModel


class AvailabilityUpdate(StrictRequestModel):
    """Body of ``PUT /dashboard/mentor/availability``."""

    timezone: Any = Field(default=None, description="IANA identifier, e.g. America/New_York")
    schedule: Any = Field(
        default=None,
        description="All seven lowercase weekdays mapped to lists of {start, end} HH:MM slots",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "timezone": "America/New_York",
                "schedule": {
                    "monday": [{"start": "09:00", "end": "12:00"}],
                    "tuesday": [],
                    "wednesday": [],
                    "thursday": [],
                    "friday": [],
                    "saturday": [],
                    "sunday": [],
                },
            }
        }
    )


class AvailabilityResponse(CamelResponseModel):
    """Stored availability, as returned by the public mentor endpoint and after saving."""

    id: str
    mentor_id: str
    timezone: str
    schedule: Dict[str, List[Dict[str, str]]]
    created_at: datetime
    updated_at: datetime


class DashboardSlot(CamelResponseModel):
    id: str
    start_time: str
    end_time: str


class DashboardAvailabilityResponse(CamelResponseModel):
    """
    Mentor dashboard view.

    Days are capitalised and slots carry a stable ``{day}-{index}`` id for the
    editor component.
    """

    success: bool = True
    schedule: Dict[str, List[DashboardSlot]]
    timezone: Optional[str] = None
    requires_timezone: bool


def dashboard_schedule(schedule: WeeklySchedule) -> Dict[str, List[DashboardSlot]]:
    return {
        day.value.capitalize(): [
            DashboardSlot(
                id=f"{day.value}-{index}",
                start_time=str(time_range.start),
                end_time=str(time_range.end),
            )
            for index, time_range in enumerate(schedule.ranges_for(day))
        ]
        for day in Weekday
    }


class BookableSlotResponse(CamelResponseModel):
    """A free session the student can book, in UTC."""

    start_time: datetime
    end_time: datetime
    duration_minutes: int
