# backend/app/core/enums.py
"""
Core enums for the mentorship booking platform.

Closed value sets used across models, schemas and services so that string
fields are validated in one place.
"""

from enum import Enum


class UserType(str, Enum):
    """Account types. Students book sessions, mentors offer them."""

    STUDENT = "student"
    MENTOR = "mentor"


class Weekday(str, Enum):
    """Canonical weekday keys of a weekly schedule, Monday first."""

    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"

    @classmethod
    def from_index(cls, weekday: int) -> "Weekday":
        """Map ``date.weekday()`` (Monday == 0) to a schedule key."""
        return list(cls)[weekday]


class ScheduleErrorKind(str, Enum):
    """First-violation categories reported by schedule validation."""

    MISSING_DAY = "MISSING_DAY"
    INCOMPLETE_SLOT = "INCOMPLETE_SLOT"
    BAD_TIME_FORMAT = "BAD_TIME_FORMAT"
    INVERTED_RANGE = "INVERTED_RANGE"
    OVERLAPPING_SLOTS = "OVERLAPPING_SLOTS"
    BAD_TIMEZONE = "BAD_TIMEZONE"
