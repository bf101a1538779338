"""
Timezone utilities for the mentorship booking platform.

Mentors publish schedules in their own wall-clock time; bookings are UTC
instants. These helpers convert between the two with pytz so DST gaps and
folds are resolved consistently.
"""

from datetime import date, datetime, time, timedelta
from typing import Any, Optional, Tuple

import pytz

from .exceptions import InvalidSessionDateException, ValidationException


def get_timezone(name: str) -> Any:
    """
    Return the pytz timezone for an IANA name.

    Raises:
        pytz.UnknownTimeZoneError: if the name is not in the tz database
    """
    return pytz.timezone(name)


def is_known_timezone(name: str) -> bool:
    try:
        get_timezone(name)
    except pytz.UnknownTimeZoneError:
        return False
    return True


def local_to_utc(day: date, wall_time: time, tz_name: str) -> datetime:
    """
    Convert a wall-clock time on ``day`` in ``tz_name`` to an aware UTC datetime.

    Nonexistent times (spring-forward gap) are pushed forward by ``normalize``;
    ambiguous times (fall-back fold) resolve to the standard-time instant.
    """
    tz = get_timezone(tz_name)
    local = tz.normalize(tz.localize(datetime.combine(day, wall_time), is_dst=False))
    return local.astimezone(pytz.UTC)


def utc_day_bounds(day: date) -> Tuple[datetime, datetime]:
    """``[00:00, next 00:00)`` of ``day`` in UTC."""
    start = pytz.UTC.localize(datetime.combine(day, time.min))
    return start, start + timedelta(days=1)


def utc_now() -> datetime:
    return datetime.now(pytz.UTC)


def parse_session_date(value: Any) -> datetime:
    """
    Parse an ISO-8601 instant into an aware UTC datetime.

    Accepts a trailing ``Z``. Naive values are taken to be UTC.

    Raises:
        InvalidSessionDateException: if the value is not a parseable instant
    """
    if isinstance(value, datetime):
        parsed: Optional[datetime] = value
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            raise InvalidSessionDateException(value)
    else:
        raise InvalidSessionDateException(value)

    if parsed.tzinfo is None:
        return pytz.UTC.localize(parsed)
    return parsed.astimezone(pytz.UTC)


def parse_calendar_date(value: Optional[str]) -> date:
    """
    Parse a ``YYYY-MM-DD`` query value.

    Full timestamps are accepted and truncated to their date part, which is
    what the booking widget sends.
    """
    if value is None or not value.strip():
        raise ValidationException("Date parameter is required", code="MISSING_DATE")
    text = value.strip()
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        raise ValidationException("Invalid date format", code="INVALID_DATE", details={"value": value})
