"""
Time primitives for availability and booking math.

Two spaces are kept apart on purpose:

* clock time inside a mentor's weekly schedule (``TimeOfDay`` / ``TimeRange``),
  which has no date and no timezone, and
* absolute UTC instants for booked sessions (``SessionInterval``).

Both use the same half-open overlap rule: ``[a.start, a.end)`` and
``[b.start, b.end)`` overlap iff ``a.start < b.end and b.start < a.end``.
Touching ranges (``a.end == b.start``) therefore never overlap.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time, timedelta, timezone
from functools import total_ordering
from typing import Any, Dict, Iterator, Union

from ..core.constants import TIME_OF_DAY_PATTERN
from ..core.enums import ScheduleErrorKind
from ..core.exceptions import ScheduleValidationException


@total_ordering
@dataclass(frozen=True)
class TimeOfDay:
    """A wall-clock value between 00:00 and 23:59."""

    hour: int
    minute: int

    def __post_init__(self) -> None:
        if not (0 <= self.hour <= 23 and 0 <= self.minute <= 59):
            raise ValueError(f"Time of day out of range: {self.hour}:{self.minute}")

    @property
    def minutes(self) -> int:
        """Minutes since midnight."""
        return self.hour * 60 + self.minute

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, TimeOfDay):
            return NotImplemented
        return self.minutes < other.minutes

    def __str__(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"

    def to_time(self) -> time:
        return time(self.hour, self.minute)


def parse_time_of_day(value: Any, *, day: str | None = None) -> TimeOfDay:
    """
    Parse an ``HH:MM`` 24-hour string.

    A single-digit hour (``9:05``) is accepted and normalised to ``09:05``.

    Raises:
        ScheduleValidationException: kind ``BAD_TIME_FORMAT``
    """
    if not isinstance(value, str) or not TIME_OF_DAY_PATTERN.fullmatch(value):
        where = f" on {day}" if day else ""
        raise ScheduleValidationException(
            ScheduleErrorKind.BAD_TIME_FORMAT,
            f"Invalid time format{where}. Expected HH:MM (24-hour format)",
            day=day,
        )
    hour, minute = value.split(":")
    return TimeOfDay(int(hour), int(minute))


@dataclass(frozen=True)
class TimeRange:
    """A clock-time interval within a single day; ``start < end`` always holds."""

    start: TimeOfDay
    end: TimeOfDay

    def __post_init__(self) -> None:
        if not self.start < self.end:
            raise ValueError(f"Time range start must be before end: {self.start}-{self.end}")

    @classmethod
    def parse(cls, start: str, end: str) -> "TimeRange":
        return cls(parse_time_of_day(start), parse_time_of_day(end))

    @property
    def duration_minutes(self) -> int:
        return self.end.minutes - self.start.minutes

    def overlaps(self, other: "TimeRange") -> bool:
        return self.start < other.end and other.start < self.end

    def contains(self, other: "TimeRange") -> bool:
        return self.start <= other.start and other.end <= self.end

    def to_dict(self) -> Dict[str, str]:
        return {"start": str(self.start), "end": str(self.end)}

    def __str__(self) -> str:
        return f"{self.start}-{self.end}"


def ensure_utc(value: datetime) -> datetime:
    """Return an aware UTC datetime; naive values are taken to already be UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


@dataclass(frozen=True)
class SessionInterval:
    """A booked or proposed session as a half-open interval of UTC instants."""

    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        object.__setattr__(self, "start", ensure_utc(self.start))
        object.__setattr__(self, "end", ensure_utc(self.end))
        if not self.start < self.end:
            raise ValueError("Session interval must have positive length")

    @property
    def duration_minutes(self) -> int:
        return int((self.end - self.start).total_seconds() // 60)

    def overlaps(self, other: "SessionInterval") -> bool:
        return self.start < other.end and other.start < self.end

    def contains(self, other: "SessionInterval") -> bool:
        return self.start <= other.start and other.end <= self.end

    def split(self, slot_minutes: int) -> Iterator["SessionInterval"]:
        """Yield consecutive ``slot_minutes`` slots that fit entirely inside this interval."""
        step = timedelta(minutes=slot_minutes)
        cursor = self.start
        while cursor + step <= self.end:
            yield SessionInterval(cursor, cursor + step)
            cursor += step


def overlaps(
    a: Union[TimeRange, SessionInterval], b: Union[TimeRange, SessionInterval]
) -> bool:
    """Half-open overlap test for two ranges of the same kind."""
    if type(a) is not type(b):
        raise TypeError("Cannot compare clock-time ranges with UTC session intervals")
    return a.start < b.end and b.start < a.end


def range_from_session(start: datetime, duration_minutes: int) -> SessionInterval:
    """Build ``[start, start + duration)`` in UTC-instant space."""
    if duration_minutes <= 0:
        raise ValueError("Session duration must be positive")
    start_utc = ensure_utc(start)
    return SessionInterval(start_utc, start_utc + timedelta(minutes=duration_minutes))
