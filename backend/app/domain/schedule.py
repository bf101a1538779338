"""
Weekly schedule model and validation.

A mentor publishes a recurring weekly schedule: for every weekday, an ordered
list of non-overlapping clock-time ranges in the mentor's own timezone.
Submitted documents are validated fail-fast, reporting only the first
violation found while walking Monday through Sunday.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Sequence, Tuple

from ..core.constants import TIMEZONE_PATTERN
from ..core.enums import ScheduleErrorKind, Weekday
from ..core.exceptions import ScheduleValidationException
from .time_slots import TimeRange, parse_time_of_day

ScheduleDocument = Dict[str, List[Dict[str, str]]]


@dataclass(frozen=True)
class WeeklySchedule:
    """Validated weekly schedule with every day present and ranges sorted by start."""

    days: Mapping[Weekday, Tuple[TimeRange, ...]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        complete = {day: tuple(self.days.get(day, ())) for day in Weekday}
        object.__setattr__(self, "days", complete)

    @classmethod
    def empty(cls) -> "WeeklySchedule":
        return cls({})

    def ranges_for(self, day: Weekday) -> Tuple[TimeRange, ...]:
        return self.days[day]

    @property
    def is_empty(self) -> bool:
        return not any(self.days.values())

    def to_document(self) -> ScheduleDocument:
        """Serialise for the JSON document column and API responses."""
        return {day.value: [r.to_dict() for r in self.days[day]] for day in Weekday}

    @classmethod
    def from_document(cls, document: Any) -> "WeeklySchedule":
        """
        Rebuild a schedule read back from storage.

        Stored rows were validated on write, but the column is free-form JSON:
        a missing day is treated as an empty list and the rest is re-validated.
        """
        source = document if isinstance(document, Mapping) else {}
        filled = {day.value: source.get(day.value) or [] for day in Weekday}
        return validate_weekly_schedule(filled)


def _slot_value(slot: Any, key: str) -> Any:
    if isinstance(slot, Mapping):
        return slot.get(key)
    return getattr(slot, key, None)


def _validate_day(day: Weekday, slots: Sequence[Any]) -> Tuple[TimeRange, ...]:
    name = day.value
    ranges: List[TimeRange] = []

    for slot in slots:
        raw_start = _slot_value(slot, "start")
        raw_end = _slot_value(slot, "end")
        if not raw_start or not raw_end:
            raise ScheduleValidationException(
                ScheduleErrorKind.INCOMPLETE_SLOT,
                f"Each time slot must have start and end times on {name}",
                day=name,
            )

        start = parse_time_of_day(raw_start, day=name)
        end = parse_time_of_day(raw_end, day=name)

        if not start < end:
            raise ScheduleValidationException(
                ScheduleErrorKind.INVERTED_RANGE,
                f"Start time must be before end time on {name}",
                day=name,
            )
        ranges.append(TimeRange(start, end))

    ranges.sort(key=lambda r: r.start)
    for current, following in zip(ranges, ranges[1:]):
        if current.end > following.start:
            raise ScheduleValidationException(
                ScheduleErrorKind.OVERLAPPING_SLOTS,
                f"Overlapping time slots detected on {name}",
                day=name,
            )

    return tuple(ranges)


def validate_weekly_schedule(schedule: Any) -> WeeklySchedule:
    """
    Validate a raw schedule document and return it normalised.

    Checks, per day from Monday to Sunday, stopping at the first failure:
    the day key exists with a list value, every slot has ``start`` and ``end``,
    both are ``HH:MM``, ``start < end``, and no two slots overlap once sorted.

    Raises:
        ScheduleValidationException: describing the first violation
    """
    if not isinstance(schedule, Mapping):
        raise ScheduleValidationException(
            ScheduleErrorKind.MISSING_DAY,
            f"Schedule must include {Weekday.MONDAY.value} as an array",
            day=Weekday.MONDAY.value,
        )

    days: Dict[Weekday, Tuple[TimeRange, ...]] = {}
    for day in Weekday:
        slots = schedule.get(day.value)
        # Strings and mappings are iterable but are not slot lists
        if not isinstance(slots, (list, tuple)):
            raise ScheduleValidationException(
                ScheduleErrorKind.MISSING_DAY,
                f"Schedule must include {day.value} as an array",
                day=day.value,
            )
        days[day] = _validate_day(day, slots)

    return WeeklySchedule(days)


def validate_timezone(tz_name: Any) -> str:
    """
    Syntactic ``Region/City`` check for a timezone identifier.

    Deliberately loose: ``America/New_York`` passes, but so would a
    well-formed name that the tz database does not know.
    """
    if not isinstance(tz_name, str) or not TIMEZONE_PATTERN.fullmatch(tz_name):
        raise ScheduleValidationException(
            ScheduleErrorKind.BAD_TIMEZONE,
            "Invalid timezone format. Expected IANA identifier (e.g., America/New_York)",
        )
    return tz_name
