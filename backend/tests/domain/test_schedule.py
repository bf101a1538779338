# backend/tests/domain/test_schedule.py
import pytest

from app.core.enums import ScheduleErrorKind, Weekday
from app.core.exceptions import ScheduleValidationException
from app.domain.schedule import WeeklySchedule, validate_timezone, validate_weekly_schedule

DAYS = [day.value for day in Weekday]


def week(**overrides):
    schedule = {day: [] for day in DAYS}
    schedule.update(overrides)
    return schedule


def assert_kind(schedule, kind, day=None):
    with pytest.raises(ScheduleValidationException) as exc_info:
        validate_weekly_schedule(schedule)
    assert exc_info.value.kind is kind
    if day is not None:
        assert exc_info.value.day == day
    return exc_info.value


class TestValidateWeeklySchedule:
    def test_empty_week_is_valid(self):
        result = validate_weekly_schedule(week())
        assert result.is_empty
        assert set(result.to_document()) == set(DAYS)

    def test_slots_are_sorted_by_start(self):
        result = validate_weekly_schedule(
            week(monday=[{"start": "13:00", "end": "15:00"}, {"start": "9:00", "end": "10:00"}])
        )
        assert result.to_document()["monday"] == [
            {"start": "09:00", "end": "10:00"},
            {"start": "13:00", "end": "15:00"},
        ]

    def test_adjacent_slots_are_allowed(self):
        result = validate_weekly_schedule(
            week(friday=[{"start": "09:00", "end": "10:00"}, {"start": "10:00", "end": "11:00"}])
        )
        assert len(result.ranges_for(Weekday.FRIDAY)) == 2

    def test_missing_day(self):
        schedule = week()
        del schedule["wednesday"]
        error = assert_kind(schedule, ScheduleErrorKind.MISSING_DAY, day="wednesday")
        assert error.message == "Schedule must include wednesday as an array"

    def test_day_that_is_not_a_list(self):
        assert_kind(week(tuesday="09:00-10:00"), ScheduleErrorKind.MISSING_DAY, day="tuesday")

    def test_non_mapping_schedule(self):
        assert_kind(["monday"], ScheduleErrorKind.MISSING_DAY, day="monday")

    def test_incomplete_slot(self):
        assert_kind(week(monday=[{"start": "09:00"}]), ScheduleErrorKind.INCOMPLETE_SLOT, "monday")

    def test_bad_time_format(self):
        assert_kind(
            week(thursday=[{"start": "9am", "end": "10:00"}]),
            ScheduleErrorKind.BAD_TIME_FORMAT,
            "thursday",
        )

    def test_inverted_range(self):
        assert_kind(
            week(saturday=[{"start": "10:00", "end": "10:00"}]),
            ScheduleErrorKind.INVERTED_RANGE,
            "saturday",
        )

    def test_overlapping_slots(self):
        error = assert_kind(
            week(sunday=[{"start": "10:00", "end": "12:00"}, {"start": "11:30", "end": "13:00"}]),
            ScheduleErrorKind.OVERLAPPING_SLOTS,
            "sunday",
        )
        assert error.message == "Overlapping time slots detected on sunday"

    def test_first_violation_wins_in_weekday_order(self):
        schedule = week(
            monday=[{"start": "bad", "end": "10:00"}],
            tuesday=[{"start": "09:00"}],
        )
        del schedule["sunday"]
        assert_kind(schedule, ScheduleErrorKind.BAD_TIME_FORMAT, day="monday")

    def test_revalidating_normalised_output_is_idempotent(self):
        first = validate_weekly_schedule(
            week(
                monday=[{"start": "14:00", "end": "16:00"}, {"start": "8:15", "end": "9:45"}],
                friday=[{"start": "18:00", "end": "20:00"}],
            )
        )
        second = validate_weekly_schedule(first.to_document())
        assert second == first
        assert second.to_document() == first.to_document()


class TestFromDocument:
    def test_missing_days_read_as_empty(self):
        schedule = WeeklySchedule.from_document({"monday": [{"start": "09:00", "end": "10:00"}]})
        assert len(schedule.ranges_for(Weekday.MONDAY)) == 1
        assert schedule.ranges_for(Weekday.SUNDAY) == ()

    def test_non_mapping_reads_as_empty_week(self):
        assert WeeklySchedule.from_document(None).is_empty


class TestValidateTimezone:
    @pytest.mark.parametrize("name", ["America/New_York", "Europe/London", "Asia/Kolkata"])
    def test_region_city_names_pass(self, name):
        assert validate_timezone(name) == name

    @pytest.mark.parametrize("name", ["UTC", "EST", "America/", "/London", "Etc/GMT+5", "", None])
    def test_other_shapes_fail(self, name):
        with pytest.raises(ScheduleValidationException) as exc_info:
            validate_timezone(name)
        assert exc_info.value.kind is ScheduleErrorKind.BAD_TIMEZONE
