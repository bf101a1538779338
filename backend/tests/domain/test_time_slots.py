# backend/tests/domain/test_time_slots.py
from datetime import datetime, timedelta, timezone

import pytest

from app.core.enums import ScheduleErrorKind
from app.core.exceptions import ScheduleValidationException
from app.domain.time_slots import (
    SessionInterval,
    TimeRange,
    overlaps,
    parse_time_of_day,
    range_from_session,
)


class TestParseTimeOfDay:
    @pytest.mark.parametrize(
        "raw, expected",
        [("00:00", "00:00"), ("09:30", "09:30"), ("9:30", "09:30"), ("23:59", "23:59")],
    )
    def test_accepts_24_hour_values(self, raw, expected):
        assert str(parse_time_of_day(raw)) == expected

    @pytest.mark.parametrize("raw", ["24:00", "12:60", "9", "09:5", "ab:cd", "", None, 930])
    def test_rejects_malformed_values(self, raw):
        with pytest.raises(ScheduleValidationException) as exc_info:
            parse_time_of_day(raw, day="monday")
        assert exc_info.value.kind is ScheduleErrorKind.BAD_TIME_FORMAT
        assert exc_info.value.day == "monday"


class TestTimeRangeOverlap:
    def test_partial_overlap(self):
        assert TimeRange.parse("09:00", "11:00").overlaps(TimeRange.parse("10:00", "12:00"))

    def test_touching_ranges_do_not_overlap(self):
        morning = TimeRange.parse("09:00", "10:00")
        late_morning = TimeRange.parse("10:00", "11:00")
        assert not morning.overlaps(late_morning)
        assert not overlaps(late_morning, morning)

    def test_containment_counts_as_overlap(self):
        outer = TimeRange.parse("08:00", "18:00")
        inner = TimeRange.parse("12:00", "13:00")
        assert outer.overlaps(inner)
        assert outer.contains(inner)
        assert not inner.contains(outer)

    def test_inverted_range_is_rejected(self):
        with pytest.raises(ValueError):
            TimeRange.parse("11:00", "10:00")


class TestSessionInterval:
    start = datetime(2031, 3, 3, 10, 0, tzinfo=timezone.utc)

    def test_range_from_session_uses_duration(self):
        interval = range_from_session(self.start, 60)
        assert interval.end == self.start + timedelta(hours=1)
        assert interval.duration_minutes == 60

    def test_naive_datetimes_are_utc(self):
        naive = range_from_session(datetime(2031, 3, 3, 10, 0), 30)
        assert naive.start == self.start

    @pytest.mark.parametrize(
        "offset_minutes, expected",
        [(-60, False), (-30, True), (0, True), (30, True), (60, False)],
    )
    def test_overlap_boundaries(self, offset_minutes, expected):
        existing = range_from_session(self.start, 60)
        proposed = range_from_session(self.start + timedelta(minutes=offset_minutes), 60)
        assert existing.overlaps(proposed) is expected
        assert overlaps(proposed, existing) is expected

    def test_split_drops_partial_tail(self):
        window = SessionInterval(self.start, self.start + timedelta(minutes=150))
        slots = list(window.split(60))
        assert [s.start for s in slots] == [self.start, self.start + timedelta(hours=1)]
        assert all(s.duration_minutes == 60 for s in slots)

    def test_cannot_compare_clock_ranges_with_instants(self):
        with pytest.raises(TypeError):
            overlaps(TimeRange.parse("09:00", "10:00"), range_from_session(self.start, 60))

    def test_non_positive_duration_is_rejected(self):
        with pytest.raises(ValueError):
            range_from_session(self.start, 0)
