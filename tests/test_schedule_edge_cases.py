"""
Tests for schedule edge cases including time parsing, weekday numbering and
timezone anchoring.
"""

from datetime import date, datetime, time

import pytest
import pytz
from pydantic import ValidationError

from peak_status.database.seed import PUBLIC_HOLIDAYS_2025, default_schedule_rules
from peak_status.models.schedule import PeriodLabel, Provider, ScheduleRule
from peak_status.utils.time_utils import (
    at_time_of_day,
    get_operating_timezone,
    parse_time_of_day,
    seconds_until,
    store_weekday,
    to_operating_time,
)


class TestTimeOfDayParsing:
    """Test strict HH:MM parsing."""

    @pytest.mark.parametrize("value,expected", [
        ("00:00", time(0, 0)),
        ("09:00", time(9, 0)),
        ("9:05", time(9, 5)),
        ("23:59", time(23, 59)),
        (" 22:00 ", time(22, 0)),
    ])
    def test_valid(self, value, expected):
        assert parse_time_of_day(value) == expected

    @pytest.mark.parametrize("value", ["24:00", "12:60", "noon", "12", "12:00:00", "", "-1:00"])
    def test_invalid(self, value):
        with pytest.raises(ValueError):
            parse_time_of_day(value)

    def test_time_passes_through(self):
        assert parse_time_of_day(time(6, 30)) == time(6, 30)


class TestWeekdayNumbering:
    """Weekdays follow the store numbering where Sunday is 0."""

    @pytest.mark.parametrize("day,expected", [
        (date(2025, 1, 5), 0),   # Sunday
        (date(2025, 1, 6), 1),   # Monday
        (date(2025, 1, 1), 3),   # Wednesday
        (date(2025, 1, 4), 6),   # Saturday
    ])
    def test_store_weekday(self, day, expected):
        assert store_weekday(day) == expected


class TestTimezoneAnchoring:
    """Test that instants are read in the operating timezone."""

    def test_unknown_timezone(self):
        with pytest.raises(ValueError, match="Unknown timezone"):
            get_operating_timezone("Nowhere/Special")

    def test_naive_is_wall_time(self):
        tz = get_operating_timezone("Asia/Bangkok")
        result = to_operating_time(datetime(2025, 1, 6, 9, 0), tz)

        assert result.hour == 9
        assert result.utcoffset().total_seconds() == 7 * 3600

    def test_aware_is_converted(self):
        tz = get_operating_timezone("Asia/Bangkok")
        result = to_operating_time(pytz.utc.localize(datetime(2025, 1, 6, 20, 0)), tz)

        assert result.date() == date(2025, 1, 7)
        assert result.hour == 3

    def test_at_time_of_day_across_dst(self):
        tz = get_operating_timezone("Europe/Copenhagen")
        winter = at_time_of_day(date(2025, 3, 29), time(12, 0), tz)
        summer = at_time_of_day(date(2025, 3, 30), time(12, 0), tz)

        assert winter.utcoffset().total_seconds() == 3600
        assert summer.utcoffset().total_seconds() == 7200
        assert seconds_until(summer, winter) == 23 * 3600

    def test_seconds_until_truncates(self):
        tz = get_operating_timezone("Asia/Bangkok")
        now = tz.localize(datetime(2025, 1, 6, 9, 0, 0, 999999))
        target = tz.localize(datetime(2025, 1, 6, 9, 0, 2))

        assert seconds_until(target, now) == 1


class TestScheduleRuleModel:
    """Test rule model validation and serialization."""

    def test_serializes_with_store_field_names(self):
        rule = ScheduleRule(provider=Provider.MEA, day_of_week=1, start_time="09:00", end_time="22:00", is_peak=True)

        data = rule.model_dump(by_alias=True, mode="json")

        assert data == {
            "provider": "MEA",
            "dayOfWeek": 1,
            "specificDate": None,
            "startTime": "09:00",
            "endTime": "22:00",
            "isPeak": True,
        }

    def test_requires_exactly_one_applies_to(self):
        with pytest.raises(ValidationError, match="exactly one"):
            ScheduleRule(provider="MEA", start_time="09:00", end_time="22:00", is_peak=True)

        with pytest.raises(ValidationError, match="exactly one"):
            ScheduleRule(
                provider="MEA",
                day_of_week=1,
                specific_date=date(2025, 1, 1),
                start_time="09:00",
                end_time="22:00",
                is_peak=True,
            )

    def test_end_time_before_start_time_is_kept(self):
        # end_time is recorded only; resolution never reads it
        rule = ScheduleRule(provider="PEA", day_of_week=2, start_time="22:00", end_time="06:00", is_peak=False)

        assert rule.end_time == time(6, 0)

    def test_rules_are_immutable(self):
        rule = ScheduleRule(provider="MEA", day_of_week=1, start_time="09:00", end_time="22:00", is_peak=True)

        with pytest.raises(ValidationError):
            rule.is_peak = False

    def test_period_label(self):
        assert PeriodLabel.from_is_peak(True) == PeriodLabel.ON_PEAK
        assert PeriodLabel.from_is_peak(False) == PeriodLabel.OFF_PEAK


class TestDefaultSchedule:
    """Test the seeded default rule set."""

    def test_rule_counts(self):
        rules = default_schedule_rules()
        per_provider = 5 * 3 + 2 + len(PUBLIC_HOLIDAYS_2025)

        assert len(rules) == 2 * per_provider
        assert sum(1 for r in rules if r.provider == Provider.MEA) == per_provider

    def test_every_weekly_day_starts_at_midnight(self):
        rules = default_schedule_rules()

        for day in range(7):
            starts = [r.start_time for r in rules if r.provider == Provider.PEA and r.day_of_week == day]
            assert time(0, 0) in starts

    def test_custom_holidays(self):
        rules = default_schedule_rules(holidays=[date(2026, 1, 1)])

        assert {r.specific_date for r in rules if r.specific_date} == {date(2026, 1, 1)}
