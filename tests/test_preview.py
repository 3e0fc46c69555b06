"""Tests for the APScheduler-backed run-time preview."""

from datetime import datetime, timezone

import pytest
from apscheduler.triggers.combining import OrTrigger
from apscheduler.triggers.cron import CronTrigger

from cronclaw.builder.expression import CronExpressionBuilder
from cronclaw.builder.fields import CronField
from cronclaw.errors import ValidationError
from cronclaw.scheduler.preview import build_trigger, next_run_times

START = datetime(2026, 1, 1, 0, 30, tzinfo=timezone.utc)  # a Thursday


class TestNextRunTimes:
    def test_daily_at_noon(self):
        times = next_run_times("0 12 * * *", count=2, start=START)
        assert [t.replace(tzinfo=None) for t in times] == [
            datetime(2026, 1, 1, 12, 0),
            datetime(2026, 1, 2, 12, 0),
        ]

    def test_step_minutes(self):
        times = next_run_times("*/15 * * * *", count=3, start=START)
        assert [(t.hour, t.minute) for t in times] == [(0, 30), (0, 45), (1, 0)]

    def test_sunday_is_zero(self):
        expression = CronExpressionBuilder().every("week").compile()
        times = next_run_times(expression, count=2, start=START)
        assert [t.date().isoformat() for t in times] == ["2026-01-04", "2026-01-11"]
        assert all(t.weekday() == 6 for t in times)

    def test_weekday_range(self):
        expression = CronExpressionBuilder().at_time("09:00").on_week_days([1, 2, 3, 4, 5]).compile()
        times = next_run_times(expression, count=3, start=START)
        assert [t.day for t in times] == [1, 2, 5]

    def test_weekday_step(self):
        expression = CronExpressionBuilder().every_x(3, CronField.DAY_OF_WEEK).compile()
        times = next_run_times(expression, count=3, start=START)
        # */3 -> Sunday, Wednesday, Saturday
        assert [t.day for t in times] == [3, 4, 7]

    def test_count_validated(self):
        with pytest.raises(ValidationError, match="positive"):
            next_run_times("* * * * *", count=0, start=START)


class TestBuildTrigger:
    def test_wrong_field_count(self):
        with pytest.raises(ValidationError, match="Expected 5 fields"):
            build_trigger("0 12 * *")

    def test_bad_token(self):
        with pytest.raises(ValidationError, match="Invalid cron expression"):
            build_trigger("99 12 * * *")

    def test_unknown_timezone(self):
        with pytest.raises(ValidationError, match="Unknown timezone"):
            build_trigger("0 12 * * *", timezone="Mars/Olympus")


class TestDayOfMonthOrDayOfWeek:
    def test_either_day_field_matches(self):
        expression = CronExpressionBuilder().at_time("09:00").on_days_of_month([1]).on_week_days([1]).compile()
        assert expression == "0 9 1 * 1"
        times = next_run_times(expression, count=3, start=START)
        # the 1st of the month, then Mondays
        assert [t.day for t in times] == [1, 5, 12]
        assert [t.hour for t in times] == [9, 9, 9]

    def test_shared_fire_time_listed_once(self):
        # 2026-06-01 is a Monday and also the 1st
        start = datetime(2026, 5, 31, tzinfo=timezone.utc)
        times = next_run_times("0 9 1 * 1", count=2, start=start)
        assert [t.date().isoformat() for t in times] == ["2026-06-01", "2026-06-08"]

    def test_single_restriction_keeps_one_trigger(self):
        assert isinstance(build_trigger("0 9 1 * *"), CronTrigger)
        assert isinstance(build_trigger("0 9 1 * 1"), OrTrigger)
