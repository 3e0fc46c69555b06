"""Upcoming fire times of a compiled cron expression, via APScheduler."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from apscheduler.triggers.base import BaseTrigger
from apscheduler.triggers.combining import OrTrigger
from apscheduler.triggers.cron import CronTrigger
from loguru import logger

from cronclaw.builder.fields import CRON_FIELDS, FIELD_RANGES, CronField
from cronclaw.errors import ValidationError

# APScheduler counts weekdays from Monday; cron counts from Sunday
_WEEKDAY_NAMES = ("sun", "mon", "tue", "wed", "thu", "fri", "sat")


def _expand_day_of_week(token: str) -> str:
    """Rewrite a cron day-of-week token as APScheduler weekday names."""
    if token == "*":
        return token
    low, high = FIELD_RANGES[CronField.DAY_OF_WEEK]
    days: set[int] = set()
    for part in token.split(","):
        if part.startswith("*/"):
            days.update(range(low, high + 1, int(part[2:])))
        elif "-" in part:
            start, end = part.split("-", 1)
            days.update(range(int(start), int(end) + 1))
        else:
            days.add(int(part))
    return ",".join(_WEEKDAY_NAMES[d] for d in sorted(days))


def _resolve_timezone(timezone: str | tzinfo) -> tzinfo:
    if isinstance(timezone, tzinfo):
        return timezone
    if timezone.upper() == "UTC":
        return UTC
    try:
        return ZoneInfo(timezone)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ValidationError(f"Unknown timezone: {timezone}") from e


def build_trigger(expression: str, timezone: str | tzinfo = "UTC") -> BaseTrigger:
    """Create an APScheduler trigger equivalent to a five-field expression.

    When both day of month and day of week are restricted, cron fires on
    either match, so the result is an ``OrTrigger`` of one trigger per field.

    Raises:
        ValidationError: If the expression is malformed.
    """
    parts = expression.split()
    if len(parts) != len(CRON_FIELDS):
        raise ValidationError(
            f"Expected {len(CRON_FIELDS)} fields in cron expression, got {len(parts)}: {expression!r}"
        )
    minute, hour, day, month, day_of_week = parts
    tz = _resolve_timezone(timezone)
    try:
        weekdays = _expand_day_of_week(day_of_week)
        days = [(day, weekdays)]
        if day != "*" and weekdays != "*":
            days = [(day, "*"), ("*", weekdays)]
        triggers = [
            CronTrigger(minute=minute, hour=hour, day=d, month=month, day_of_week=w, timezone=tz)
            for d, w in days
        ]
    except (ValueError, IndexError) as e:
        raise ValidationError(f"Invalid cron expression {expression!r}: {e}") from e
    return triggers[0] if len(triggers) == 1 else OrTrigger(triggers)


def next_run_times(
    expression: str,
    count: int = 5,
    start: datetime | None = None,
    timezone: str | tzinfo = "UTC",
) -> list[datetime]:
    """Return the next ``count`` fire times of ``expression`` at or after ``start``."""
    if count < 1:
        raise ValidationError(f"Preview count must be positive: {count}")
    tz = _resolve_timezone(timezone)
    trigger = build_trigger(expression, tz)
    now = start.astimezone(tz) if start else datetime.now(tz)

    times: list[datetime] = []
    previous: datetime | None = None
    while len(times) < count:
        fire = trigger.get_next_fire_time(previous, now)
        if fire is None:
            break
        times.append(fire)
        previous = fire
        now = fire + timedelta(microseconds=1)
    logger.debug("Preview of {}: {}", expression, [t.isoformat() for t in times])
    return times
