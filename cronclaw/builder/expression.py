"""Fluent builder turning scheduling intent into a cron expression."""

from __future__ import annotations

from collections.abc import Iterable

from loguru import logger

from cronclaw.builder.fields import CRON_FIELDS, WILDCARD, CronField, Schedule, TimeUnit
from cronclaw.builder.formatter import format_cron_part, set_default
from cronclaw.builder.validators import (
    validate_field_value,
    validate_time,
    validate_time_unit,
    validate_values,
)

# Tokens written by every(); fields absent from a preset are left untouched
_EVERY_PRESETS: dict[TimeUnit, dict[CronField, str]] = {
    TimeUnit.MINUTE: {CronField.MINUTE: "*"},
    TimeUnit.HOUR: {CronField.MINUTE: "0", CronField.HOUR: "*"},
    TimeUnit.DAY: {
        CronField.MINUTE: "0",
        CronField.HOUR: "0",
        CronField.DAY_OF_MONTH: "*",
    },
    TimeUnit.MONTH: {
        CronField.MINUTE: "0",
        CronField.HOUR: "0",
        CronField.DAY_OF_MONTH: "1",
        CronField.MONTH: "*",
    },
    TimeUnit.WEEK: {
        CronField.MINUTE: "0",
        CronField.HOUR: "0",
        CronField.DAY_OF_MONTH: "*",
        CronField.MONTH: "*",
        CronField.DAY_OF_WEEK: "0",
    },
}

# Companion tokens anchoring an every_x() step
_STEP_ANCHORS: dict[CronField, dict[CronField, str]] = {
    CronField.MINUTE: {CronField.HOUR: "*"},
    CronField.HOUR: {CronField.MINUTE: "0"},
    CronField.DAY_OF_MONTH: {CronField.MINUTE: "0", CronField.HOUR: "0"},
    CronField.MONTH: {
        CronField.MINUTE: "0",
        CronField.HOUR: "0",
        CronField.DAY_OF_MONTH: "1",
    },
    CronField.DAY_OF_WEEK: {CronField.MINUTE: "0", CronField.HOUR: "0"},
}


class CronExpressionBuilder:
    """Build a five-field cron expression with a fluent API.

    Every directive validates its input before touching the schedule and
    returns the builder, so calls chain::

        CronExpressionBuilder().at_time("09:00").on_week_days([1, 2, 3, 4, 5]).compile()
        # -> "0 9 * * 1-5"

    Later directives overwrite earlier ones field by field. Presets such as
    ``every("day")`` write several fields at once, so chain order matters:
    ``every("day").at_hours([12])`` runs at noon while
    ``at_hours([12]).every("day")`` runs at midnight.
    """

    def __init__(self) -> None:
        self._schedule = Schedule()

    @property
    def schedule(self) -> dict[str, str | None]:
        """Current field tokens; unset fields are ``None``."""
        return self._schedule.as_dict()

    def _assign(self, tokens: dict[CronField, str]) -> CronExpressionBuilder:
        for field, token in tokens.items():
            self._schedule.set(field, token)
        return self

    def _set_values(self, field: CronField, values: Iterable[int]) -> CronExpressionBuilder:
        token = format_cron_part(validate_values(field, values))
        logger.debug("Cron {} set to {}", field.value, token)
        return self._assign({field: token})

    def at_minutes(self, minutes: Iterable[int]) -> CronExpressionBuilder:
        """Run at the given minute(s) of the hour (0-59)."""
        return self._set_values(CronField.MINUTE, minutes)

    def at_hours(self, hours: Iterable[int]) -> CronExpressionBuilder:
        """Run at the given hour(s) of the day (0-23).

        If no minute has been chosen yet the job runs at the top of the hour.
        """
        self._set_values(CronField.HOUR, hours)
        set_default(self._schedule, CronField.MINUTE, 0)
        return self

    def at_time(self, time: str) -> CronExpressionBuilder:
        """Run at a time of day given as ``H:M`` or ``HH:MM``."""
        hour, minute = validate_time(time)
        logger.debug("Cron time set to {}:{:02d}", hour, minute)
        return self._assign({CronField.MINUTE: str(minute), CronField.HOUR: str(hour)})

    def every(self, unit: TimeUnit | str) -> CronExpressionBuilder:
        """Run once per minute, hour, day, month or week."""
        unit = validate_time_unit(unit)
        logger.debug("Cron preset: every {}", unit.value)
        return self._assign(_EVERY_PRESETS[unit])

    def every_x(self, interval: int, unit: CronField | str) -> CronExpressionBuilder:
        """Run every ``interval`` units of the given cron field."""
        field = CronField.parse(unit)
        interval = validate_field_value(field, interval)
        logger.debug("Cron step: every {} {}", interval, field.value)
        return self._assign({**_STEP_ANCHORS[field], field: f"*/{interval}"})

    def on_week_days(self, days: Iterable[int]) -> CronExpressionBuilder:
        """Restrict to days of the week (0=Sunday .. 6=Saturday)."""
        return self._set_values(CronField.DAY_OF_WEEK, days)

    def on_days_of_month(self, days: Iterable[int]) -> CronExpressionBuilder:
        """Restrict to days of the month (1-31)."""
        return self._set_values(CronField.DAY_OF_MONTH, days)

    def during_months(self, months: Iterable[int]) -> CronExpressionBuilder:
        """Restrict to months (1-12)."""
        return self._set_values(CronField.MONTH, months)

    def compile(self) -> str:
        """Return the cron expression, using ``*`` for every unset field."""
        final = self._schedule.copy()
        for field in CRON_FIELDS:
            set_default(final, field, WILDCARD)
        expression = " ".join(final[field] for field in CRON_FIELDS)
        logger.debug("Compiled cron expression: {}", expression)
        return expression

    # camelCase names kept for callers ported from the JavaScript API
    atMinutes = at_minutes
    atHours = at_hours
    atTime = at_time
    everyX = every_x
    onWeekDays = on_week_days
    onDaysOfMonth = on_days_of_month
    duringMonths = during_months

    def __str__(self) -> str:
        return self.compile()

    def __repr__(self) -> str:
        return f"CronExpressionBuilder({self.schedule!r})"
