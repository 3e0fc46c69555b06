"""Range and format checks for cron field values."""

from __future__ import annotations

import re
from collections.abc import Iterable
from numbers import Real
from typing import Any

from cronclaw.builder.fields import FIELD_RANGES, CronField, TimeUnit
from cronclaw.errors import ValidationError

TIME_PATTERN = re.compile(r"^([0-1]?[0-9]|2[0-3]):([0-5]?[0-9])$")

_FIELD_LABELS = {
    CronField.MINUTE: ("minute", "Minute"),
    CronField.HOUR: ("hour", "Hour"),
    CronField.DAY_OF_MONTH: ("day of month", "Day"),
    CronField.MONTH: ("month", "Month"),
    CronField.DAY_OF_WEEK: ("day of week", "Day"),
}


def _as_integer(value: Any) -> int | None:
    # bool is an int subclass but never a cron value
    if isinstance(value, bool) or not isinstance(value, Real):
        return None
    if isinstance(value, int):
        return value
    if float(value).is_integer():
        return int(value)
    return None


def validate_field_value(field: CronField | str, value: Any) -> int:
    """Check that ``value`` is an integer within ``field``'s cron range.

    Returns:
        The value as ``int``.
    Raises:
        ValidationError: If the value is not integral or out of range.
    """
    field = CronField.parse(field)
    low, high = FIELD_RANGES[field]
    name, subject = _FIELD_LABELS[field]
    number = _as_integer(value)
    if number is None or not low <= number <= high:
        if field is CronField.DAY_OF_WEEK:
            bounds = f"{low} (Sunday) and {high} (Saturday)"
        else:
            bounds = f"{low} and {high}"
        raise ValidationError(
            f"Invalid {name}: {value}. {subject} should be between {bounds}."
        )
    return number


def validate_minute(minute: Any) -> int:
    return validate_field_value(CronField.MINUTE, minute)


def validate_hour(hour: Any) -> int:
    return validate_field_value(CronField.HOUR, hour)


def validate_day_of_month(day: Any) -> int:
    return validate_field_value(CronField.DAY_OF_MONTH, day)


def validate_month(month: Any) -> int:
    return validate_field_value(CronField.MONTH, month)


def validate_day_of_week(day: Any) -> int:
    return validate_field_value(CronField.DAY_OF_WEEK, day)


def validate_values(field: CronField | str, values: Iterable[Any]) -> list[int]:
    """Validate every value of a non-empty sequence against ``field``."""
    if isinstance(values, (str, bytes)) or not isinstance(values, Iterable):
        raise ValidationError(
            f"Expected a sequence of integers for {CronField.parse(field).value}, got {values!r}"
        )
    checked = [validate_field_value(field, v) for v in values]
    if not checked:
        raise ValidationError(f"At least one value is required for {CronField.parse(field).value}")
    return checked


def validate_time(time: Any) -> tuple[int, int]:
    """Validate an ``H:M`` / ``HH:MM`` time string.

    Returns:
        ``(hour, minute)`` with leading zeros stripped.
    """
    m = TIME_PATTERN.fullmatch(time) if isinstance(time, str) else None
    if not m:
        raise ValidationError(f"Invalid time format for 'at': {time}")
    return int(m.group(1)), int(m.group(2))


def validate_time_unit(unit: Any) -> TimeUnit:
    """Map an ``every()`` unit string onto :class:`TimeUnit`."""
    if isinstance(unit, TimeUnit):
        return unit
    try:
        return TimeUnit(unit)
    except ValueError:
        raise ValidationError(f"Invalid time unit for cron: {unit}") from None
