"""Rendering of integer sets into cron tokens."""

from __future__ import annotations

from collections.abc import Iterable

from cronclaw.builder.fields import CronField, Schedule
from cronclaw.errors import ValidationError


def is_contiguous(numbers: Iterable[int]) -> bool:
    """True if the sorted numbers form a gapless run."""
    ordered = sorted(numbers)
    return all(b == a + 1 for a, b in zip(ordered, ordered[1:]))


def format_cron_part(values: Iterable[int]) -> str:
    """Format integers as a cron token.

    Values are de-duplicated and sorted. Three or more consecutive values
    collapse to ``min-max``; anything else is a comma list.
    """
    unique = sorted(set(values))
    if not unique:
        raise ValidationError("Cannot format an empty set of values")
    if len(unique) > 2 and is_contiguous(unique):
        return f"{unique[0]}-{unique[-1]}"
    return ",".join(str(v) for v in unique)


def set_default(schedule: Schedule, field: CronField | str, value: str | int) -> None:
    """Write ``value`` into ``field`` only if the field is unset."""
    if not schedule.is_set(field):
        schedule.set(field, str(value))
