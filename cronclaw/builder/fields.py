"""Cron field names, every-units and the mutable schedule they index."""

from __future__ import annotations

from enum import Enum
from typing import Iterator

from cronclaw.errors import ValidationError


class CronField(str, Enum):
    """The five positions of a cron expression."""

    MINUTE = "minute"
    HOUR = "hour"
    DAY_OF_MONTH = "dayOfMonth"
    MONTH = "month"
    DAY_OF_WEEK = "dayOfWeek"

    @classmethod
    def parse(cls, value: str | CronField) -> CronField:
        """Map a free-form field name onto the enum."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise ValidationError(f"Invalid cron field: {value}") from None


class TimeUnit(str, Enum):
    """Units accepted by ``every()``."""

    MINUTE = "minute"
    HOUR = "hour"
    DAY = "day"
    MONTH = "month"
    WEEK = "week"


# Output order of a compiled expression
CRON_FIELDS: tuple[CronField, ...] = (
    CronField.MINUTE,
    CronField.HOUR,
    CronField.DAY_OF_MONTH,
    CronField.MONTH,
    CronField.DAY_OF_WEEK,
)

FIELD_RANGES: dict[CronField, tuple[int, int]] = {
    CronField.MINUTE: (0, 59),
    CronField.HOUR: (0, 23),
    CronField.DAY_OF_MONTH: (1, 31),
    CronField.MONTH: (1, 12),
    CronField.DAY_OF_WEEK: (0, 6),
}

WILDCARD = "*"


class Schedule:
    """Field-to-token mapping; a field is unset until a directive writes it."""

    def __init__(self, tokens: dict[CronField, str] | None = None) -> None:
        self._tokens: dict[CronField, str | None] = {f: None for f in CRON_FIELDS}
        for field, token in (tokens or {}).items():
            self.set(field, token)

    def get(self, field: CronField | str) -> str | None:
        return self._tokens[CronField.parse(field)]

    def set(self, field: CronField | str, token: str) -> None:
        if not token:
            raise ValidationError(f"Empty token for {CronField.parse(field).value}")
        self._tokens[CronField.parse(field)] = token

    def is_set(self, field: CronField | str) -> bool:
        return self.get(field) is not None

    def copy(self) -> Schedule:
        return Schedule({f: t for f, t in self._tokens.items() if t is not None})

    def as_dict(self) -> dict[str, str | None]:
        return {f.value: t for f, t in self._tokens.items()}

    def __getitem__(self, field: CronField | str) -> str | None:
        return self.get(field)

    def __setitem__(self, field: CronField | str, token: str) -> None:
        self.set(field, token)

    def __iter__(self) -> Iterator[CronField]:
        return iter(CRON_FIELDS)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Schedule):
            return NotImplemented
        return self._tokens == other._tokens

    def __repr__(self) -> str:
        return f"Schedule({self.as_dict()!r})"
