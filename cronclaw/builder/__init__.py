"""Fluent cron expression builder."""

from cronclaw.builder.expression import CronExpressionBuilder
from cronclaw.builder.fields import CRON_FIELDS, FIELD_RANGES, CronField, Schedule, TimeUnit

__all__ = [
    "CRON_FIELDS",
    "FIELD_RANGES",
    "CronExpressionBuilder",
    "CronField",
    "Schedule",
    "TimeUnit",
]
