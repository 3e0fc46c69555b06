"""cronclaw - human-intent scheduling calls to five-field cron expressions."""

__version__ = "0.1.0"

from cronclaw.builder import CronExpressionBuilder, CronField, TimeUnit
from cronclaw.errors import CronClawError, ValidationError

__all__ = [
    "CronClawError",
    "CronExpressionBuilder",
    "CronField",
    "TimeUnit",
    "ValidationError",
    "__version__",
]
