"""Preview of upcoming run times for compiled expressions."""

from cronclaw.scheduler.preview import build_trigger, next_run_times

__all__ = ["build_trigger", "next_run_times"]
