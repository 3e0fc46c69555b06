"""Project-level exception hierarchy."""


class CronClawError(Exception):
    """Base for all cronclaw exceptions."""


class ValidationError(CronClawError, ValueError):
    """A directive received a value outside its field's legal range or format."""
