"""Configuration schema using Pydantic."""

from __future__ import annotations

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationInfo,
    field_validator,
    model_validator,
)
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from cronclaw.builder.expression import CronExpressionBuilder
from cronclaw.builder.fields import CronField
from cronclaw.builder.validators import (
    validate_field_value,
    validate_time,
    validate_time_unit,
    validate_values,
)


class Base(BaseModel):
    """Base model with convenient defaults."""

    model_config = ConfigDict(populate_by_name=True)


class EveryXConfig(Base):
    """Step directive: every ``interval`` units of a cron field."""

    interval: int
    unit: str  # minute, hour, dayOfMonth, month or dayOfWeek

    @field_validator("unit")
    @classmethod
    def _check_unit(cls, v: str) -> str:
        return CronField.parse(v).value

    @model_validator(mode="after")
    def _check_interval(self) -> EveryXConfig:
        validate_field_value(self.unit, self.interval)
        return self


class ScheduleConfig(Base):
    """A stored schedule, described by the directives that build it.

    Directives are replayed in a fixed order, presets first and explicit
    times last, so a stored schedule always compiles to the same expression.
    """

    description: str = ""
    every: str | None = None  # minute, hour, day, month or week
    every_x: EveryXConfig | None = None
    days_of_month: list[int] | None = None
    months: list[int] | None = None
    weekdays: list[int] | None = None
    at: str | None = None  # "HH:MM"
    hours: list[int] | None = None
    minutes: list[int] | None = None

    @field_validator("every")
    @classmethod
    def _check_every(cls, v: str | None) -> str | None:
        return validate_time_unit(v).value if v is not None else v

    @field_validator("at")
    @classmethod
    def _check_at(cls, v: str | None) -> str | None:
        if v is not None:
            validate_time(v)
        return v

    @field_validator("days_of_month", "months", "weekdays", "hours", "minutes")
    @classmethod
    def _check_values(cls, v: list[int] | None, info: ValidationInfo) -> list[int] | None:
        if v is None:
            return v
        field = {
            "days_of_month": CronField.DAY_OF_MONTH,
            "months": CronField.MONTH,
            "weekdays": CronField.DAY_OF_WEEK,
            "hours": CronField.HOUR,
            "minutes": CronField.MINUTE,
        }[info.field_name]
        return validate_values(field, v)

    def build(self) -> CronExpressionBuilder:
        """Replay the stored directives onto a fresh builder."""
        builder = CronExpressionBuilder()
        if self.every:
            builder.every(self.every)
        if self.every_x:
            builder.every_x(self.every_x.interval, self.every_x.unit)
        if self.days_of_month:
            builder.on_days_of_month(self.days_of_month)
        if self.months:
            builder.during_months(self.months)
        if self.weekdays:
            builder.on_week_days(self.weekdays)
        if self.at:
            builder.at_time(self.at)
        if self.hours:
            builder.at_hours(self.hours)
        if self.minutes:
            builder.at_minutes(self.minutes)
        return builder

    def compile(self) -> str:
        return self.build().compile()


class PreviewConfig(Base):
    """Upcoming run-time preview settings."""

    timezone: str = "UTC"
    count: int = Field(default=5, ge=1)


class Config(BaseSettings):
    """Root configuration for cronclaw."""

    schedules: dict[str, ScheduleConfig] = Field(default_factory=dict)
    preview: PreviewConfig = Field(default_factory=PreviewConfig)

    model_config = ConfigDict(env_prefix="CRONCLAW_", env_nested_delimiter="__")

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # Environment overrides values loaded from the config file
        return env_settings, init_settings, dotenv_settings, file_secret_settings
