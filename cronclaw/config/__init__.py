"""Configuration for stored schedules and preview."""

from cronclaw.config.loader import get_config_path, load_config, save_config
from cronclaw.config.schema import Config, EveryXConfig, PreviewConfig, ScheduleConfig

__all__ = [
    "Config",
    "EveryXConfig",
    "PreviewConfig",
    "ScheduleConfig",
    "get_config_path",
    "load_config",
    "save_config",
]
