"""Job configuration loading and option resolution."""

from .loader import ConfigError, JobConfig, TimestampDefaults, load_config, resolve_options

__all__ = [
    "ConfigError",
    "JobConfig",
    "TimestampDefaults",
    "load_config",
    "resolve_options",
]
