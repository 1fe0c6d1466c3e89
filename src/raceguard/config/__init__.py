"""Configuration loading, schema, and defaults."""

from raceguard.config.loader import ConfigError, load_config
from raceguard.config.schema import RaceGuardConfig, Severity, severity_at_or_above

__all__ = [
    "ConfigError",
    "RaceGuardConfig",
    "Severity",
    "load_config",
    "severity_at_or_above",
]
