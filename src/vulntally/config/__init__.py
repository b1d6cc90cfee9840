"""Configuration loading, schema, and defaults."""

from vulntally.config.loader import ConfigError, load_config
from vulntally.config.schema import SEVERITY_TIERS, Severity, VulntallyConfig

__all__ = [
    "ConfigError",
    "SEVERITY_TIERS",
    "Severity",
    "VulntallyConfig",
    "load_config",
]
