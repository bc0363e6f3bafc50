"""
Configuration for compilerpaths.

Settings are read from an optional compilerpaths.yaml file and overridden by
command-line flags.
"""

from ..core.exceptions import ConfigError
from .parser import (
    CONFIG_FILE_NAME,
    DiscoveryConfig,
    Settings,
    load_settings,
    parse_config,
)

__all__ = [
    "ConfigError",
    "CONFIG_FILE_NAME",
    "DiscoveryConfig",
    "Settings",
    "load_settings",
    "parse_config",
]
