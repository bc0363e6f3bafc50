"""YAML configuration parser for compilerpaths.

This module provides parsing and validation for compilerpaths.yaml files.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from ..core.exceptions import ConfigError, InvalidVersionFormatError
from ..core.platform import get_supported_platforms
from ..core.version import Version
from ..toolchain.discovery import DEFAULT_VSWHERE_TIMEOUT

CONFIG_FILE_NAME = "compilerpaths.yaml"

_TOP_LEVEL_KEYS = {"version", "platform", "toolchain_version", "sdk_version", "discovery"}
_DISCOVERY_KEYS = {"vswhere_path", "kits_root", "vswhere_timeout"}


@dataclass
class DiscoveryConfig:
    """Overrides for catalog enumeration."""

    vswhere_path: Optional[Path] = None
    kits_root: Optional[Path] = None
    vswhere_timeout: int = DEFAULT_VSWHERE_TIMEOUT


@dataclass
class Settings:
    """Complete compilerpaths configuration."""

    version: int = 1
    platform: Optional[str] = None
    toolchain_version: Optional[str] = None
    sdk_version: Optional[str] = None
    discovery: DiscoveryConfig = field(default_factory=DiscoveryConfig)


def parse_config(config_path: Path) -> Settings:
    """
    Parse compilerpaths.yaml configuration file.

    Args:
        config_path: Path to compilerpaths.yaml

    Returns:
        Parsed and validated settings

    Raises:
        ConfigError: If configuration is invalid
    """
    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML syntax: {e}")

    if data is None:
        return Settings()

    return _parse_and_validate(data)


def load_settings(config_path: Optional[Path] = None, search_dir: Optional[Path] = None) -> Settings:
    """
    Load settings from an explicit file or the default file in search_dir.

    A missing default file yields default settings; a missing explicit file
    is an error.
    """
    if config_path is not None:
        return parse_config(Path(config_path))

    default_path = (search_dir or Path.cwd()) / CONFIG_FILE_NAME
    if default_path.exists():
        return parse_config(default_path)
    return Settings()


def _parse_and_validate(data: Any) -> Settings:
    """Parse and validate configuration data."""
    if not isinstance(data, dict):
        raise ConfigError("Configuration must be a mapping")

    unknown = set(data) - _TOP_LEVEL_KEYS
    if unknown:
        raise ConfigError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")

    version = data.get("version", 1)
    if version != 1:
        raise ConfigError(f"Unsupported version: {version} (expected 1)")

    platform = _optional_str(data, "platform")
    if platform is not None and platform not in get_supported_platforms():
        raise ConfigError(
            f"Invalid platform '{platform}'. "
            f"Must be one of: {', '.join(get_supported_platforms())}"
        )

    settings = Settings(
        version=version,
        platform=platform,
        toolchain_version=_optional_version(data, "toolchain_version"),
        sdk_version=_optional_version(data, "sdk_version"),
        discovery=_parse_discovery(data.get("discovery")),
    )
    return settings


def _parse_discovery(data: Any) -> DiscoveryConfig:
    if data is None:
        return DiscoveryConfig()
    if not isinstance(data, dict):
        raise ConfigError("'discovery' must be a mapping")

    unknown = set(data) - _DISCOVERY_KEYS
    if unknown:
        raise ConfigError(f"Unknown discovery keys: {', '.join(sorted(unknown))}")

    timeout = data.get("vswhere_timeout", DEFAULT_VSWHERE_TIMEOUT)
    if isinstance(timeout, bool) or not isinstance(timeout, int) or timeout <= 0:
        raise ConfigError(f"'vswhere_timeout' must be a positive integer, got {timeout!r}")

    vswhere_path = _optional_str(data, "vswhere_path")
    kits_root = _optional_str(data, "kits_root")
    return DiscoveryConfig(
        vswhere_path=Path(vswhere_path) if vswhere_path else None,
        kits_root=Path(kits_root) if kits_root else None,
        vswhere_timeout=timeout,
    )


def _optional_str(data: Dict[str, Any], key: str) -> Optional[str]:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise ConfigError(f"'{key}' must be a string, got {type(value).__name__}")
    return value


def _optional_version(data: Dict[str, Any], key: str) -> Optional[str]:
    value = data.get(key)
    if value is None:
        return None
    # YAML turns an unquoted 16.10 into the float 16.1.
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        raise ConfigError(
            f"'{key}' must be quoted to be read as a version string, got {value!r}"
        )
    if not isinstance(value, str):
        raise ConfigError(f"'{key}' must be a version string, got {type(value).__name__}")
    try:
        Version.parse(value, key)
    except InvalidVersionFormatError as e:
        raise ConfigError(str(e)) from e
    return value
