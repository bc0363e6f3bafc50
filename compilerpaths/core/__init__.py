"""
Core functionality for compilerpaths.

This package contains the foundational modules that other components depend on.
"""

from .platform import (
    PlatformTarget,
    parse_platform,
    get_supported_platforms,
    detect_host_platform,
    clear_platform_cache,
)

from .version import Version

from .exceptions import (
    CompilerPathsError,
    UnsupportedPlatformError,
    InvalidVersionFormatError,
    ConfigError,
    InstallNotFoundError,
    ToolchainNotFoundError,
    SdkNotFoundError,
    DiscoveryError,
    NotFoundError,
)

__all__ = [
    "PlatformTarget",
    "parse_platform",
    "get_supported_platforms",
    "detect_host_platform",
    "clear_platform_cache",
    "Version",
    "CompilerPathsError",
    "UnsupportedPlatformError",
    "InvalidVersionFormatError",
    "ConfigError",
    "InstallNotFoundError",
    "ToolchainNotFoundError",
    "SdkNotFoundError",
    "DiscoveryError",
    "NotFoundError",
]
