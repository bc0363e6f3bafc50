"""
Platform handling for compilerpaths.

This module maps caller-supplied platform tokens (as found in an MSBuild
'Platform' property) onto the canonical target architectures, and detects the
host architecture used to pick the compiler's Host* bin directory.

Recognized tokens:
    x86    -> x86
    Win32  -> x86
    x64    -> x64
    AnyCPU -> host default (x64 on a 64-bit host, otherwise x86)

Usage:
    from compilerpaths.core.platform import parse_platform, detect_host_platform

    target = parse_platform("Win32")
    print(f"Target: {target.value}, host: {detect_host_platform().value}")
"""

import enum
import functools
import logging
import platform
import sys
from typing import Dict, Optional

from .exceptions import UnsupportedPlatformError

logger = logging.getLogger(__name__)


class PlatformTarget(enum.Enum):
    """Canonical target (and host) architectures."""

    x86 = "x86"
    x64 = "x64"

    def __str__(self) -> str:
        return self.value


ANY_CPU_TOKEN = "AnyCPU"

# Exact, case-sensitive token table. AnyCPU is handled separately because its
# value depends on the host.
PLATFORM_TOKENS: Dict[str, PlatformTarget] = {
    "x86": PlatformTarget.x86,
    "Win32": PlatformTarget.x86,
    "x64": PlatformTarget.x64,
}


def parse_platform(
    token: Optional[str], host: Optional[PlatformTarget] = None
) -> PlatformTarget:
    """
    Convert a platform token into a PlatformTarget.

    Args:
        token: Platform token, e.g. 'x64' or 'Win32'
        host: Host platform used for 'AnyCPU'. Detected when None.

    Returns:
        Canonical target platform

    Raises:
        UnsupportedPlatformError: If the token is not recognized

    Example:
        >>> parse_platform("Win32")
        <PlatformTarget.x86: 'x86'>
    """
    if token == ANY_CPU_TOKEN:
        resolved = host if host is not None else detect_host_platform()
        logger.debug(f"Platform {ANY_CPU_TOKEN} resolved to host default {resolved}")
        return resolved

    try:
        return PLATFORM_TOKENS[token]  # type: ignore[index]
    except (KeyError, TypeError):
        raise UnsupportedPlatformError(token) from None


def get_supported_platforms() -> list[str]:
    """
    Get the list of all recognized platform tokens.

    Returns:
        Platform tokens in table order, followed by 'AnyCPU'
    """
    return list(PLATFORM_TOKENS) + [ANY_CPU_TOKEN]


@functools.lru_cache(maxsize=1)
def detect_host_platform() -> PlatformTarget:
    """
    Detect the host architecture.

    The host is x64 when either the operating system or the running process
    reports 64-bit capability, otherwise x86. This function is cached - it
    only runs detection once per process.

    Returns:
        PlatformTarget.x64 or PlatformTarget.x86
    """
    arch = _detect_architecture()
    is_64bit = arch in ("x64", "arm64") or sys.maxsize > 2**32
    host = PlatformTarget.x64 if is_64bit else PlatformTarget.x86
    logger.debug(f"Host architecture '{arch}' treated as {host}")
    return host


def _detect_architecture() -> str:
    """
    Detect CPU architecture.

    On Windows, platform.machine() reports the OS architecture even for a
    32-bit process running under WOW64.

    Returns:
        Normalized architecture: 'x64', 'arm64', 'x86', 'arm'
    """
    machine = platform.machine().lower()

    if machine in ("x86_64", "amd64", "x64"):
        return "x64"
    elif machine in ("aarch64", "arm64"):
        return "arm64"
    elif machine in ("i386", "i686", "x86"):
        return "x86"
    elif machine.startswith("arm"):
        return "arm"
    else:
        return machine


def clear_platform_cache():
    """
    Clear the host detection cache.

    This forces the next call to detect_host_platform() to re-detect.
    """
    detect_host_platform.cache_clear()


__all__ = [
    "PlatformTarget",
    "ANY_CPU_TOKEN",
    "PLATFORM_TOKENS",
    "parse_platform",
    "get_supported_platforms",
    "detect_host_platform",
    "clear_platform_cache",
]
