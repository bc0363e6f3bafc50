"""
Centralized exception hierarchy for compilerpaths.

Every failure raised by discovery, selection or resolution derives from
CompilerPathsError and carries the offending input as an attribute.
"""

from typing import Optional


# ============================================================================
# Base Exceptions
# ============================================================================


class CompilerPathsError(Exception):
    """Base exception for all compilerpaths errors."""

    pass


# ============================================================================
# Input Exceptions
# ============================================================================


class UnsupportedPlatformError(CompilerPathsError):
    """Raised when a platform token is not one of the recognized set."""

    def __init__(self, platform: Optional[str]):
        self.platform = platform
        super().__init__(f"Unknown platform supplied: {platform!r}")


class InvalidVersionFormatError(CompilerPathsError):
    """Raised when a version string is not a dotted-integer version."""

    def __init__(self, version_string: Optional[str], subject: str = ""):
        self.version_string = version_string
        self.subject = subject
        msg = "Invalid version format"
        if subject:
            msg += f" for {subject}"
        super().__init__(f"{msg}: {version_string!r}")


class ConfigError(CompilerPathsError):
    """Configuration parsing or validation error."""

    pass


# ============================================================================
# Selection Exceptions
# ============================================================================


class InstallNotFoundError(CompilerPathsError):
    """Base exception when a requested install version is not in the catalog."""

    subject = "install"

    def __init__(self, version: str):
        self.version = version
        super().__init__(f"{self.subject} version not found: {version}")


class ToolchainNotFoundError(InstallNotFoundError):
    """Raised when the requested toolchain version is not installed."""

    subject = "Visual Studio"


class SdkNotFoundError(InstallNotFoundError):
    """Raised when the requested platform SDK version is not installed."""

    subject = "Windows SDK"


# ============================================================================
# Discovery Exceptions
# ============================================================================


class DiscoveryError(CompilerPathsError):
    """Raised when the underlying enumeration mechanism is unavailable."""

    pass


class NotFoundError(CompilerPathsError):
    """Raised when a catalog is empty: nothing admissible is installed."""

    def __init__(self, subject: str, message: Optional[str] = None):
        self.subject = subject
        super().__init__(message or f"No {subject} installation found.")
