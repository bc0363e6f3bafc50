"""
Unit tests for the platform module.

Tests cover:
- Platform token mapping
- AnyCPU host default
- Host architecture detection and normalization
- Cache behavior
"""

import pytest
from unittest.mock import patch

from compilerpaths.core.exceptions import UnsupportedPlatformError
from compilerpaths.core.platform import (
    PlatformTarget,
    clear_platform_cache,
    detect_host_platform,
    get_supported_platforms,
    parse_platform,
    _detect_architecture,
)


class TestParsePlatform:
    """Tests for parse_platform."""

    @pytest.mark.parametrize(
        "token,expected",
        [
            ("x86", PlatformTarget.x86),
            ("Win32", PlatformTarget.x86),
            ("x64", PlatformTarget.x64),
        ],
    )
    def test_fixed_tokens(self, token, expected):
        """Test tokens with a fixed mapping."""
        assert parse_platform(token) is expected

    def test_any_cpu_on_64bit_host(self):
        """Test AnyCPU resolves to x64 on a 64-bit host."""
        assert parse_platform("AnyCPU", host=PlatformTarget.x64) is PlatformTarget.x64

    def test_any_cpu_on_32bit_host(self):
        """Test AnyCPU resolves to x86 on a 32-bit host."""
        assert parse_platform("AnyCPU", host=PlatformTarget.x86) is PlatformTarget.x86

    def test_any_cpu_uses_detected_host(self):
        """Test AnyCPU falls back to host detection."""
        with patch(
            "compilerpaths.core.platform.detect_host_platform",
            return_value=PlatformTarget.x86,
        ):
            assert parse_platform("AnyCPU") is PlatformTarget.x86

    @pytest.mark.parametrize("token", ["ARM64", "X64", "win32", "Any CPU", "", None, "amd64"])
    def test_unrecognized_tokens(self, token):
        """Test unknown tokens fail instead of defaulting."""
        with pytest.raises(UnsupportedPlatformError) as exc_info:
            parse_platform(token)

        assert exc_info.value.platform == token

    def test_supported_platforms(self):
        """Test the advertised token list."""
        assert get_supported_platforms() == ["x86", "Win32", "x64", "AnyCPU"]

    def test_enum_str(self):
        """Test enum renders as its canonical name."""
        assert str(PlatformTarget.x64) == "x64"
        assert f"Host{PlatformTarget.x86}" == "Hostx86"


class TestDetectArchitecture:
    """Tests for architecture normalization."""

    @pytest.mark.parametrize(
        "machine,expected",
        [
            ("x86_64", "x64"),
            ("AMD64", "x64"),
            ("aarch64", "arm64"),
            ("ARM64", "arm64"),
            ("i686", "x86"),
            ("x86", "x86"),
            ("armv7l", "arm"),
            ("sparc", "sparc"),
        ],
    )
    def test_normalization(self, machine, expected):
        """Test machine names normalize to canonical architectures."""
        with patch("platform.machine", return_value=machine):
            assert _detect_architecture() == expected


class TestDetectHostPlatform:
    """Tests for host platform detection."""

    def test_64bit_machine(self):
        """Test a 64-bit OS reports an x64 host."""
        with patch("platform.machine", return_value="AMD64"):
            assert detect_host_platform() is PlatformTarget.x64

    def test_32bit_machine_and_process(self):
        """Test a 32-bit OS with a 32-bit process reports an x86 host."""
        with patch("platform.machine", return_value="x86"), patch(
            "compilerpaths.core.platform.sys.maxsize", 2**31 - 1
        ):
            assert detect_host_platform() is PlatformTarget.x86

    def test_64bit_process(self):
        """Test a 64-bit process implies a 64-bit host."""
        with patch("platform.machine", return_value="i686"), patch(
            "compilerpaths.core.platform.sys.maxsize", 2**63 - 1
        ):
            assert detect_host_platform() is PlatformTarget.x64

    def test_cached(self):
        """Test detection runs once until the cache is cleared."""
        with patch(
            "compilerpaths.core.platform._detect_architecture", return_value="x64"
        ) as mock_detect:
            detect_host_platform()
            detect_host_platform()
            assert mock_detect.call_count == 1

            clear_platform_cache()
            detect_host_platform()
            assert mock_detect.call_count == 2
