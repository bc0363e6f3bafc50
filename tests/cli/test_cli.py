"""
Tests for the compilerpaths command-line interface.
"""

import json
import logging
from unittest.mock import patch

import pytest
import yaml

from compilerpaths.cli.parser import CLI
from compilerpaths.cli.utils import format_output, load_cli_settings
from compilerpaths.core.exceptions import DiscoveryError
from compilerpaths.core.platform import PlatformTarget
from compilerpaths.toolchain.catalog import StaticCatalog

CONFIGURE_LOGGING = CLI._configure_logging


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path, monkeypatch):
    """Run each test where no compilerpaths.yaml exists."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture(autouse=True)
def keep_log_capture(monkeypatch):
    """Stop the CLI from replacing root handlers so caplog keeps working."""
    monkeypatch.setattr(CLI, "_configure_logging", lambda self, args: None)


@pytest.fixture
def machine(static_catalog):
    """Replace machine discovery with the static catalog on a 64-bit host."""
    with patch(
        "compilerpaths.cli.utils.default_catalog", return_value=static_catalog
    ) as mock_catalog, patch(
        "compilerpaths.toolchain.resolver.detect_host_platform",
        return_value=PlatformTarget.x64,
    ):
        yield mock_catalog


class TestCLIBasics:
    """Test basic CLI functionality."""

    def test_no_command_shows_help(self, capsys):
        """Test that running without command shows help."""
        result = CLI().run([])

        assert result == 1
        captured = capsys.readouterr()
        assert "usage:" in captured.out.lower()

    def test_version_flag(self, capsys):
        """Test --version flag."""
        with pytest.raises(SystemExit) as exc_info:
            CLI().run(["--version"])

        assert exc_info.value.code == 0
        assert "compilerpaths" in capsys.readouterr().out

    def test_resolve_arguments(self):
        """Test resolve command parsing."""
        args = CLI().parse_args(
            [
                "resolve",
                "--platform",
                "x64",
                "--toolchain-version",
                "16.6",
                "--sdk-version",
                "10.0.17763.0",
                "--format",
                "json",
            ]
        )

        assert args.command == "resolve"
        assert args.platform == "x64"
        assert args.toolchain_version == "16.6"
        assert args.sdk_version == "10.0.17763.0"
        assert args.format == "json"

    def test_invalid_format(self):
        """Test unknown output formats are rejected by argparse."""
        with pytest.raises(SystemExit):
            CLI().parse_args(["list", "--format", "xml"])


class TestResolveCommand:
    """Tests for the resolve command."""

    def test_json_output(self, machine, capsys):
        """Test JSON output of a resolution."""
        result = CLI().run(["resolve", "--platform", "x64", "--format", "json"])

        assert result == 0
        data = json.loads(capsys.readouterr().out)
        assert data["CompilerPath"] == "C:\\VS16\\bin\\Hostx64\\x64\\cl.exe"
        assert data["LibPaths"][0] == "C:\\VS16\\lib\\x64"

    def test_yaml_output(self, machine, capsys):
        """Test YAML output with an exact toolchain version."""
        result = CLI().run(
            ["resolve", "--platform", "Win32", "--toolchain-version", "14.0.0.0", "--format", "yaml"]
        )

        assert result == 0
        data = yaml.safe_load(capsys.readouterr().out)
        assert data["CompilerPath"] == "C:\\VS14\\bin\\Hostx64\\x86\\cl.exe"

    def test_text_output(self, machine, capsys):
        """Test the default text output."""
        assert CLI().run(["resolve", "--platform", "x86"]) == 0

        out = capsys.readouterr().out
        assert "CompilerPath: C:\\VS16\\bin\\Hostx64\\x86\\cl.exe" in out
        assert "IncludePaths:\n  C:\\VS16\\include" in out

    def test_platform_from_config(self, machine, isolated_cwd, capsys):
        """Test the platform falls back to the config file."""
        (isolated_cwd / "compilerpaths.yaml").write_text(
            "platform: AnyCPU\nsdk_version: '10.0.17763.0'\n"
        )

        assert CLI().run(["resolve", "--format", "json"]) == 0

        data = json.loads(capsys.readouterr().out)
        assert data["Platform"] == "x64"
        assert data["WinSDKVersion"] == "10.0.17763.0"

    def test_missing_platform(self, machine, caplog):
        """Test resolve without a platform fails."""
        assert CLI().run(["resolve"]) == 1
        assert "No platform given" in caplog.text

    def test_not_found_exit_code(self, machine, caplog):
        """Test a missing toolchain version exits with 1 and logs the error."""
        result = CLI().run(["resolve", "--platform", "x64", "--toolchain-version", "99.0"])

        assert result == 1
        assert "Visual Studio version not found: 99.0" in caplog.text

    def test_unsupported_platform_exit_code(self, machine):
        """Test an unknown platform exits with 1."""
        assert CLI().run(["resolve", "--platform", "ARM64"]) == 1

    def test_discovery_error_exit_code(self, caplog):
        """Test a discovery failure exits with 1."""
        with patch(
            "compilerpaths.cli.utils.default_catalog",
            return_value=StaticCatalog(),
        ), patch(
            "compilerpaths.toolchain.catalog.StaticCatalog.list_toolchains",
            side_effect=DiscoveryError("vswhere not found"),
        ):
            assert CLI().run(["resolve", "--platform", "x64"]) == 1
        assert "vswhere not found" in caplog.text

    def test_overrides_passed_to_catalog(self, machine, tmp_path):
        """Test --vswhere and --kits-root reach catalog construction."""
        CLI().run(
            [
                "resolve",
                "--platform",
                "x64",
                "--vswhere",
                str(tmp_path / "vswhere.exe"),
                "--kits-root",
                str(tmp_path / "Kits"),
            ]
        )

        kwargs = machine.call_args[1]
        assert kwargs["vswhere_path"] == tmp_path / "vswhere.exe"
        assert kwargs["kits_root"] == tmp_path / "Kits"


class TestListCommand:
    """Tests for the list command."""

    def test_json_listing(self, machine, capsys):
        """Test both catalogs are listed newest first."""
        assert CLI().run(["list", "--format", "json"]) == 0

        data = json.loads(capsys.readouterr().out)
        assert [t["version"] for t in data["Toolchains"]] == [
            "16.6.30204.135",
            "14.0.0.0",
        ]
        assert [s["version"] for s in data["WindowsSdks"]] == [
            "10.0.18362.0",
            "10.0.17763.0",
        ]

    def test_text_listing(self, machine, capsys):
        """Test the text listing shows one line per install."""
        assert CLI().run(["list"]) == 0

        out = capsys.readouterr().out
        assert "version=16.6.30204.135  root_path=C:\\VS16" in out
        assert "version=10.0.18362.0" in out


class TestUtils:
    """Tests for CLI utilities."""

    def test_flags_override_config(self, isolated_cwd):
        """Test command-line values win over the config file."""
        (isolated_cwd / "compilerpaths.yaml").write_text(
            "platform: x86\ntoolchain_version: '14.0'\n"
        )
        args = CLI().parse_args(["resolve", "--platform", "x64"])

        settings = load_cli_settings(args)

        assert settings.platform == "x64"
        assert settings.toolchain_version == "14.0"

    def test_verbose_logging(self):
        """Test --verbose switches the root logger to DEBUG."""
        args = CLI().parse_args(["--verbose", "list"])
        with patch("compilerpaths.cli.parser.logging.basicConfig") as mock_config:
            CONFIGURE_LOGGING(CLI(), args)

        assert mock_config.call_args[1]["level"] == logging.DEBUG

    def test_format_text(self):
        """Test text rendering of scalars and lists."""
        text = format_output({"A": "1", "B": ["x", "y"]}, "text")
        assert text == "A: 1\nB:\n  x\n  y"
