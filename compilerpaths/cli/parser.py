"""
compilerpaths CLI argument parser.

This module implements the command-line interface for compilerpaths using argparse.
"""

import argparse
import importlib
import logging
import sys
from pathlib import Path
from typing import List, Optional

from compilerpaths.core.exceptions import CompilerPathsError
from compilerpaths.core.platform import get_supported_platforms

# Get version from package
try:
    from importlib.metadata import version

    __version__ = version("compilerpaths")
except Exception:
    __version__ = "0.1.0"

logger = logging.getLogger(__name__)

OUTPUT_FORMATS = ["json", "yaml", "text"]


class CLI:
    """compilerpaths command-line interface."""

    def __init__(self):
        """Initialize CLI with argument parser."""
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """
        Create argument parser with all subcommands.

        Returns:
            Configured ArgumentParser instance
        """
        parser = argparse.ArgumentParser(
            prog="compilerpaths",
            description="compilerpaths - locate the MSVC compiler and Windows SDK",
            epilog='Use "compilerpaths COMMAND --help" for command-specific help',
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        # Global options
        parser.add_argument(
            "--version", action="version", version=f"compilerpaths {__version__}"
        )
        parser.add_argument(
            "--verbose", "-v", action="store_true", help="Enable verbose output"
        )
        parser.add_argument(
            "--quiet",
            "-q",
            action="store_true",
            help="Enable minimal output (errors only)",
        )
        parser.add_argument(
            "--config",
            type=Path,
            metavar="PATH",
            help="Path to configuration file (default: ./compilerpaths.yaml)",
        )

        subparsers = parser.add_subparsers(
            dest="command", help="Available commands", metavar="COMMAND"
        )

        self._add_resolve_command(subparsers)
        self._add_list_command(subparsers)

        return parser

    def _add_discovery_options(self, parser):
        """Options shared by commands that enumerate the machine catalog."""
        parser.add_argument(
            "--vswhere",
            type=Path,
            metavar="PATH",
            help="Path to vswhere.exe (default: Visual Studio Installer directory)",
        )
        parser.add_argument(
            "--kits-root",
            type=Path,
            metavar="PATH",
            help="Windows Kits 10 root (default: read from the registry)",
        )
        parser.add_argument(
            "--format",
            choices=OUTPUT_FORMATS,
            default="text",
            metavar="FORMAT",
            help="Output format (json|yaml|text) [default: text]",
        )

    def _add_resolve_command(self, subparsers):
        """Add 'resolve' subcommand."""
        parser = subparsers.add_parser(
            "resolve",
            help="Resolve compiler, include and library paths",
            description="Resolve the cl.exe path, include paths and library "
            "paths for a target platform",
        )
        parser.add_argument(
            "--platform",
            metavar="PLATFORM",
            help=f"Target platform ({'|'.join(get_supported_platforms())})",
        )
        parser.add_argument(
            "--toolchain-version",
            metavar="VERSION",
            help="Exact Visual Studio version (default: latest)",
        )
        parser.add_argument(
            "--sdk-version",
            metavar="VERSION",
            help="Exact Windows SDK version (default: latest)",
        )
        self._add_discovery_options(parser)

    def _add_list_command(self, subparsers):
        """Add 'list' subcommand."""
        parser = subparsers.add_parser(
            "list",
            help="List installed toolchains and SDKs",
            description="List discovered Visual Studio and Windows SDK "
            "installations, newest first",
        )
        self._add_discovery_options(parser)

    def parse_args(self, args: Optional[List[str]] = None):
        """
        Parse command-line arguments.

        Args:
            args: Arguments to parse (uses sys.argv if None)

        Returns:
            Parsed arguments namespace
        """
        return self.parser.parse_args(args)

    def run(self, args: Optional[List[str]] = None) -> int:
        """
        Run CLI with given arguments.

        Args:
            args: Arguments to parse (uses sys.argv if None)

        Returns:
            Exit code (0 for success, non-zero for error)
        """
        parsed_args = self.parse_args(args)

        self._configure_logging(parsed_args)

        if not parsed_args.command:
            self.parser.print_help()
            return 1

        try:
            return self._dispatch_command(parsed_args)
        except KeyboardInterrupt:
            logger.info("Operation cancelled by user")
            return 130  # Standard exit code for SIGINT
        except CompilerPathsError as e:
            logger.error(f"Error: {e}")
            return 1

    def _configure_logging(self, args):
        """
        Configure logging based on verbose/quiet flags.

        Logs go to stderr so command output on stdout stays machine readable.

        Args:
            args: Parsed arguments with verbose/quiet flags
        """
        if args.verbose:
            level = logging.DEBUG
            format_str = "%(levelname)s [%(name)s] %(message)s"
        elif args.quiet:
            level = logging.ERROR
            format_str = "%(levelname)s: %(message)s"
        else:
            level = logging.WARNING
            format_str = "%(levelname)s: %(message)s"

        logging.basicConfig(
            level=level,
            format=format_str,
            stream=sys.stderr,
            force=True,  # Reconfigure if already configured
        )

    def _dispatch_command(self, args) -> int:
        """
        Dispatch to appropriate command handler.

        Args:
            args: Parsed arguments with command field

        Returns:
            Exit code from command handler
        """
        command_map = {
            "resolve": "compilerpaths.cli.commands.resolve",
            "list": "compilerpaths.cli.commands.list_installs",
        }

        module_name = command_map.get(args.command)
        if not module_name:
            logger.error(f"Unknown command: {args.command}")
            return 1

        module = importlib.import_module(module_name)
        return module.run(args)


def main():
    """Main entry point for CLI."""
    cli = CLI()
    sys.exit(cli.run())


if __name__ == "__main__":
    main()
