"""
Resolve command - print the compiler, include and library paths for a platform.
"""

import logging

from compilerpaths.cli.utils import build_catalog, format_output, load_cli_settings
from compilerpaths.toolchain.resolver import Resolver

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Execute resolve command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    settings = load_cli_settings(args)

    if not settings.platform:
        logger.error("No platform given: use --platform or set 'platform' in the config file")
        return 1

    resolver = Resolver(build_catalog(settings))
    result = resolver.resolve(
        settings.platform,
        toolchain_version=settings.toolchain_version,
        sdk_version=settings.sdk_version,
    )

    print(format_output(result.to_dict(), args.format))
    return 0
