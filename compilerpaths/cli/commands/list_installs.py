"""
List command - show the discovered toolchain and SDK catalogs.
"""

from compilerpaths.cli.utils import build_catalog, format_output, load_cli_settings


def run(args) -> int:
    """
    Execute list command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    settings = load_cli_settings(args)
    catalog = build_catalog(settings)

    data = {
        "Toolchains": [install.to_dict() for install in catalog.list_toolchains()],
        "WindowsSdks": [sdk.to_dict() for sdk in catalog.list_sdks()],
    }
    print(format_output(data, args.format))
    return 0
