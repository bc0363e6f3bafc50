"""
Shared utilities for CLI commands.

Provides settings merging, catalog construction and output formatting used
by every command.
"""

import json
import logging
from typing import Any, Dict, List

import yaml

from compilerpaths.config import Settings, load_settings
from compilerpaths.toolchain.catalog import CatalogProvider
from compilerpaths.toolchain.discovery import default_catalog

logger = logging.getLogger(__name__)


# ============================================================================
# Configuration Management
# ============================================================================


def load_cli_settings(args) -> Settings:
    """
    Load settings from the config file and apply command-line overrides.

    Flags that were not given leave the file (or default) value in place.

    Args:
        args: Parsed arguments

    Returns:
        Effective settings
    """
    settings = load_settings(getattr(args, "config", None))

    for attr in ("platform", "toolchain_version", "sdk_version"):
        value = getattr(args, attr, None)
        if value is not None:
            setattr(settings, attr, value)

    if getattr(args, "vswhere", None):
        settings.discovery.vswhere_path = args.vswhere
    if getattr(args, "kits_root", None):
        settings.discovery.kits_root = args.kits_root

    logger.debug(f"Effective settings: {settings}")
    return settings


def build_catalog(settings: Settings) -> CatalogProvider:
    """Create the machine catalog described by settings."""
    return default_catalog(
        vswhere_path=settings.discovery.vswhere_path,
        kits_root=settings.discovery.kits_root,
        vswhere_timeout=settings.discovery.vswhere_timeout,
    )


# ============================================================================
# Output
# ============================================================================


def format_output(data: Dict[str, Any], fmt: str) -> str:
    """
    Render a result mapping.

    Args:
        data: Mapping of names to strings or lists of strings
        fmt: 'json', 'yaml' or 'text'

    Returns:
        Rendered text without a trailing newline
    """
    if fmt == "json":
        return json.dumps(data, indent=2)
    if fmt == "yaml":
        return yaml.safe_dump(data, sort_keys=False, default_flow_style=False).rstrip()

    lines: List[str] = []
    for key, value in data.items():
        if isinstance(value, list):
            lines.append(f"{key}:")
            lines.extend(_text_item(item) for item in value)
        else:
            lines.append(f"{key}: {value}")
    return "\n".join(lines)


def _text_item(item: Any) -> str:
    if isinstance(item, dict):
        # Nested lists are only shown by the json and yaml formats.
        fields = [
            f"{k}={v}" for k, v in item.items() if v != "" and not isinstance(v, list)
        ]
        return "  " + "  ".join(fields)
    return f"  {item}"
