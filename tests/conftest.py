"""
Pytest configuration and shared fixtures for compilerpaths tests.
"""

import sys

import pytest

# Import test fixtures to make them available to all tests
# These imports register the fixtures with pytest's fixture discovery system
# ruff: noqa: F401
from tests.fixtures.catalogs import (
    vs_toolchains,
    win_sdks,
    static_catalog,
    kits_root,
)

from compilerpaths.core.platform import clear_platform_cache


def pytest_collection_modifyitems(config, items):
    """Skip tests that need a real Windows machine elsewhere."""
    if sys.platform != "win32":
        skip_windows = pytest.mark.skip(reason="requires Windows")
        for item in items:
            if "windows" in item.keywords:
                item.add_marker(skip_windows)


@pytest.fixture(autouse=True)
def _reset_host_detection():
    """Host detection is cached per process; start each test fresh."""
    clear_platform_cache()
    yield
    clear_platform_cache()
