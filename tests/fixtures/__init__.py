"""Test fixtures for compilerpaths tests.

- catalogs: in-memory toolchain/SDK catalogs and on-disk Visual Studio and
  Windows Kits layouts

Import fixtures in your tests using:
    from tests.fixtures.catalogs import make_toolchain, make_sdk
"""

__all__ = [
    "catalogs",
]
