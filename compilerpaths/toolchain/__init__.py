"""
Toolchain discovery and resolution for compilerpaths.

This module provides functionality for:
- Toolchain and platform SDK catalogs
- Version selection (latest or exact)
- Compiler, include and library path resolution
- Windows discovery via vswhere and the registry
"""

from compilerpaths.toolchain.catalog import (
    CachedCatalog,
    CatalogProvider,
    SdkInstall,
    StaticCatalog,
    ToolchainInstall,
    sort_descending,
)
from compilerpaths.toolchain.discovery import (
    VisualStudioLocator,
    WindowsCatalog,
    WindowsSdkLocator,
    default_catalog,
)
from compilerpaths.toolchain.resolver import (
    ResolutionResult,
    Resolver,
    compose_compiler_path,
    compose_include_paths,
    compose_library_paths,
)
from compilerpaths.toolchain.selection import select, select_exact, select_latest

__all__ = [
    # Catalog
    "CatalogProvider",
    "CachedCatalog",
    "StaticCatalog",
    "ToolchainInstall",
    "SdkInstall",
    "sort_descending",
    # Discovery
    "VisualStudioLocator",
    "WindowsSdkLocator",
    "WindowsCatalog",
    "default_catalog",
    # Selection
    "select",
    "select_exact",
    "select_latest",
    # Resolver
    "Resolver",
    "ResolutionResult",
    "compose_compiler_path",
    "compose_include_paths",
    "compose_library_paths",
]
