"""
compilerpaths/toolchain/resolver.py

Resolve the compiler, include paths and library paths for a target platform.

The resolver selects one toolchain and one platform SDK from a catalog and
composes the paths structurally. It does not check that the composed
toolchain paths exist: a broken install surfaces when the compiler is run.
"""

import logging
from dataclasses import dataclass
from pathlib import PurePath
from typing import Dict, List, Optional, Tuple

from ..core.exceptions import SdkNotFoundError, ToolchainNotFoundError
from ..core.platform import PlatformTarget, detect_host_platform, parse_platform
from .catalog import CatalogProvider, SdkInstall, ToolchainInstall
from .selection import select

logger = logging.getLogger(__name__)

COMPILER_EXECUTABLE = "cl.exe"


@dataclass(frozen=True)
class ResolutionResult:
    """
    Paths resolved for one target platform.

    Attributes:
        compiler_path: Absolute path to cl.exe
        include_paths: Header search directories, toolchain first
        library_paths: Library search directories, toolchain first
        platform: Target platform the paths were composed for
        toolchain: Selected toolchain record
        sdk: Selected platform SDK record
    """

    compiler_path: PurePath
    include_paths: Tuple[PurePath, ...]
    library_paths: Tuple[PurePath, ...]
    platform: PlatformTarget
    toolchain: ToolchainInstall
    sdk: SdkInstall

    def to_dict(self) -> Dict[str, object]:
        """
        Convert to the caller-facing output mapping.

        Returns:
            Dictionary with CompilerPath, IncludePaths and LibPaths, plus the
            selected versions
        """
        return {
            "CompilerPath": str(self.compiler_path),
            "IncludePaths": [str(p) for p in self.include_paths],
            "LibPaths": [str(p) for p in self.library_paths],
            "Platform": self.platform.value,
            "VSVersion": str(self.toolchain.version),
            "WinSDKVersion": str(self.sdk.version),
        }


def compose_compiler_path(
    toolchain: ToolchainInstall, host: PlatformTarget, target: PlatformTarget
) -> PurePath:
    """Compose {root}/bin/Host{host}/{target}/cl.exe."""
    return (
        toolchain.root_path / "bin" / f"Host{host.value}" / target.value / COMPILER_EXECUTABLE
    )


def compose_include_paths(
    toolchain: ToolchainInstall, sdk: SdkInstall
) -> Tuple[PurePath, ...]:
    """Toolchain include directory followed by the SDK include roots."""
    return (toolchain.root_path / "include",) + sdk.include_roots


def compose_library_paths(
    toolchain: ToolchainInstall, sdk: SdkInstall, target: PlatformTarget
) -> Tuple[PurePath, ...]:
    """
    Toolchain lib directory followed by the SDK library roots.

    The target architecture is appended to every SDK library root; the
    toolchain lib directory already carries it.
    """
    paths: List[PurePath] = [toolchain.root_path / "lib" / target.value]
    paths.extend(root / target.value for root in sdk.library_roots)
    return tuple(paths)


class Resolver:
    """
    Select a toolchain and SDK and compose their paths.

    Example:
        >>> resolver = Resolver(CachedCatalog(WindowsCatalog()))
        >>> result = resolver.resolve("x64")
        >>> print(result.compiler_path)
        C:\\...\\VC\\Tools\\MSVC\\14.26.28801\\bin\\Hostx64\\x64\\cl.exe
    """

    def __init__(
        self, catalog: CatalogProvider, host: Optional[PlatformTarget] = None
    ):
        """
        Initialize resolver.

        Args:
            catalog: Source of installed toolchains and SDKs
            host: Host architecture override. Detected when None.
        """
        self.catalog = catalog
        self._host = host

    @property
    def host(self) -> PlatformTarget:
        return self._host if self._host is not None else detect_host_platform()

    def select_toolchain(self, version: Optional[str] = None) -> ToolchainInstall:
        """
        Select a toolchain, latest unless a version is requested.

        Raises:
            InvalidVersionFormatError: If version does not parse
            ToolchainNotFoundError: If version is not installed
        """
        toolchain = select(
            self.catalog.list_toolchains(),
            version,
            "Visual Studio",
            ToolchainNotFoundError,
        )
        logger.info(f"Selected {toolchain}")
        return toolchain

    def select_sdk(self, version: Optional[str] = None) -> SdkInstall:
        """
        Select a platform SDK, latest unless a version is requested.

        Raises:
            InvalidVersionFormatError: If version does not parse
            SdkNotFoundError: If version is not installed
        """
        sdk = select(
            self.catalog.list_sdks(),
            version,
            "Windows SDK",
            SdkNotFoundError,
        )
        logger.info(f"Selected {sdk}")
        return sdk

    def resolve(
        self,
        platform: str,
        toolchain_version: Optional[str] = None,
        sdk_version: Optional[str] = None,
    ) -> ResolutionResult:
        """
        Resolve compiler, include and library paths for a platform.

        Args:
            platform: Platform token: x86, Win32, x64 or AnyCPU
            toolchain_version: Exact toolchain version, latest when omitted
            sdk_version: Exact platform SDK version, latest when omitted

        Returns:
            ResolutionResult for the target platform

        Raises:
            UnsupportedPlatformError: Unrecognized platform token
            InvalidVersionFormatError: A version string does not parse
            ToolchainNotFoundError: Requested toolchain version not installed
            SdkNotFoundError: Requested SDK version not installed
            DiscoveryError: Catalog enumeration unavailable
            NotFoundError: Nothing admissible installed
        """
        host = self.host
        target = parse_platform(platform, host)
        toolchain = self.select_toolchain(toolchain_version)
        sdk = self.select_sdk(sdk_version)

        result = ResolutionResult(
            compiler_path=compose_compiler_path(toolchain, host, target),
            include_paths=compose_include_paths(toolchain, sdk),
            library_paths=compose_library_paths(toolchain, sdk, target),
            platform=target,
            toolchain=toolchain,
            sdk=sdk,
        )
        logger.debug(f"Resolved compiler for {platform}: {result.compiler_path}")
        return result


__all__ = [
    "ResolutionResult",
    "Resolver",
    "compose_compiler_path",
    "compose_include_paths",
    "compose_library_paths",
]
