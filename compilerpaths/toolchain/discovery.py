"""
compilerpaths/toolchain/discovery.py

Windows catalog - enumerates installed Visual Studio toolsets and Windows 10
SDKs.

Visual Studio instances come from the setup catalog via vswhere.exe. Only
instances carrying the VC tools component are admitted, and each contributes
its newest toolset directory under VC/Tools/MSVC.

Windows SDKs come from the 'Installed Roots' registry key, or from the
Include directory of an explicitly configured kits root. A version is
admitted only when both its um include and um library directories exist.
"""

import json
import logging
import os
import subprocess
from pathlib import Path
from typing import Iterator, List, Optional, Tuple

from ..core.exceptions import DiscoveryError
from ..core.version import Version
from .catalog import (
    CachedCatalog,
    CatalogProvider,
    SDK_SUBJECT,
    TOOLCHAIN_SUBJECT,
    SdkInstall,
    ToolchainInstall,
    sort_descending,
)

logger = logging.getLogger(__name__)

VC_TOOLS_COMPONENT = "Microsoft.VisualStudio.Component.VC.Tools.x86.x64"
KITS_ROOTS_KEY = r"SOFTWARE\Microsoft\Windows Kits\Installed Roots"
KITS_ROOT_VALUE = "KitsRoot10"

SDK_INCLUDE_SUBDIRS = ("shared", "um", "ucrt")
SDK_LIBRARY_SUBDIRS = ("um", "ucrt")

DEFAULT_VSWHERE_TIMEOUT = 10


def default_vswhere_path() -> Path:
    """Location of vswhere.exe installed by the Visual Studio Installer."""
    program_files = os.environ.get("ProgramFiles(x86)", "C:/Program Files (x86)")
    return Path(program_files) / "Microsoft Visual Studio" / "Installer" / "vswhere.exe"


def find_toolset_root(install_path: Path) -> Optional[Tuple[Version, Path]]:
    """
    Find the newest MSVC toolset under a Visual Studio installation.

    Args:
        install_path: Visual Studio installation directory

    Returns:
        (toolset version, toolset directory) or None if none is present
    """
    tools_root = install_path / "VC" / "Tools" / "MSVC"
    if not tools_root.is_dir():
        logger.debug(f"VC/Tools/MSVC not found in {install_path}")
        return None

    latest: Optional[Tuple[Version, Path]] = None
    for entry in tools_root.iterdir():
        if not entry.is_dir():
            continue
        version = Version.try_parse(entry.name)
        if version is None:
            continue
        if latest is None or version > latest[0]:
            latest = (version, entry)

    return latest


class VisualStudioLocator:
    """
    Enumerate Visual Studio installations through vswhere.exe.

    Windows only.
    """

    def __init__(
        self,
        vswhere_path: Optional[Path] = None,
        timeout: int = DEFAULT_VSWHERE_TIMEOUT,
    ):
        """
        Initialize locator.

        Args:
            vswhere_path: Path to vswhere.exe (default: Visual Studio Installer dir)
            timeout: Seconds to wait for vswhere
        """
        self.vswhere_path = Path(vswhere_path) if vswhere_path else default_vswhere_path()
        self.timeout = timeout

    def query_instances(self) -> List[dict]:
        """
        Ask vswhere for instances carrying the VC tools component.

        Returns:
            Instance records as decoded from vswhere's JSON output

        Raises:
            DiscoveryError: If vswhere is missing, fails, or returns bad output
        """
        if not self.vswhere_path.exists():
            raise DiscoveryError(f"vswhere not found: {self.vswhere_path}")

        command = [
            str(self.vswhere_path),
            "-products",
            "*",
            "-requires",
            VC_TOOLS_COMPONENT,
            "-format",
            "json",
            "-utf8",
        ]
        logger.debug(f"Running {' '.join(command)}")

        try:
            result = subprocess.run(
                command,
                capture_output=True,
                encoding="utf-8",
                timeout=self.timeout,
                check=False,
            )
        except subprocess.TimeoutExpired as e:
            raise DiscoveryError(f"vswhere timed out after {self.timeout}s") from e
        except OSError as e:
            raise DiscoveryError(f"Failed to run vswhere: {e}") from e

        if result.returncode != 0:
            raise DiscoveryError(
                f"vswhere returned {result.returncode}: {result.stderr.strip()}"
            )

        try:
            instances = json.loads(result.stdout or "[]")
        except json.JSONDecodeError as e:
            raise DiscoveryError(f"Invalid vswhere output: {e}") from e

        if not isinstance(instances, list):
            raise DiscoveryError("Invalid vswhere output: expected a list of instances")

        for instance in instances:
            if not isinstance(instance, dict):
                raise DiscoveryError(
                    f"Invalid vswhere output: expected an object per instance, got {instance!r}"
                )

        return instances

    def locate(self) -> Iterator[ToolchainInstall]:
        """
        Yield one ToolchainInstall per admissible Visual Studio instance.

        Instances without a parseable version or without a toolset directory
        are skipped.

        Raises:
            DiscoveryError: If vswhere cannot be queried
        """
        for instance in self.query_instances():
            install_path_str = instance.get("installationPath")
            version = Version.try_parse(instance.get("installationVersion"))
            if not install_path_str or version is None:
                logger.warning(f"Skipping malformed Visual Studio instance: {instance}")
                continue

            install_path = Path(install_path_str)
            logger.debug(f"Found Visual Studio {version} at {install_path}")

            toolset = find_toolset_root(install_path)
            if toolset is None:
                logger.warning(
                    f"Visual Studio {version} at {install_path} has no VC tools version"
                )
                continue

            tools_version, root_path = toolset
            yield ToolchainInstall(
                version=version,
                root_path=root_path,
                install_path=install_path,
                tools_version=tools_version,
            )


def _read_installed_roots() -> Tuple[str, List[str]]:
    """
    Read the Windows Kits 'Installed Roots' registry key.

    Returns:
        (KitsRoot10 value, subkey names)

    Raises:
        DiscoveryError: If the registry or the key is unavailable
    """
    try:
        import winreg
    except ImportError as e:
        raise DiscoveryError("Windows registry is not available on this system") from e

    last_error: Optional[OSError] = None
    for view in (winreg.KEY_WOW64_32KEY, winreg.KEY_WOW64_64KEY):
        try:
            with winreg.OpenKey(
                winreg.HKEY_LOCAL_MACHINE, KITS_ROOTS_KEY, 0, winreg.KEY_READ | view
            ) as key:
                kits_root, _ = winreg.QueryValueEx(key, KITS_ROOT_VALUE)
                names = []
                index = 0
                while True:
                    try:
                        names.append(winreg.EnumKey(key, index))
                    except OSError:
                        break
                    index += 1
                return kits_root, names
        except OSError as e:
            last_error = e

    raise DiscoveryError(
        f"Cannot read HKLM\\{KITS_ROOTS_KEY}\\{KITS_ROOT_VALUE}: {last_error}"
    ) from last_error


def sdk_layout(kits_root: Path, version: str) -> SdkInstall:
    """
    Compose the include and library roots of a Windows 10 SDK version.

    Args:
        kits_root: Windows Kits 10 root directory
        version: SDK version directory name

    Returns:
        SdkInstall with shared/um/ucrt includes and um/ucrt libraries
    """
    include_dir = kits_root / "Include" / version
    library_dir = kits_root / "Lib" / version
    return SdkInstall(
        version=Version.parse(version, "Windows SDK"),
        include_roots=tuple(include_dir / sub for sub in SDK_INCLUDE_SUBDIRS),
        library_roots=tuple(library_dir / sub for sub in SDK_LIBRARY_SUBDIRS),
    )


class WindowsSdkLocator:
    """
    Enumerate installed Windows 10 SDKs.

    With no kits root configured, the root and candidate versions come from
    the registry. A configured kits root bypasses the registry and lists the
    versions found under its Include directory.
    """

    def __init__(self, kits_root: Optional[Path] = None):
        self.kits_root = Path(kits_root) if kits_root else None

    def candidates(self) -> Tuple[Path, List[str]]:
        """
        Get the kits root and the candidate version names.

        Raises:
            DiscoveryError: If the registry or the configured root is unavailable
        """
        if self.kits_root is None:
            root, names = _read_installed_roots()
            return Path(root), names

        include_root = self.kits_root / "Include"
        if not include_root.is_dir():
            raise DiscoveryError(f"Windows Kits include directory not found: {include_root}")
        return self.kits_root, [entry.name for entry in include_root.iterdir()]

    def locate(self) -> Iterator[SdkInstall]:
        """
        Yield one SdkInstall per admissible SDK version.

        Raises:
            DiscoveryError: If candidates cannot be enumerated
        """
        kits_root, names = self.candidates()
        logger.debug(f"Windows Kits root: {kits_root}")

        for name in names:
            if Version.try_parse(name) is None:
                continue

            include_um = kits_root / "Include" / name / "um"
            library_um = kits_root / "Lib" / name / "um"
            if not include_um.is_dir() or not library_um.is_dir():
                logger.debug(f"Skipping Windows SDK {name}: include or lib directory missing")
                continue

            yield sdk_layout(kits_root, name)


class WindowsCatalog(CatalogProvider):
    """Catalog of Visual Studio toolsets and Windows 10 SDKs on this machine."""

    def __init__(
        self,
        toolchain_locator: Optional[VisualStudioLocator] = None,
        sdk_locator: Optional[WindowsSdkLocator] = None,
    ):
        self.toolchain_locator = toolchain_locator or VisualStudioLocator()
        self.sdk_locator = sdk_locator or WindowsSdkLocator()

    def list_toolchains(self) -> Tuple[ToolchainInstall, ...]:
        logger.info("Enumerating Visual Studio installations")
        toolchains = sort_descending(self.toolchain_locator.locate(), TOOLCHAIN_SUBJECT)
        logger.info(f"Found {len(toolchains)} Visual Studio installation(s)")
        return toolchains

    def list_sdks(self) -> Tuple[SdkInstall, ...]:
        logger.info("Enumerating Windows SDKs")
        sdks = sort_descending(self.sdk_locator.locate(), SDK_SUBJECT)
        logger.info(f"Found {len(sdks)} Windows SDK version(s)")
        return sdks


def default_catalog(
    vswhere_path: Optional[Path] = None,
    kits_root: Optional[Path] = None,
    vswhere_timeout: int = DEFAULT_VSWHERE_TIMEOUT,
) -> CachedCatalog:
    """
    Build the memoized machine catalog.

    Args:
        vswhere_path: Override for vswhere.exe
        kits_root: Override for the Windows Kits 10 root
        vswhere_timeout: Seconds to wait for vswhere

    Returns:
        CachedCatalog wrapping a WindowsCatalog
    """
    return CachedCatalog(
        WindowsCatalog(
            VisualStudioLocator(vswhere_path, timeout=vswhere_timeout),
            WindowsSdkLocator(kits_root),
        )
    )


__all__ = [
    "VisualStudioLocator",
    "WindowsSdkLocator",
    "WindowsCatalog",
    "default_catalog",
    "default_vswhere_path",
    "find_toolset_root",
    "sdk_layout",
]
