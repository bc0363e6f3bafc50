"""
compilerpaths/toolchain/catalog.py

Catalog of installed toolchains and platform SDKs.

A catalog exposes two collections, each sorted by version descending:
installed toolchains and installed platform SDKs. The resolver depends only
on the CatalogProvider interface, so any implementation (the Windows catalog,
a static catalog built in memory, a catalog for another OS) can be injected.
"""

import logging
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import PurePath
from typing import Callable, Dict, Generic, Iterable, Optional, Tuple, TypeVar

from ..core.exceptions import CompilerPathsError, NotFoundError
from ..core.version import Version

logger = logging.getLogger(__name__)

TOOLCHAIN_SUBJECT = "Visual Studio with VC Tools"
SDK_SUBJECT = "Windows 10 SDK"


@dataclass(frozen=True)
class ToolchainInstall:
    """
    One discovered toolchain installation.

    Attributes:
        version: Installation version (e.g. 16.6.30204.135)
        root_path: Toolset root holding bin/, include/ and lib/
        install_path: Installation directory of the owning product, if known
        tools_version: Version of the toolset directory, if known
    """

    version: Version
    root_path: PurePath
    install_path: Optional[PurePath] = None
    tools_version: Optional[Version] = None

    def __post_init__(self):
        _require_absolute(self.root_path)

    def __str__(self) -> str:
        return f"Visual Studio {self.version} at {self.root_path}"

    def to_dict(self) -> Dict[str, object]:
        return {
            "version": str(self.version),
            "root_path": str(self.root_path),
            "install_path": str(self.install_path) if self.install_path else "",
            "tools_version": str(self.tools_version) if self.tools_version else "",
        }


@dataclass(frozen=True)
class SdkInstall:
    """
    One discovered platform SDK installation.

    Attributes:
        version: SDK version (e.g. 10.0.17763.0)
        include_roots: Header directories, in search order
        library_roots: Library directories without the architecture segment
    """

    version: Version
    include_roots: Tuple[PurePath, ...] = field(default_factory=tuple)
    library_roots: Tuple[PurePath, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, "include_roots", tuple(self.include_roots))
        object.__setattr__(self, "library_roots", tuple(self.library_roots))
        for path in self.include_roots + self.library_roots:
            _require_absolute(path)

    def __str__(self) -> str:
        return f"Windows SDK {self.version}"

    def to_dict(self) -> Dict[str, object]:
        return {
            "version": str(self.version),
            "include_roots": [str(p) for p in self.include_roots],
            "library_roots": [str(p) for p in self.library_roots],
        }


def _require_absolute(path: PurePath) -> None:
    if not path.is_absolute():
        raise ValueError(f"Install path must be absolute: {path}")


InstallT = TypeVar("InstallT", ToolchainInstall, SdkInstall)


def sort_descending(records: Iterable[InstallT], subject: str) -> Tuple[InstallT, ...]:
    """
    Order records newest first, dropping duplicate versions.

    The first record seen for a version wins.

    Args:
        records: Unordered install records
        subject: Human readable catalog name for the empty-catalog error

    Returns:
        Records sorted by version, descending

    Raises:
        NotFoundError: If there are no records
    """
    unique: Dict[Version, InstallT] = {}
    for record in records:
        if record.version in unique:
            logger.debug(f"Ignoring duplicate {subject} version {record.version}")
            continue
        unique[record.version] = record

    if not unique:
        raise NotFoundError(subject)

    return tuple(sorted(unique.values(), key=lambda r: r.version, reverse=True))


class CatalogProvider(ABC):
    """
    Abstract interface for the installed toolchain and SDK catalog.

    Both collections are sorted by version descending and are never empty:
    implementations raise NotFoundError instead of returning nothing, and
    DiscoveryError when the enumeration mechanism itself is unavailable.
    """

    @abstractmethod
    def list_toolchains(self) -> Tuple[ToolchainInstall, ...]:
        """
        List installed toolchains, newest first.

        Raises:
            DiscoveryError: If enumeration is unavailable
            NotFoundError: If no toolchain with the required component exists
        """
        pass

    @abstractmethod
    def list_sdks(self) -> Tuple[SdkInstall, ...]:
        """
        List installed platform SDKs, newest first.

        Raises:
            DiscoveryError: If enumeration is unavailable
            NotFoundError: If no SDK has both include and library roots present
        """
        pass


class StaticCatalog(CatalogProvider):
    """
    Catalog built from records already in memory.

    Records may be supplied in any order; they are sorted when listed.
    Empty collections raise NotFoundError when listed, like a machine with
    nothing installed.
    """

    def __init__(
        self,
        toolchains: Iterable[ToolchainInstall] = (),
        sdks: Iterable[SdkInstall] = (),
    ):
        self._toolchains = tuple(toolchains)
        self._sdks = tuple(sdks)

    def list_toolchains(self) -> Tuple[ToolchainInstall, ...]:
        return sort_descending(self._toolchains, TOOLCHAIN_SUBJECT)

    def list_sdks(self) -> Tuple[SdkInstall, ...]:
        return sort_descending(self._sdks, SDK_SUBJECT)


T = TypeVar("T")


class _Memo(Generic[T]):
    """Single-initialization slot guarded by its own lock."""

    def __init__(self, compute: Callable[[], T]):
        self._compute = compute
        self._lock = threading.Lock()
        self._done = False
        self._value: Optional[T] = None
        self._error: Optional[CompilerPathsError] = None

    def get(self) -> T:
        if not self._done:
            with self._lock:
                if not self._done:
                    try:
                        self._value = self._compute()
                    except CompilerPathsError as e:
                        self._error = e
                    self._done = True

        if self._error is not None:
            raise self._error
        return self._value  # type: ignore[return-value]

    def clear(self) -> None:
        with self._lock:
            self._done = False
            self._value = None
            self._error = None


class CachedCatalog(CatalogProvider):
    """
    Memoizing wrapper around another catalog.

    Each collection is computed at most once. Concurrent first callers block
    on a per-collection lock instead of repeating enumeration. A discovery
    failure is remembered and raised again on every later call.

    Example:
        >>> catalog = CachedCatalog(WindowsCatalog())
        >>> catalog.list_toolchains()[0].version
        Version('16.6.30204.135')
    """

    def __init__(self, inner: CatalogProvider):
        self.inner = inner
        self._toolchains = _Memo(inner.list_toolchains)
        self._sdks = _Memo(inner.list_sdks)

    def list_toolchains(self) -> Tuple[ToolchainInstall, ...]:
        return self._toolchains.get()

    def list_sdks(self) -> Tuple[SdkInstall, ...]:
        return self._sdks.get()

    def clear(self) -> None:
        """Forget cached collections so the next call enumerates again."""
        self._toolchains.clear()
        self._sdks.clear()


__all__ = [
    "ToolchainInstall",
    "SdkInstall",
    "CatalogProvider",
    "StaticCatalog",
    "CachedCatalog",
    "sort_descending",
    "TOOLCHAIN_SUBJECT",
    "SDK_SUBJECT",
]
