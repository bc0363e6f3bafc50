"""
Dotted-integer version parsing and ordering.

Versions such as "16.6.30204.135" or "10.0.17763.0" are parsed into tuples of
non-negative integers. Missing trailing components compare as zero, so
Version("14.0") == Version("14.0.0.0").

Example:
    >>> Version.parse("16.6.30204.135") > Version.parse("14.0.0.0")
    True
"""

import functools
import re
from typing import Optional, Tuple

from .exceptions import InvalidVersionFormatError

_COMPONENT = re.compile(r"[0-9]+")


@functools.total_ordering
class Version:
    """
    Immutable dotted-integer version.

    Attributes:
        components: Parsed integer components, as written
    """

    __slots__ = ("components",)

    def __init__(self, *components: int):
        if not components:
            raise ValueError("Version requires at least one component")
        if any(c < 0 for c in components):
            raise ValueError(f"Version components must be non-negative: {components}")
        object.__setattr__(self, "components", tuple(components))

    @classmethod
    def parse(cls, version_string: Optional[str], subject: str = "") -> "Version":
        """
        Parse a dotted-integer version string.

        Args:
            version_string: String such as "10.0.17763.0"
            subject: What the version refers to, used in the error message

        Returns:
            Parsed Version

        Raises:
            InvalidVersionFormatError: If the string is empty or any component
                is not a non-negative integer
        """
        if not isinstance(version_string, str):
            raise InvalidVersionFormatError(version_string, subject)

        parts = version_string.strip().split(".")
        if not all(_COMPONENT.fullmatch(part) for part in parts):
            raise InvalidVersionFormatError(version_string, subject)

        return cls(*(int(part) for part in parts))

    @classmethod
    def try_parse(cls, version_string: Optional[str]) -> Optional["Version"]:
        """Parse a version string, returning None instead of raising."""
        try:
            return cls.parse(version_string)
        except InvalidVersionFormatError:
            return None

    def _key(self) -> Tuple[int, ...]:
        # Trailing zeros dropped so equal versions share one key.
        key = list(self.components)
        while len(key) > 1 and key[-1] == 0:
            key.pop()
        return tuple(key)

    def __setattr__(self, name, value):
        raise AttributeError("Version is immutable")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._key() == other._key()

    def __lt__(self, other: "Version") -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        width = max(len(self.components), len(other.components))
        return _padded(self.components, width) < _padded(other.components, width)

    def __hash__(self) -> int:
        return hash(self._key())

    def __str__(self) -> str:
        return ".".join(str(c) for c in self.components)

    def __repr__(self) -> str:
        return f"Version('{self}')"


def _padded(components: Tuple[int, ...], width: int) -> Tuple[int, ...]:
    return components + (0,) * (width - len(components))


__all__ = ["Version"]
