"""
Version numbers and version parsing.

Tools report their versions in free-form banners (``nvcc --version``,
``gcc --version``). :func:`parse_version` extracts a :class:`Version` from such
text with a single regular expression and fails loudly when the text does not
have the expected shape.

Example:
    >>> parse_version("Cuda compilation tools, release 11.8, V11.8.89", NVCC_VERSION_PATTERN)
    Version(major=11, minor=8, patch=None)
"""

import functools
import re
from dataclasses import dataclass
from typing import Optional, Pattern, Tuple, Union

from cudakit.core.exceptions import UnparsableVersionError

# nvcc: "Cuda compilation tools, release 11.8, V11.8.89"
NVCC_VERSION_PATTERN = re.compile(r"release (?P<major>\d+)\.(?P<minor>\d+)")

# First line of gcc --version: "gcc-9 (Ubuntu 9.4.0-1ubuntu1~20.04.2) 9.4.0"
GCC_VERSION_PATTERN = re.compile(
    r"^\S+ \(.*\) (?P<major>\d+)\.(?P<minor>\d+)(?:\.(?P<patch>\d+))?"
)

_DOTTED_PATTERN = re.compile(
    r"^\s*(?P<major>\d+)\.(?P<minor>\d+)(?:\.(?P<patch>\d+))?\s*$"
)


@functools.total_ordering
@dataclass(frozen=True)
class Version:
    """
    A ``major.minor[.patch]`` version.

    Versions order lexicographically on (major, minor, patch). A missing patch
    sorts below every explicit patch, so ``2.0 < 2.0.0 < 2.0.1``.
    """

    major: int
    minor: int
    patch: Optional[int] = None

    @classmethod
    def parse(cls, text: Union[str, int, float]) -> "Version":
        """
        Parse a plain dotted version such as ``"11.8"`` or ``"9.4.0"``.

        Raises:
            UnparsableVersionError: If ``text`` is not a dotted version
        """
        return parse_version(str(text), _DOTTED_PATTERN)

    def _key(self) -> Tuple[int, int, int]:
        return (self.major, self.minor, -1 if self.patch is None else self.patch)

    def __lt__(self, other: "Version") -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._key() < other._key()

    def __str__(self) -> str:
        if self.patch is None:
            return f"{self.major}.{self.minor}"
        return f"{self.major}.{self.minor}.{self.patch}"


@dataclass(frozen=True)
class VersionRange:
    """Closed interval ``[lower, upper]`` of versions."""

    lower: Version
    upper: Version

    def __post_init__(self):
        if self.upper < self.lower:
            raise ValueError(
                f"Invalid version range: lower bound {self.lower} "
                f"exceeds upper bound {self.upper}"
            )

    def contains(self, version: Version) -> bool:
        return self.lower <= version <= self.upper

    def __contains__(self, version: Version) -> bool:
        return self.contains(version)

    def __str__(self) -> str:
        return f"{self.lower}:{self.upper}"


def parse_version(raw_text: str, pattern: Union[str, Pattern[str]]) -> Version:
    """
    Extract a version from unstructured tool output.

    Args:
        raw_text: Text to search, e.g. a compiler's version banner
        pattern: Regular expression with named groups ``major``, ``minor``
            and optionally ``patch``

    Returns:
        Parsed Version

    Raises:
        UnparsableVersionError: If the pattern does not match
    """
    regex = re.compile(pattern) if isinstance(pattern, str) else pattern
    match = regex.search(raw_text)
    if match is None:
        raise UnparsableVersionError(raw_text)

    groups = match.groupdict()
    if groups.get("major") is None or groups.get("minor") is None:
        raise UnparsableVersionError(raw_text)

    patch = groups.get("patch")
    return Version(
        major=int(groups["major"]),
        minor=int(groups["minor"]),
        patch=int(patch) if patch is not None else None,
    )


__all__ = [
    "Version",
    "VersionRange",
    "parse_version",
    "NVCC_VERSION_PATTERN",
    "GCC_VERSION_PATTERN",
]
