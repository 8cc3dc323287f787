"""
Toolkit / host compiler compatibility.

This module maps a CUDA toolkit version to the range of host compiler
versions its ``nvcc`` accepts, and picks the best discovered compiler within
that range. The mapping is a read-only table loaded from
``cudakit/data/compatibility.yaml`` unless another table is injected.

Example:
    >>> resolver = CompatibilityResolver(CompatibilityTable.load())
    >>> supported = resolver.range_for(Version(11, 8))
    >>> best = resolver.best_candidate(candidates, supported)
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

import yaml

from cudakit.core.exceptions import (
    CompatibilityTableError,
    NoCompatibleVersionError,
    UnknownToolkitVersionError,
    VersionError,
)
from cudakit.core.version import Version, VersionRange

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompilerCandidate:
    """A discovered host compiler; version is None when it was not ranked."""

    path: str
    version: Optional[Version] = None

    def __str__(self) -> str:
        if self.version is None:
            return self.path
        return f"{self.path} ({self.version})"


class CompatibilityTable:
    """
    Read-only mapping from toolkit ``major.minor`` to a host compiler range.

    Args:
        entries: Mapping of toolkit version to supported compiler range
        compiler: Display name of the host compiler the ranges refer to
    """

    def __init__(self, entries: Mapping[Version, VersionRange], compiler: str = "GCC"):
        self._entries: Dict[Tuple[int, int], VersionRange] = {
            (v.major, v.minor): r for v, r in entries.items()
        }
        self.compiler = compiler

    @classmethod
    def default_path(cls) -> Path:
        """Path to the table shipped with the package."""
        return Path(__file__).parent.parent / "data" / "compatibility.yaml"

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "CompatibilityTable":
        """
        Load a table from YAML.

        Args:
            path: Table file. If None, uses the embedded compatibility.yaml

        Raises:
            CompatibilityTableError: If the file is missing or malformed
        """
        path = Path(path) if path else cls.default_path()
        if not path.exists():
            raise CompatibilityTableError(f"Compatibility table not found: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise CompatibilityTableError(
                f"Invalid YAML in compatibility table: {e}\nFile: {path}"
            ) from e

        if not isinstance(data, dict) or not isinstance(data.get("toolkits"), dict):
            raise CompatibilityTableError(
                f"Invalid compatibility table: missing 'toolkits' mapping\nFile: {path}"
            )

        entries = {}
        for key, bounds in data["toolkits"].items():
            if not isinstance(key, str):
                raise CompatibilityTableError(
                    f"Toolkit version {key!r} must be a quoted string\nFile: {path}"
                )
            try:
                entries[Version.parse(key)] = VersionRange(
                    Version.parse(bounds["min"]), Version.parse(bounds["max"])
                )
            except (KeyError, TypeError, ValueError, VersionError) as e:
                raise CompatibilityTableError(
                    f"Invalid entry for toolkit {key}: {e}\nFile: {path}"
                ) from e

        logger.debug(f"Loaded compatibility table with {len(entries)} entries from {path}")
        return cls(entries, compiler=str(data.get("compiler", "GCC")))

    def lookup(self, toolkit_version: Version) -> Optional[VersionRange]:
        return self._entries.get((toolkit_version.major, toolkit_version.minor))

    def versions(self) -> List[Version]:
        """Known toolkit versions, oldest first."""
        return [Version(major, minor) for major, minor in sorted(self._entries)]

    def __len__(self) -> int:
        return len(self._entries)


class CompatibilityResolver:
    """Select a host compiler compatible with a toolkit version."""

    def __init__(self, table: CompatibilityTable):
        self.table = table

    def range_for(self, toolkit_version: Version) -> VersionRange:
        """
        Supported host compiler versions for ``toolkit_version``.

        Raises:
            UnknownToolkitVersionError: If the table has no entry for the version
        """
        supported = self.table.lookup(toolkit_version)
        if supported is None:
            raise UnknownToolkitVersionError(toolkit_version)
        logger.debug(
            f"CUDA {toolkit_version} supports {self.table.compiler} {supported}"
        )
        return supported

    def best_candidate(
        self,
        candidates: Iterable[CompilerCandidate],
        supported: VersionRange,
        toolkit_version: Optional[Version] = None,
    ) -> CompilerCandidate:
        """
        Highest-versioned candidate inside ``supported``.

        Among candidates with equal versions the first one wins.

        Raises:
            NoCompatibleVersionError: If no candidate is in range
        """
        best = None
        for candidate in candidates:
            if candidate.version is None or candidate.version not in supported:
                logger.debug(f"Rejecting {candidate}: not in {supported}")
                continue
            if best is None or candidate.version > best.version:
                best = candidate

        if best is None:
            raise NoCompatibleVersionError(
                toolkit_version if toolkit_version is not None else "?",
                supported.upper,
                self.table.compiler,
            )
        return best


def host_compiler_names(base: str, supported: VersionRange) -> List[str]:
    """
    Plausible executable names for a host compiler.

    Covers ``base`` plus the ``base-M``, ``base-M.m`` and ``baseMm`` variants
    distributions install, for every major version in ``supported``. Names
    that do not exist on the system are expected.
    """
    names = [base]
    for major in range(max(supported.lower.major, 3), supported.upper.major + 1):
        names.append(f"{base}-{major}")
        for minor in range(10):
            names.append(f"{base}-{major}.{minor}")
            names.append(f"{base}{major}{minor}")
    return names


__all__ = [
    "CompilerCandidate",
    "CompatibilityTable",
    "CompatibilityResolver",
    "host_compiler_names",
]
