"""
cudakit/discovery/prober.py

Library and binary probing - expands a name and a list of prefix directories
into concrete candidate paths following platform conventions, and reports the
ones that exist.

Probing never raises for a missing file: the ``find_*`` methods return None
(or an empty list) and leave it to the caller to decide whether absence is
fatal.
"""

import logging
import os
import re
from typing import List, Optional, Sequence

from ..core.filesystem import unique_paths
from ..core.interfaces import FileSystem
from ..core.platform import PlatformInfo, detect_platform
from ..core.system import LocalFileSystem
from ..core.version import Version
from .environment import EnvironmentSignalCollector

logger = logging.getLogger(__name__)


class PathProber:
    """
    Find libraries and binaries below a set of prefix directories.

    Args:
        platform: Platform whose naming conventions to follow
        filesystem: Filesystem to probe
        environment: Source of PATH and loader search variables
        toolkit_versions: Known toolkit versions, used to build the
            version-tagged library names found on Windows
    """

    def __init__(
        self,
        platform: Optional[PlatformInfo] = None,
        filesystem: Optional[FileSystem] = None,
        environment: Optional[EnvironmentSignalCollector] = None,
        toolkit_versions: Sequence[Version] = (),
    ):
        self.platform = platform or detect_platform()
        self.filesystem = filesystem or LocalFileSystem()
        self.environment = environment or EnvironmentSignalCollector(
            list_separator=self.platform.list_separator
        )
        self.toolkit_versions = sorted(toolkit_versions, reverse=True)

    # ------------------------------------------------------------------
    # Candidate generation
    # ------------------------------------------------------------------

    def library_names(self, name: str) -> List[str]:
        """
        File name stems to try for library ``name`` (without extension).

        Windows CUDA libraries carry the bitness and toolkit version in their
        name (``cudart64_110``); elsewhere the ``lib`` prefix is added.
        """
        if not self.platform.is_windows:
            return [f"lib{name}"]

        tag = "64" if self.platform.is_64bit else "32"
        names = [f"{name}{tag}_{v.major}{v.minor}" for v in self.toolkit_versions]
        names.append(name)
        return names

    def library_locations(self, prefixes: Sequence[str]) -> List[str]:
        """Directories to search for libraries, highest priority first."""
        locations = []
        for prefix in prefixes:
            locations.append(prefix)
            locations.append(os.path.join(prefix, "lib"))
            if self.platform.is_64bit and not self.platform.is_windows:
                locations.append(os.path.join(prefix, "lib64"))
        locations.extend(
            self.environment.search_path(self.platform.library_path_variable)
        )
        return locations

    def binary_name(self, name: str) -> str:
        suffix = self.platform.executable_suffix
        if suffix and not name.endswith(suffix):
            return name + suffix
        return name

    def binary_locations(self, prefixes: Sequence[str]) -> List[str]:
        """Directories to search for binaries: prefixes, their bin/, then PATH."""
        locations = []
        for prefix in prefixes:
            locations.append(prefix)
            locations.append(os.path.join(prefix, "bin"))
        locations.extend(self.environment.search_path("PATH"))
        return locations

    # ------------------------------------------------------------------
    # Probing
    # ------------------------------------------------------------------

    def find_libraries(self, name: str, prefixes: Sequence[str] = ()) -> List[str]:
        """
        All existing files for library ``name``, highest priority first.

        Args:
            name: Library name without prefix or extension (e.g. 'cudart')
            prefixes: Installation prefixes to search before the loader path

        Returns:
            Existing library paths, possibly empty
        """
        names = self.library_names(name)
        locations = self.library_locations(prefixes)
        logger.debug(f"Checking for {names} in {locations}")

        found = []
        for location in locations:
            for stem in names:
                path = self._match_library(location, stem)
                if path:
                    found.append(path)
        return unique_paths(found)

    def find_library(self, name: str, prefixes: Sequence[str] = ()) -> Optional[str]:
        """
        First existing file for library ``name``.

        Returns:
            Library path, or None if it could not be found
        """
        logger.debug(f"Looking for {name} library in {list(prefixes)}")
        found = self.find_libraries(name, prefixes)
        if not found:
            logger.debug(f"Could not find {name} library")
            return None
        logger.debug(f"Using {name} library at {found[0]}")
        return found[0]

    def find_binaries(self, name: str, prefixes: Sequence[str] = ()) -> List[str]:
        """All existing files for executable ``name``, highest priority first."""
        filename = self.binary_name(name)
        locations = self.binary_locations(prefixes)
        logger.debug(f"Checking for {filename} in {locations}")

        paths = [os.path.join(location, filename) for location in locations]
        return unique_paths(p for p in paths if self.filesystem.exists(p))

    def find_binary(self, name: str, prefixes: Sequence[str] = ()) -> Optional[str]:
        """
        First existing file for executable ``name``; PATH is searched last.

        Returns:
            Binary path, or None if it could not be found
        """
        logger.debug(f"Looking for {name} binary in {list(prefixes)}")
        found = self.find_binaries(name, prefixes)
        if not found:
            logger.debug(f"Could not find {name} binary")
            return None
        logger.debug(f"Using {name} binary at {found[0]}")
        return found[0]

    def _match_library(self, location: str, stem: str) -> Optional[str]:
        """Path of ``stem`` in ``location`` with the platform's library extension."""
        ext = self.platform.shared_library_extension
        exact = os.path.join(location, stem + ext)
        if self.filesystem.exists(exact):
            return exact

        # Linux runtimes often ship only the versioned soname (libcuda.so.1)
        if ext == ".so":
            soname = re.compile(re.escape(stem + ext) + r"(\.\d+)+$")
            for entry in self.filesystem.list_dir(location):
                if soname.match(entry):
                    return os.path.join(location, entry)
        return None


__all__ = ["PathProber"]
