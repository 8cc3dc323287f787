"""
Core interfaces for cudakit.

Discovery talks to the host only through these two interfaces, so tests can
substitute an in-memory filesystem or a scripted command runner.
"""

from abc import ABC, abstractmethod
from typing import List, Sequence


class FileSystem(ABC):
    """Read-only view of the filesystem used by the probers."""

    @abstractmethod
    def exists(self, path: str) -> bool:
        """
        Check whether a path exists.

        Args:
            path: Filesystem path

        Returns:
            True if something exists at ``path``
        """
        pass

    @abstractmethod
    def is_dir(self, path: str) -> bool:
        """Check whether ``path`` is an existing directory."""
        pass

    @abstractmethod
    def list_dir(self, path: str) -> List[str]:
        """
        List entry names in a directory.

        Returns:
            Entry names (not full paths); empty if ``path`` is not a readable directory
        """
        pass


class CommandRunner(ABC):
    """Runs an external tool and captures its standard output."""

    @abstractmethod
    def run(self, executable: str, args: Sequence[str] = ()) -> str:
        """
        Run ``executable`` with ``args`` and return its standard output.

        Raises:
            CommandError: If the tool cannot be started, fails or times out
        """
        pass


__all__ = [
    "FileSystem",
    "CommandRunner",
]
