"""
Platform detection for cudakit.

This module detects the current platform once per process and exposes the
few properties discovery depends on: the host platform family (which selects
the host compiler strategy), the pointer width (which selects ``lib64`` and
Windows library name tags) and the naming conventions for executables and
shared libraries.

Usage:
    from cudakit.core.platform import detect_platform, HostPlatform

    platform_info = detect_platform()
    if platform_info.host is HostPlatform.UNIX:
        print("Looking for GCC")
"""

import enum
import functools
import platform
import struct
from dataclasses import dataclass


class HostPlatform(enum.Enum):
    """Platform family used to dispatch host compiler selection."""

    UNIX = "unix"
    WINDOWS = "windows"
    APPLE = "apple"


@dataclass(frozen=True)
class PlatformInfo:
    """
    Platform information relevant to toolkit discovery.

    Attributes:
        os: Operating system ('windows', 'linux', 'macos', 'freebsd', ...)
        arch: CPU architecture ('x64', 'arm64', 'x86', 'arm', 'ppc64le')
        word_size: Pointer width in bits (32 or 64)
    """

    os: str
    arch: str
    word_size: int = 64

    @property
    def host(self) -> HostPlatform:
        """Platform family for host compiler selection."""
        if self.os == "windows":
            return HostPlatform.WINDOWS
        if self.os == "macos":
            return HostPlatform.APPLE
        return HostPlatform.UNIX

    @property
    def is_windows(self) -> bool:
        return self.os == "windows"

    @property
    def is_64bit(self) -> bool:
        return self.word_size == 64

    @property
    def list_separator(self) -> str:
        """Separator used in PATH-like variables."""
        return ";" if self.is_windows else ":"

    @property
    def executable_suffix(self) -> str:
        return ".exe" if self.is_windows else ""

    @property
    def shared_library_extension(self) -> str:
        if self.is_windows:
            return ".dll"
        if self.os == "macos":
            return ".dylib"
        return ".so"

    @property
    def library_path_variable(self) -> str:
        """Environment variable the dynamic loader searches."""
        if self.is_windows:
            return "PATH"
        if self.os == "macos":
            return "DYLD_LIBRARY_PATH"
        return "LD_LIBRARY_PATH"

    def platform_string(self) -> str:
        """
        Get canonical platform string (e.g., 'linux-x64', 'macos-arm64').

        Example:
            >>> PlatformInfo('linux', 'x64').platform_string()
            'linux-x64'
        """
        return f"{self.os}-{self.arch}"

    def __str__(self) -> str:
        return f"{self.platform_string()} ({self.word_size}-bit)"


@functools.lru_cache(maxsize=1)
def detect_platform() -> PlatformInfo:
    """
    Detect current platform information.

    This function is cached - it only runs detection once per process.
    """
    return PlatformInfo(
        os=_detect_os(),
        arch=_detect_architecture(),
        word_size=_detect_word_size(),
    )


def _detect_os() -> str:
    """
    Detect operating system.

    Returns:
        Normalized OS name: 'windows', 'linux', 'macos', or the lowercased
        system name for other Unix-like systems
    """
    system = platform.system().lower()

    if system == "windows" or system.startswith(("cygwin", "msys")):
        return "windows"
    elif system == "darwin":
        return "macos"
    return system or "unknown"


def _detect_architecture() -> str:
    """
    Detect CPU architecture.

    Returns:
        Normalized architecture: 'x64', 'arm64', 'x86', 'arm', or the raw machine name
    """
    machine = platform.machine().lower()

    if machine in ("x86_64", "amd64", "x64"):
        return "x64"
    elif machine in ("aarch64", "arm64"):
        return "arm64"
    elif machine in ("i386", "i686", "x86"):
        return "x86"
    elif machine.startswith("arm"):
        return "arm"
    return machine


def _detect_word_size() -> int:
    """Pointer width of the running interpreter, in bits."""
    return struct.calcsize("P") * 8


def clear_platform_cache():
    """
    Clear the platform detection cache.

    This forces the next call to detect_platform() to re-detect.
    """
    detect_platform.cache_clear()


__all__ = [
    "HostPlatform",
    "PlatformInfo",
    "detect_platform",
    "clear_platform_cache",
]
