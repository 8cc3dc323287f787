"""
cudakit/discovery/locator.py

Installation discovery - finds the root directory of a named component by
combining environment variables, well-known default directories and signal
probes (a library or binary whose containing directory reveals the root).
"""

import logging
import os
import re
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from ..core.exceptions import InstallationNotFoundError
from ..core.filesystem import unique_paths
from ..core.interfaces import FileSystem
from ..core.platform import PlatformInfo
from .environment import EnvironmentSignalCollector
from .prober import PathProber

logger = logging.getLogger(__name__)

_LIBRARY_SUBDIR = re.compile(r"^lib(32|64)?$")
_BINARY_SUBDIR = re.compile(r"^bin(32|64)?$")

TOOLKIT_ENV_VARS = ("CUDA_PATH", "CUDA_HOME", "CUDA_ROOT")
TOOLKIT_DEFAULT_DIRS = (
    "/usr/lib/nvidia-cuda-toolkit",
    "/usr/local/cuda",
    "/opt/cuda",
)

NVCC = "nvcc"
NVIDIA_SMI = "nvidia-smi"


def driver_library_name(platform: PlatformInfo) -> str:
    """Name of the CUDA driver library ('nvcuda' on Windows, 'cuda' elsewhere)."""
    return "nvcuda" if platform.is_windows else "cuda"


def nvml_library_name(platform: PlatformInfo) -> str:
    """Name of the NVIDIA management library."""
    return "nvml" if platform.is_windows else "nvidia-ml"


@dataclass(frozen=True)
class ComponentSpec:
    """
    Where to look for a component.

    Attributes:
        name: Human-readable component name, used in messages
        env_vars: Variables naming the installation root, highest priority first
        default_dirs: Well-known installation roots
        signal_libraries: Libraries whose directory reveals the root
        signal_binaries: Binaries whose directory reveals the root
    """

    name: str
    env_vars: Tuple[str, ...] = ()
    default_dirs: Tuple[str, ...] = ()
    signal_libraries: Tuple[str, ...] = ()
    signal_binaries: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Installation:
    """
    A located component.

    Attributes:
        component: Component name
        directory: Installation root
        alternatives: Other existing roots that lost on priority
    """

    component: str
    directory: str
    alternatives: Tuple[str, ...] = field(default=())

    @property
    def ambiguous(self) -> bool:
        return bool(self.alternatives)

    def __str__(self) -> str:
        return f"{self.component} at {self.directory}"


def toolkit_component(
    env_vars: Sequence[str] = TOOLKIT_ENV_VARS,
    default_dirs: Sequence[str] = TOOLKIT_DEFAULT_DIRS,
) -> ComponentSpec:
    """The CUDA toolkit: runtime library and nvcc."""
    return ComponentSpec(
        name="CUDA toolkit",
        env_vars=tuple(env_vars),
        default_dirs=tuple(default_dirs),
        signal_libraries=("cudart",),
        signal_binaries=(NVCC,),
    )


def driver_component(platform: PlatformInfo) -> ComponentSpec:
    """The CUDA driver: driver library, NVML and nvidia-smi."""
    return ComponentSpec(
        name="CUDA driver",
        signal_libraries=(driver_library_name(platform), nvml_library_name(platform)),
        signal_binaries=(NVIDIA_SMI,),
    )


def installation_root(path: str, subdir_pattern) -> str:
    """
    Directory containing ``path``, stepping out of a conventional subdirectory.

    Example:
        >>> installation_root("/opt/x/lib64/libfoo.so", _LIBRARY_SUBDIR)
        '/opt/x'
    """
    directory = os.path.dirname(os.path.normpath(path))
    if subdir_pattern.match(os.path.basename(directory)):
        directory = os.path.dirname(directory)
    return directory


class InstallationLocator:
    """
    Locate installation roots.

    Candidates are ranked environment variables first, then default
    directories, then signal probes. Ties between existing candidates are
    broken by that order.
    """

    def __init__(
        self,
        prober: PathProber,
        environment: Optional[EnvironmentSignalCollector] = None,
        filesystem: Optional[FileSystem] = None,
    ):
        self.prober = prober
        self.environment = environment or prober.environment
        self.filesystem = filesystem or prober.filesystem

    def candidate_directories(self, component: ComponentSpec) -> List[str]:
        """
        Ordered, deduplicated candidate roots for ``component``.

        The directories are not checked for existence.
        """
        dirs: List[str] = []
        dirs.extend(self.environment.directories(component.env_vars, component.name))
        dirs.extend(component.default_dirs)
        dirs.extend(self._signal_directories(component))
        return unique_paths(dirs)

    def locate(self, component: ComponentSpec) -> Installation:
        """
        Find the installation root of ``component``.

        Returns:
            Installation for the highest-priority existing candidate

        Raises:
            InstallationNotFoundError: If no candidate directory exists
        """
        candidates = self.candidate_directories(component)
        logger.debug(f"Candidate {component.name} directories: {candidates}")

        dirs = [d for d in candidates if self.filesystem.is_dir(d)]
        if not dirs:
            raise InstallationNotFoundError(component.name, component.env_vars)

        if len(dirs) > 1:
            logger.warning(
                f"Found multiple {component.name} installations: {', '.join(dirs)}"
            )

        installation = Installation(
            component=component.name,
            directory=dirs[0],
            alternatives=tuple(dirs[1:]),
        )
        logger.debug(f"Using {installation}")
        return installation

    def _signal_directories(self, component: ComponentSpec) -> List[str]:
        dirs = []
        for library in component.signal_libraries:
            path = self.prober.find_library(library)
            if path is not None:
                dirs.append(installation_root(path, _LIBRARY_SUBDIR))
        for binary in component.signal_binaries:
            path = self.prober.find_binary(binary)
            if path is not None:
                dirs.append(installation_root(path, _BINARY_SUBDIR))
        return dirs


__all__ = [
    "ComponentSpec",
    "Installation",
    "InstallationLocator",
    "toolkit_component",
    "driver_component",
    "driver_library_name",
    "nvml_library_name",
    "installation_root",
    "TOOLKIT_ENV_VARS",
    "TOOLKIT_DEFAULT_DIRS",
    "NVCC",
    "NVIDIA_SMI",
]
