"""
cudakit/toolchain/host_compiler.py

Host compiler selection - one strategy per platform family:

- Unix: enumerate versioned GCC binaries and pick the newest supported one
- Windows: derive cl.exe from the Visual Studio tools environment variable
- macOS: use clang from PATH
"""

import logging
import os
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from ..core.exceptions import (
    CommandError,
    HostCompilerNotFoundError,
    UnparsableVersionError,
    UnsupportedPlatformConfigurationError,
)
from ..core.filesystem import normalize_path
from ..core.interfaces import CommandRunner
from ..core.platform import HostPlatform, PlatformInfo
from ..core.version import GCC_VERSION_PATTERN, Version, parse_version
from ..discovery.environment import EnvironmentSignalCollector
from ..discovery.prober import PathProber
from .compatibility import (
    CompatibilityResolver,
    CompilerCandidate,
    host_compiler_names,
)

logger = logging.getLogger(__name__)

# Newest first
VISUAL_STUDIO_ENV_VARS = (
    ("VS140COMNTOOLS", "Visual Studio 2015"),
    ("VS120COMNTOOLS", "Visual Studio 2013"),
    ("VS110COMNTOOLS", "Visual Studio 2012"),
    ("VS100COMNTOOLS", "Visual Studio 2010"),
)


class HostCompilerStrategy(ABC):
    """Finds the host compiler nvcc should use."""

    @abstractmethod
    def find_host_compiler(self, toolkit_version: Version) -> CompilerCandidate:
        """
        Select a host compiler for a toolkit.

        Args:
            toolkit_version: Version of the CUDA toolkit

        Returns:
            The selected compiler

        Raises:
            CudaKitError: If no usable compiler can be selected
        """
        pass


class GccStrategy(HostCompilerStrategy):
    """
    Unix-like platforms: find a GCC whose version the toolkit supports.

    Every plausible GCC name is looked up on PATH, its ``--version`` banner is
    parsed, and the newest compiler inside the supported range wins.
    """

    def __init__(
        self,
        prober: PathProber,
        runner: CommandRunner,
        resolver: CompatibilityResolver,
        base_name: str = "gcc",
    ):
        self.prober = prober
        self.runner = runner
        self.resolver = resolver
        self.base_name = base_name

    def find_host_compiler(self, toolkit_version: Version) -> CompilerCandidate:
        supported = self.resolver.range_for(toolkit_version)
        candidates = self.discover(host_compiler_names(self.base_name, supported))
        best = self.resolver.best_candidate(candidates, supported, toolkit_version)
        logger.debug(f"Using GCC {best.version} at {best.path}")
        return best

    def discover(self, names: Sequence[str]) -> List[CompilerCandidate]:
        """
        Versioned candidates for every name that exists, in discovery order.

        Compilers that cannot be run or whose banner cannot be parsed are
        skipped with a warning.
        """
        candidates = []
        seen = set()
        for name in names:
            path = self.prober.find_binary(name)
            if path is None:
                continue
            key = normalize_path(path)
            if key in seen:
                continue
            seen.add(key)

            version = self._version_of(path)
            if version is None:
                continue
            logger.debug(f"Found GCC {version} at {path}")
            candidates.append(CompilerCandidate(path=path, version=version))
        return candidates

    def _version_of(self, path: str) -> Optional[Version]:
        try:
            output = self.runner.run(path, ["--version"])
        except CommandError as e:
            logger.warning(f"{e}, skipping this compiler.")
            return None

        banner = output.splitlines()[0].strip() if output.strip() else ""
        try:
            return parse_version(banner, GCC_VERSION_PATTERN)
        except UnparsableVersionError:
            logger.warning(
                f'Could not parse GCC version info ("{banner}"), skipping this compiler.'
            )
            return None


class VisualStudioStrategy(HostCompilerStrategy):
    """
    Windows: use cl.exe from the newest Visual Studio announced in the environment.

    ``VS<NNN>COMNTOOLS`` points at ``<VS root>/Common7/Tools``; the compiler
    lives at ``<VS root>/VC/bin[/amd64]/cl.exe``.
    """

    def __init__(self, platform: PlatformInfo, environment: EnvironmentSignalCollector):
        self.platform = platform
        self.environment = environment

    def find_host_compiler(self, toolkit_version: Version) -> CompilerCandidate:
        found = self.environment.collect([name for name, _ in VISUAL_STUDIO_ENV_VARS])
        if not found:
            products = ", ".join(product for _, product in VISUAL_STUDIO_ENV_VARS)
            raise UnsupportedPlatformConfigurationError(
                f"Compatible Visual Studio installation cannot be found; "
                f"one of {products} is required."
            )

        var_name, tools_dir = found[0]
        root = os.path.dirname(os.path.dirname(os.path.normpath(tools_dir)))
        parts = [root, "VC", "bin"]
        if self.platform.is_64bit:
            parts.append("amd64")
        cl_path = os.path.join(*parts, "cl.exe")

        logger.debug(f"Using Visual Studio compiler at {cl_path} (from {var_name})")
        return CompilerCandidate(path=cl_path)


class ClangStrategy(HostCompilerStrategy):
    """macOS: GCC is not supported by nvcc there, so use clang."""

    def __init__(self, prober: PathProber, name: str = "clang"):
        self.prober = prober
        self.name = name

    def find_host_compiler(self, toolkit_version: Version) -> CompilerCandidate:
        path = self.prober.find_binary(self.name)
        if path is None:
            raise HostCompilerNotFoundError(f"Could not find {self.name} binary")
        logger.debug(f"Using Clang at {path}")
        return CompilerCandidate(path=path)


def strategy_for_platform(
    platform: PlatformInfo,
    prober: PathProber,
    runner: CommandRunner,
    resolver: CompatibilityResolver,
    environment: Optional[EnvironmentSignalCollector] = None,
    base_name: str = "gcc",
) -> HostCompilerStrategy:
    """Host compiler strategy for ``platform``."""
    host = platform.host
    if host is HostPlatform.WINDOWS:
        return VisualStudioStrategy(platform, environment or prober.environment)
    if host is HostPlatform.APPLE:
        return ClangStrategy(prober)
    return GccStrategy(prober, runner, resolver, base_name=base_name)


__all__ = [
    "HostCompilerStrategy",
    "GccStrategy",
    "VisualStudioStrategy",
    "ClangStrategy",
    "strategy_for_platform",
    "VISUAL_STUDIO_ENV_VARS",
]
