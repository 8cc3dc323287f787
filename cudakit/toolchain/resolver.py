"""
cudakit/toolchain/resolver.py

Toolchain resolution - locates the CUDA toolkit, reads the nvcc version,
selects a compatible host compiler and returns the flags nvcc needs.

Every step either succeeds or raises; a partial toolchain is never returned.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from ..core.exceptions import NotFoundError
from ..core.interfaces import CommandRunner
from ..core.platform import PlatformInfo
from ..core.version import NVCC_VERSION_PATTERN, Version, parse_version
from ..discovery.locator import (
    NVCC,
    ComponentSpec,
    InstallationLocator,
    toolkit_component,
)
from ..discovery.prober import PathProber
from .compatibility import CompatibilityResolver, CompilerCandidate
from .host_compiler import HostCompilerStrategy, strategy_for_platform

logger = logging.getLogger(__name__)

COMPILER_BINDIR_FLAG = "--compiler-bindir"


@dataclass(frozen=True)
class Toolchain:
    """
    A resolved CUDA toolchain.

    Attributes:
        version: CUDA toolkit version reported by nvcc
        compiler_path: Path to nvcc
        host_compiler: Path to the selected host compiler
        flags: Arguments to pass to nvcc
        toolkit_dir: Installation root of the toolkit
    """

    version: Version
    compiler_path: str
    host_compiler: str
    flags: Tuple[str, ...]
    toolkit_dir: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": str(self.version),
            "compiler_path": self.compiler_path,
            "host_compiler": self.host_compiler,
            "flags": list(self.flags),
            "toolkit_dir": self.toolkit_dir,
        }

    def __str__(self) -> str:
        return f"CUDA {self.version} ({self.compiler_path} {' '.join(self.flags)})"


class ToolchainResolver:
    """
    Resolve a complete toolchain.

    Args:
        prober: Prober for nvcc and host compilers
        runner: Runs nvcc and GCC to read their versions
        compatibility: Toolkit/host compiler compatibility resolver
        platform: Platform to resolve for (defaults to the prober's)
        strategy: Host compiler strategy (defaults to the platform's)
        component: Where to look for the toolkit
    """

    def __init__(
        self,
        prober: PathProber,
        runner: CommandRunner,
        compatibility: CompatibilityResolver,
        platform: Optional[PlatformInfo] = None,
        strategy: Optional[HostCompilerStrategy] = None,
        component: Optional[ComponentSpec] = None,
        host_compiler_base: str = "gcc",
    ):
        self.prober = prober
        self.runner = runner
        self.compatibility = compatibility
        self.platform = platform or prober.platform
        self.strategy = strategy or strategy_for_platform(
            self.platform,
            prober,
            runner,
            compatibility,
            base_name=host_compiler_base,
        )
        self.component = component or toolkit_component()
        self.locator = InstallationLocator(prober)

    def resolve(self, toolkit_dir: Optional[str] = None) -> Toolchain:
        """
        Resolve the toolchain.

        Args:
            toolkit_dir: Toolkit installation root. If None, it is located.

        Returns:
            Immutable Toolchain

        Raises:
            CudaKitError: If any step fails
        """
        if toolkit_dir is None:
            toolkit_dir = self.locator.locate(self.component).directory

        nvcc_path, version = self.toolkit_version(toolkit_dir)
        logger.debug(f"Looking for toolchain supported by CUDA {version}")

        host = self.strategy.find_host_compiler(version)
        toolchain = self.assemble(version, nvcc_path, host, toolkit_dir)
        logger.info(f"Using {toolchain}")
        return toolchain

    def toolkit_version(self, toolkit_dir: str) -> Tuple[str, Version]:
        """
        Path and version of nvcc for a toolkit installation.

        Raises:
            NotFoundError: If nvcc cannot be found
            CommandError: If nvcc cannot be run
            UnparsableVersionError: If nvcc's output has no version
        """
        nvcc_path = self.prober.find_binary(NVCC, [toolkit_dir])
        if nvcc_path is None:
            raise NotFoundError(f"Could not find {NVCC} binary in {toolkit_dir} or PATH")

        output = self.runner.run(nvcc_path, ["--version"])
        version = parse_version(output, NVCC_VERSION_PATTERN)
        return nvcc_path, version

    @staticmethod
    def assemble(
        version: Version,
        nvcc_path: str,
        host: CompilerCandidate,
        toolkit_dir: str = "",
    ) -> Toolchain:
        return Toolchain(
            version=version,
            compiler_path=nvcc_path,
            host_compiler=host.path,
            flags=(COMPILER_BINDIR_FLAG, host.path),
            toolkit_dir=toolkit_dir,
        )


__all__ = ["Toolchain", "ToolchainResolver", "COMPILER_BINDIR_FLAG"]
