"""
High-level discovery API.

:class:`CudaKit` wires the probers, locator and resolvers together from a
:class:`~cudakit.config.parser.CudaKitConfig`. The module-level functions are
shortcuts that use the default configuration and the real host.

Usage:
    from cudakit.api import find_toolchain

    toolchain = find_toolchain()
    print(toolchain.compiler_path, *toolchain.flags)
"""

import logging
from typing import Mapping, Optional, Sequence

from cudakit.config.parser import CudaKitConfig
from cudakit.core.exceptions import NotFoundError
from cudakit.core.interfaces import CommandRunner, FileSystem
from cudakit.core.platform import PlatformInfo, detect_platform
from cudakit.core.system import LocalFileSystem, SubprocessRunner
from cudakit.discovery.environment import EnvironmentSignalCollector
from cudakit.discovery.locator import (
    ComponentSpec,
    Installation,
    InstallationLocator,
    driver_component,
    toolkit_component,
)
from cudakit.discovery.prober import PathProber
from cudakit.toolchain.compatibility import CompatibilityResolver, CompatibilityTable
from cudakit.toolchain.resolver import Toolchain, ToolchainResolver

logger = logging.getLogger(__name__)


class CudaKit:
    """
    Discovery session bound to one configuration and one host.

    Args:
        config: Configuration (defaults to built-in defaults)
        platform: Platform to probe for (defaults to the detected one)
        environ: Environment mapping (defaults to ``os.environ``)
        filesystem: Filesystem to probe
        runner: Command runner for version queries
        table: Compatibility table (defaults to the configured or embedded one)
    """

    def __init__(
        self,
        config: Optional[CudaKitConfig] = None,
        platform: Optional[PlatformInfo] = None,
        environ: Optional[Mapping[str, str]] = None,
        filesystem: Optional[FileSystem] = None,
        runner: Optional[CommandRunner] = None,
        table: Optional[CompatibilityTable] = None,
    ):
        self.config = config or CudaKitConfig()
        self.platform = platform or detect_platform()
        self.environment = EnvironmentSignalCollector(
            environ, list_separator=self.platform.list_separator
        )
        self.filesystem = filesystem or LocalFileSystem()
        self.runner = runner or SubprocessRunner(timeout=self.config.command_timeout)
        self.table = table or CompatibilityTable.load(self.config.compatibility_table)

        self.prober = PathProber(
            platform=self.platform,
            filesystem=self.filesystem,
            environment=self.environment,
            toolkit_versions=self.table.versions(),
        )
        self.locator = InstallationLocator(self.prober)
        self.compatibility = CompatibilityResolver(self.table)
        logger.debug(f"Discovery session for {self.platform}")

    def toolkit_component(self) -> ComponentSpec:
        toolkit = self.config.toolkit
        return toolkit_component(
            env_vars=toolkit.env_vars,
            default_dirs=list(toolkit.default_dirs) + list(toolkit.extra_dirs),
        )

    def find_library(self, name: str, prefixes: Sequence[str] = ()) -> str:
        """
        Path of library ``name``.

        Raises:
            NotFoundError: If the library cannot be found
        """
        path = self.prober.find_library(name, prefixes)
        if path is None:
            raise NotFoundError(f"Could not find {name} library")
        return path

    def find_binary(self, name: str, prefixes: Sequence[str] = ()) -> str:
        """
        Path of executable ``name``.

        Raises:
            NotFoundError: If the binary cannot be found
        """
        path = self.prober.find_binary(name, prefixes)
        if path is None:
            raise NotFoundError(f"Could not find {name} binary")
        return path

    def find_driver(self) -> Installation:
        return self.locator.locate(driver_component(self.platform))

    def find_toolkit(self) -> Installation:
        return self.locator.locate(self.toolkit_component())

    def find_toolchain(self, toolkit_dir: Optional[str] = None) -> Toolchain:
        resolver = ToolchainResolver(
            self.prober,
            self.runner,
            self.compatibility,
            platform=self.platform,
            component=self.toolkit_component(),
            host_compiler_base=self.config.host_compiler.base_name,
        )
        return resolver.resolve(toolkit_dir)


def find_library(name: str, prefixes: Sequence[str] = ()) -> str:
    """Path of library ``name`` below ``prefixes`` or on the loader path."""
    return CudaKit().find_library(name, prefixes)


def find_binary(name: str, prefixes: Sequence[str] = ()) -> str:
    """Path of executable ``name`` below ``prefixes`` or on PATH."""
    return CudaKit().find_binary(name, prefixes)


def find_driver() -> str:
    """Installation root of the CUDA driver."""
    return CudaKit().find_driver().directory


def find_toolkit() -> str:
    """Installation root of the CUDA toolkit."""
    return CudaKit().find_toolkit().directory


def find_toolchain(toolkit_dir: Optional[str] = None) -> Toolchain:
    """Resolve nvcc, its version and a compatible host compiler."""
    return CudaKit().find_toolchain(toolkit_dir)


__all__ = [
    "CudaKit",
    "find_library",
    "find_binary",
    "find_driver",
    "find_toolkit",
    "find_toolchain",
]
