"""
Installation discovery for cudakit.

This module provides functionality for:
- Reading installation hints from the environment
- Probing prefixes for libraries and binaries
- Locating installation roots of the CUDA toolkit and driver
"""

from cudakit.core.filesystem import normalize_path, unique_paths
from cudakit.discovery.environment import EnvironmentSignalCollector
from cudakit.discovery.prober import PathProber
from cudakit.discovery.locator import (
    ComponentSpec,
    Installation,
    InstallationLocator,
    toolkit_component,
    driver_component,
)

__all__ = [
    "EnvironmentSignalCollector",
    "PathProber",
    "normalize_path",
    "unique_paths",
    "ComponentSpec",
    "Installation",
    "InstallationLocator",
    "toolkit_component",
    "driver_component",
]
