"""
Configuration for cudakit.
"""

from cudakit.config.parser import (
    CudaKitConfig,
    ToolkitConfig,
    HostCompilerConfig,
    load_config,
    parse_config,
)

__all__ = [
    "CudaKitConfig",
    "ToolkitConfig",
    "HostCompilerConfig",
    "load_config",
    "parse_config",
]
