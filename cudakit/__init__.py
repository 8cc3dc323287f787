"""
cudakit - locate the CUDA toolkit and a compatible host compiler.

cudakit finds the CUDA driver and toolkit on the host, reads the nvcc version
and selects a host compiler nvcc supports, producing the flags a build needs.
"""

from cudakit.api import (
    CudaKit,
    find_binary,
    find_driver,
    find_library,
    find_toolchain,
    find_toolkit,
)
from cudakit.toolchain.resolver import Toolchain

__version__ = "0.1.0"

__all__ = [
    "CudaKit",
    "Toolchain",
    "find_binary",
    "find_driver",
    "find_library",
    "find_toolchain",
    "find_toolkit",
]
