"""
Test utilities for cudakit testing.
"""

from .helpers import (
    NVCC_BANNER,
    gcc_banner,
    nvcc_banner,
    create_file_tree,
)

__all__ = [
    "NVCC_BANNER",
    "gcc_banner",
    "nvcc_banner",
    "create_file_tree",
]
