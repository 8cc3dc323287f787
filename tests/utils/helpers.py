"""
Test helper utilities for cudakit testing.

Canned tool banners and a helper for building fake installation trees.
"""

from pathlib import Path
from typing import Dict, Optional


def nvcc_banner(version: str) -> str:
    """Output of ``nvcc --version`` for toolkit ``version`` (major.minor)."""
    return (
        "nvcc: NVIDIA (R) Cuda compiler driver\n"
        "Copyright (c) 2005-2022 NVIDIA Corporation\n"
        "Built on Wed_Sep_21_10:33:58_PDT_2022\n"
        f"Cuda compilation tools, release {version}, V{version}.89\n"
        f"Build cuda_{version}.r{version}/compiler.31833905_0\n"
    )


NVCC_BANNER = nvcc_banner("11.8")


def gcc_banner(name: str, version: str) -> str:
    """Output of ``gcc --version`` as printed by Ubuntu's GCC."""
    return (
        f"{name} (Ubuntu {version}-1ubuntu1~22.04) {version}\n"
        "Copyright (C) 2021 Free Software Foundation, Inc.\n"
        "This is free software; see the source for copying conditions.\n"
    )


def create_file_tree(root: Path, structure: Dict[str, Optional[str]]) -> None:
    """
    Create a file tree from a dictionary structure.

    Args:
        root: Root directory for the file tree
        structure: Mapping of relative path to file content; None creates a directory

    Example:
        >>> create_file_tree(tmp_path, {
        ...     'cuda/bin/nvcc': '#!/bin/sh',
        ...     'cuda/lib64/libcudart.so': '',
        ...     'cuda/include/': None,
        ... })
    """
    for path_str, content in structure.items():
        file_path = root / path_str

        if content is None:
            file_path.mkdir(parents=True, exist_ok=True)
        else:
            file_path.parent.mkdir(parents=True, exist_ok=True)
            file_path.write_text(content)
