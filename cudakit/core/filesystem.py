"""
Path utilities for cudakit.

Discovery compares candidate directories by their normalized absolute form,
so ``/opt/cuda``, ``/opt/cuda/`` and ``/opt/./cuda`` count as one location.
"""

import os
from typing import Iterable, List

# ============================================================================
# Path Utilities
# ============================================================================


def normalize_path(path: str) -> str:
    """Normalized absolute form of ``path``, used as the deduplication key."""
    return os.path.normcase(os.path.normpath(os.path.abspath(path)))


def unique_paths(paths: Iterable[str]) -> List[str]:
    """
    Drop paths that normalize to an already seen path.

    The first spelling of each path is kept and the order is preserved.
    """
    seen = set()
    result = []
    for path in paths:
        key = normalize_path(path)
        if key not in seen:
            seen.add(key)
            result.append(path)
    return result


__all__ = ["normalize_path", "unique_paths"]
