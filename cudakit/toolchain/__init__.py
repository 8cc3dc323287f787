"""
Toolchain resolution for cudakit.

This module provides functionality for:
- Toolkit / host compiler compatibility lookup
- Host compiler selection per platform
- Assembling the resolved toolchain
"""

from cudakit.toolchain.compatibility import (
    CompilerCandidate,
    CompatibilityTable,
    CompatibilityResolver,
    host_compiler_names,
)
from cudakit.toolchain.host_compiler import (
    HostCompilerStrategy,
    GccStrategy,
    VisualStudioStrategy,
    ClangStrategy,
    strategy_for_platform,
)
from cudakit.toolchain.resolver import Toolchain, ToolchainResolver

__all__ = [
    "CompilerCandidate",
    "CompatibilityTable",
    "CompatibilityResolver",
    "host_compiler_names",
    "HostCompilerStrategy",
    "GccStrategy",
    "VisualStudioStrategy",
    "ClangStrategy",
    "strategy_for_platform",
    "Toolchain",
    "ToolchainResolver",
]
