"""
Core functionality for cudakit.

This package contains the foundational modules that discovery depends on.
"""

from .platform import (
    HostPlatform,
    PlatformInfo,
    detect_platform,
    clear_platform_cache,
)

from .version import (
    Version,
    VersionRange,
    parse_version,
    NVCC_VERSION_PATTERN,
    GCC_VERSION_PATTERN,
)

from .exceptions import (
    CudaKitError,
    DiscoveryError,
    NotFoundError,
    InstallationNotFoundError,
    HostCompilerNotFoundError,
    VersionError,
    UnparsableVersionError,
    UnknownToolkitVersionError,
    NoCompatibleVersionError,
    UnsupportedPlatformConfigurationError,
    CommandError,
    CompatibilityTableError,
    ConfigError,
)

__all__ = [
    "HostPlatform",
    "PlatformInfo",
    "detect_platform",
    "clear_platform_cache",
    "Version",
    "VersionRange",
    "parse_version",
    "NVCC_VERSION_PATTERN",
    "GCC_VERSION_PATTERN",
    "CudaKitError",
    "DiscoveryError",
    "NotFoundError",
    "InstallationNotFoundError",
    "HostCompilerNotFoundError",
    "VersionError",
    "UnparsableVersionError",
    "UnknownToolkitVersionError",
    "NoCompatibleVersionError",
    "UnsupportedPlatformConfigurationError",
    "CommandError",
    "CompatibilityTableError",
    "ConfigError",
]
