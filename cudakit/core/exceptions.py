"""
Centralized exception hierarchy for cudakit.

Expected absence during probing is reported as ``None`` by the probing
functions; the exceptions below are raised only once every signal source
has been exhausted or a result is unusable.
"""

from typing import Sequence


# ============================================================================
# Base Exceptions
# ============================================================================


class CudaKitError(Exception):
    """Base exception for all cudakit errors."""

    pass


# ============================================================================
# Discovery Exceptions
# ============================================================================


class DiscoveryError(CudaKitError):
    """Base exception for discovery-related errors."""

    pass


class NotFoundError(DiscoveryError):
    """Base exception when a library, binary or installation cannot be found."""

    pass


class InstallationNotFoundError(NotFoundError):
    """Raised when no candidate directory exists for a component."""

    def __init__(self, component: str, env_vars: Sequence[str] = ()):
        self.component = component
        self.env_vars = tuple(env_vars)
        msg = f"Could not find {component}"
        if self.env_vars:
            msg += f"; specify using the {_join_names(self.env_vars)} environment variable"
        super().__init__(msg)


class HostCompilerNotFoundError(NotFoundError):
    """Raised when the host compiler binary cannot be found."""

    pass


# ============================================================================
# Version Exceptions
# ============================================================================


class VersionError(CudaKitError):
    """Base exception for version parsing and compatibility errors."""

    pass


class UnparsableVersionError(VersionError):
    """Raised when tool output does not match the expected version pattern."""

    def __init__(self, raw_text: str, what: str = "version"):
        self.raw_text = raw_text
        super().__init__(f"Could not parse {what} from {raw_text!r}")


class UnknownToolkitVersionError(VersionError):
    """Raised when the compatibility table has no entry for a toolkit version."""

    def __init__(self, version):
        self.version = version
        super().__init__(
            f"No host compiler compatibility information for CUDA {version}"
        )


class NoCompatibleVersionError(VersionError):
    """Raised when no discovered host compiler lies in the supported range."""

    def __init__(self, toolkit_version, upper_bound, compiler: str = "GCC"):
        self.toolkit_version = toolkit_version
        self.upper_bound = upper_bound
        super().__init__(
            f"Could not find a suitable host compiler "
            f"(your CUDA v{toolkit_version} needs {compiler} <= {upper_bound})"
        )


# ============================================================================
# Platform / Environment Exceptions
# ============================================================================


class UnsupportedPlatformConfigurationError(CudaKitError):
    """Raised when the host is missing a required platform configuration."""

    pass


class CommandError(CudaKitError):
    """Raised when an external tool cannot be run or times out."""

    def __init__(self, executable: str, reason: str):
        self.executable = executable
        self.reason = reason
        super().__init__(f"Failed to run {executable}: {reason}")


# ============================================================================
# Data / Configuration Exceptions
# ============================================================================


class CompatibilityTableError(CudaKitError):
    """Raised when the compatibility table cannot be loaded."""

    pass


class ConfigError(CudaKitError):
    """Configuration parsing or validation error."""

    pass


def _join_names(names: Sequence[str]) -> str:
    """Join names as 'A', 'A or B', 'A, B or C'."""
    names = list(names)
    if len(names) <= 1:
        return "".join(names)
    return ", ".join(names[:-1]) + " or " + names[-1]
