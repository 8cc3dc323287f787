"""YAML configuration parser for cudakit.

This module provides parsing and validation for cudakit.yaml configuration files.
Every setting is optional; a missing file yields the built-in defaults.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

import yaml

from cudakit.core.exceptions import ConfigError
from cudakit.core.system import DEFAULT_COMMAND_TIMEOUT
from cudakit.discovery.locator import TOOLKIT_DEFAULT_DIRS, TOOLKIT_ENV_VARS

DEFAULT_CONFIG_FILENAME = "cudakit.yaml"


@dataclass
class ToolkitConfig:
    """Where to look for the CUDA toolkit."""

    env_vars: List[str] = field(default_factory=lambda: list(TOOLKIT_ENV_VARS))
    default_dirs: List[str] = field(default_factory=lambda: list(TOOLKIT_DEFAULT_DIRS))
    extra_dirs: List[str] = field(default_factory=list)  # searched after defaults


@dataclass
class HostCompilerConfig:
    """Host compiler selection settings."""

    base_name: str = "gcc"  # Unix only


@dataclass
class CudaKitConfig:
    """Complete cudakit configuration."""

    version: int = 1
    toolkit: ToolkitConfig = field(default_factory=ToolkitConfig)
    host_compiler: HostCompilerConfig = field(default_factory=HostCompilerConfig)
    compatibility_table: Optional[Path] = None
    command_timeout: float = DEFAULT_COMMAND_TIMEOUT


def load_config(config_path: Optional[Path] = None, required: bool = False) -> CudaKitConfig:
    """
    Load configuration, falling back to defaults.

    Args:
        config_path: Path to cudakit.yaml. If None, uses ./cudakit.yaml when present
        required: If True, a missing file is an error

    Raises:
        ConfigError: If the file is required but missing, or invalid
    """
    if config_path is None:
        config_path = Path.cwd() / DEFAULT_CONFIG_FILENAME
    config_path = Path(config_path)

    if not config_path.exists():
        if required:
            raise ConfigError(f"Configuration file not found: {config_path}")
        return CudaKitConfig()
    return parse_config(config_path)


def parse_config(config_path: Path) -> CudaKitConfig:
    """
    Parse cudakit.yaml configuration file.

    Args:
        config_path: Path to cudakit.yaml

    Returns:
        Parsed and validated configuration

    Raises:
        ConfigError: If configuration is invalid
    """
    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML syntax: {e}") from e

    if data is None:
        return CudaKitConfig()
    if not isinstance(data, dict):
        raise ConfigError("Configuration must be a mapping")

    config = _parse_and_validate(data)

    # Relative table paths are relative to the config file
    if config.compatibility_table and not config.compatibility_table.is_absolute():
        config.compatibility_table = config_path.parent / config.compatibility_table
    return config


def _parse_and_validate(data: dict) -> CudaKitConfig:
    """Parse and validate configuration data."""
    version = data.get("version", 1)
    if version != 1:
        raise ConfigError(f"Unsupported version: {version} (expected 1)")

    timeout = data.get("command_timeout", DEFAULT_COMMAND_TIMEOUT)
    if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
        raise ConfigError(f"command_timeout must be a positive number, got {timeout!r}")

    table = data.get("compatibility_table")
    if table is not None and not isinstance(table, str):
        raise ConfigError("compatibility_table must be a path")

    return CudaKitConfig(
        version=version,
        toolkit=_parse_toolkit(data.get("toolkit") or {}),
        host_compiler=_parse_host_compiler(data.get("host_compiler") or {}),
        compatibility_table=Path(table) if table else None,
        command_timeout=float(timeout),
    )


def _parse_toolkit(data: dict) -> ToolkitConfig:
    """Parse toolkit search configuration."""
    if not isinstance(data, dict):
        raise ConfigError("toolkit must be a mapping")

    defaults = ToolkitConfig()
    return ToolkitConfig(
        env_vars=_string_list(data, "env_vars", defaults.env_vars),
        default_dirs=_string_list(data, "default_dirs", defaults.default_dirs),
        extra_dirs=_string_list(data, "extra_dirs", defaults.extra_dirs),
    )


def _parse_host_compiler(data: dict) -> HostCompilerConfig:
    """Parse host compiler configuration."""
    if not isinstance(data, dict):
        raise ConfigError("host_compiler must be a mapping")

    base_name = data.get("base_name", "gcc")
    if not isinstance(base_name, str) or not base_name:
        raise ConfigError("host_compiler.base_name must be a non-empty string")
    return HostCompilerConfig(base_name=base_name)


def _string_list(data: dict, key: str, default: List[str]) -> List[str]:
    value = data.get(key)
    if value is None:
        return list(default)
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"{key} must be a list of strings")
    return value
