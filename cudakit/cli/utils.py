"""
Shared utilities for CLI commands.
"""

import json
import logging
from typing import Any, Dict

from cudakit.api import CudaKit
from cudakit.config.parser import load_config

logger = logging.getLogger(__name__)


def create_session(args) -> CudaKit:
    """
    Build a discovery session from the global CLI options.

    Args:
        args: Parsed arguments with an optional ``config`` path

    Raises:
        ConfigError: If an explicitly given configuration file is missing or invalid
    """
    config_path = getattr(args, "config", None)
    config = load_config(config_path, required=config_path is not None)
    logger.debug(f"Configuration: {config}")
    return CudaKit(config=config)


def emit(result: Dict[str, Any], as_json: bool = False):
    """
    Print a command result.

    Args:
        result: Flat mapping of field name to value
        as_json: Print JSON instead of ``key: value`` lines
    """
    if as_json:
        print(json.dumps(result, indent=2))
        return

    for key, value in result.items():
        if isinstance(value, (list, tuple)):
            value = " ".join(str(v) for v in value)
        print(f"{key}: {value}")
