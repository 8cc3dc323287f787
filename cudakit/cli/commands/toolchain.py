"""
Toolchain command.

Resolves nvcc, the toolkit version and a compatible host compiler, and prints
the flags a build should pass to nvcc.
"""

import logging

from cudakit.cli.utils import create_session, emit

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the toolchain command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    session = create_session(args)
    toolchain = session.find_toolchain(args.toolkit_dir)
    logger.debug(f"Resolved {toolchain}")

    emit(toolchain.to_dict(), as_json=args.json)
    return 0
