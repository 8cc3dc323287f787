"""
Toolkit and driver commands.

Print the installation root of the CUDA toolkit or driver.
"""

from cudakit.cli.utils import create_session, emit


def run(args) -> int:
    """
    Run the toolkit or driver command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    session = create_session(args)
    if args.command == "driver":
        installation = session.find_driver()
    else:
        installation = session.find_toolkit()

    emit(
        {
            "component": installation.component,
            "directory": installation.directory,
            "alternatives": list(installation.alternatives),
        },
        as_json=args.json,
    )
    return 0
