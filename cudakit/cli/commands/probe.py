"""
Library and binary commands.

Find a single library or executable the way toolkit discovery does.
"""

from cudakit.cli.utils import create_session, emit


def run(args) -> int:
    """
    Run the library or binary command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    session = create_session(args)
    if args.command == "library":
        path = session.find_library(args.name, args.prefixes)
    else:
        path = session.find_binary(args.name, args.prefixes)

    emit({"name": args.name, "path": path}, as_json=args.json)
    return 0
