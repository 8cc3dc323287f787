"""
cudakit CLI argument parser.

This module implements the command-line interface for cudakit using argparse.
"""

import argparse
import importlib
import logging
import sys
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import List, Optional

from cudakit.core.exceptions import CudaKitError

try:
    __version__ = version("cudakit")
except PackageNotFoundError:
    __version__ = "0.1.0"

logger = logging.getLogger(__name__)

COMMAND_MODULES = {
    "toolkit": "cudakit.cli.commands.locate",
    "driver": "cudakit.cli.commands.locate",
    "library": "cudakit.cli.commands.probe",
    "binary": "cudakit.cli.commands.probe",
    "toolchain": "cudakit.cli.commands.toolchain",
}


class CLI:
    """cudakit command-line interface."""

    def __init__(self):
        """Initialize CLI with argument parser."""
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """
        Create argument parser with all subcommands.

        Returns:
            Configured ArgumentParser instance
        """
        parser = argparse.ArgumentParser(
            prog="cudakit",
            description="cudakit - locate the CUDA toolkit and a compatible host compiler",
            epilog='Use "cudakit COMMAND --help" for command-specific help',
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        # Global options
        parser.add_argument(
            "--version", action="version", version=f"cudakit {__version__}"
        )
        parser.add_argument(
            "--verbose", "-v", action="store_true", help="Enable verbose output"
        )
        parser.add_argument(
            "--quiet",
            "-q",
            action="store_true",
            help="Enable minimal output (errors only)",
        )
        parser.add_argument(
            "--config",
            type=Path,
            metavar="PATH",
            help="Path to configuration file (default: ./cudakit.yaml)",
        )

        subparsers = parser.add_subparsers(
            dest="command", help="Available commands", metavar="COMMAND"
        )

        self._add_locate_commands(subparsers)
        self._add_probe_commands(subparsers)
        self._add_toolchain_command(subparsers)

        return parser

    def _add_locate_commands(self, subparsers):
        """Add 'toolkit' and 'driver' subcommands."""
        for name, help_text in (
            ("toolkit", "Locate the CUDA toolkit installation"),
            ("driver", "Locate the CUDA driver installation"),
        ):
            parser = subparsers.add_parser(name, help=help_text, description=help_text)
            _add_json_flag(parser)

    def _add_probe_commands(self, subparsers):
        """Add 'library' and 'binary' subcommands."""
        for name, help_text in (
            ("library", "Find a shared library (e.g. cudart, nvidia-ml)"),
            ("binary", "Find an executable (e.g. nvcc, nvidia-smi)"),
        ):
            parser = subparsers.add_parser(name, help=help_text, description=help_text)
            parser.add_argument("name", help="Name without platform prefix or suffix")
            parser.add_argument(
                "--prefix",
                dest="prefixes",
                action="append",
                default=[],
                metavar="DIR",
                help="Installation prefix to search first (repeatable)",
            )
            _add_json_flag(parser)

    def _add_toolchain_command(self, subparsers):
        """Add 'toolchain' subcommand."""
        parser = subparsers.add_parser(
            "toolchain",
            help="Resolve nvcc and a compatible host compiler",
            description="Resolve nvcc, its version and the flags selecting a host compiler",
        )
        parser.add_argument(
            "--toolkit-dir",
            metavar="DIR",
            help="Toolkit installation root (default: locate it)",
        )
        _add_json_flag(parser)

    def parse_args(self, args: Optional[List[str]] = None):
        """
        Parse command-line arguments.

        Args:
            args: Arguments to parse (uses sys.argv if None)

        Returns:
            Parsed arguments namespace
        """
        return self.parser.parse_args(args)

    def run(self, args: Optional[List[str]] = None) -> int:
        """
        Run CLI with given arguments.

        Args:
            args: Arguments to parse (uses sys.argv if None)

        Returns:
            Exit code (0 for success, non-zero for error)
        """
        parsed_args = self.parse_args(args)

        self._configure_logging(parsed_args)

        if not parsed_args.command:
            self.parser.print_help()
            return 1

        try:
            return self._dispatch_command(parsed_args)
        except KeyboardInterrupt:
            logger.info("Operation cancelled by user")
            return 130
        except CudaKitError as e:
            logger.error(f"Error: {e}")
            if parsed_args.verbose:
                import traceback

                traceback.print_exc()
            return 1

    def _configure_logging(self, args):
        """
        Configure logging based on verbose/quiet flags.

        Args:
            args: Parsed arguments with verbose/quiet flags
        """
        if args.verbose:
            level = logging.DEBUG
            format_str = "%(levelname)s [%(name)s] %(message)s"
        elif args.quiet:
            level = logging.ERROR
            format_str = "%(levelname)s: %(message)s"
        else:
            level = logging.WARNING
            format_str = "%(levelname)s: %(message)s"

        logging.basicConfig(
            level=level,
            format=format_str,
            stream=sys.stderr,
            force=True,
        )

    def _dispatch_command(self, args) -> int:
        """
        Dispatch to appropriate command handler.

        Args:
            args: Parsed arguments with command field

        Returns:
            Exit code from command handler
        """
        module_name = COMMAND_MODULES.get(args.command)
        if not module_name:
            logger.error(f"Unknown command: {args.command}")
            return 1

        module = importlib.import_module(module_name)
        return module.run(args)


def _add_json_flag(parser: argparse.ArgumentParser):
    parser.add_argument(
        "--json", action="store_true", help="Print the result as JSON"
    )


def main():
    """Main entry point for CLI."""
    cli = CLI()
    sys.exit(cli.run())


if __name__ == "__main__":
    main()
