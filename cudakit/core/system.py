"""
Default implementations of the filesystem and command runner interfaces.
"""

import logging
import os
import subprocess
from typing import List, Sequence

from cudakit.core.exceptions import CommandError
from cudakit.core.interfaces import CommandRunner, FileSystem

logger = logging.getLogger(__name__)

DEFAULT_COMMAND_TIMEOUT = 10.0
DEFAULT_MAX_OUTPUT = 64 * 1024


class LocalFileSystem(FileSystem):
    """The real filesystem."""

    def exists(self, path: str) -> bool:
        return os.path.exists(path)

    def is_dir(self, path: str) -> bool:
        return os.path.isdir(path)

    def list_dir(self, path: str) -> List[str]:
        try:
            return sorted(os.listdir(path))
        except OSError as e:
            logger.debug(f"Cannot list {path}: {e}")
            return []


class SubprocessRunner(CommandRunner):
    """
    Run tools with :func:`subprocess.run`.

    Output is truncated to ``max_output`` characters before it reaches the
    version parser. The whole output is still read into memory first; only
    ``timeout`` bounds how much a runaway tool can write.

    Output that cannot be decoded in the locale encoding is reported as a
    CommandError like any other tool failure.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_COMMAND_TIMEOUT,
        max_output: int = DEFAULT_MAX_OUTPUT,
    ):
        self.timeout = timeout
        self.max_output = max_output

    def run(self, executable: str, args: Sequence[str] = ()) -> str:
        cmd = [str(executable), *args]
        logger.debug(f"Running {' '.join(cmd)}")

        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self.timeout,
                check=False,
            )
        except subprocess.TimeoutExpired as e:
            raise CommandError(
                executable, f"timed out after {self.timeout} seconds"
            ) from e
        except OSError as e:
            raise CommandError(executable, str(e)) from e
        except UnicodeDecodeError as e:
            raise CommandError(executable, f"undecodable output ({e.reason})") from e

        if result.returncode != 0:
            raise CommandError(executable, f"exit code {result.returncode}")

        output = result.stdout or ""
        if len(output) > self.max_output:
            logger.debug(
                f"Truncating {len(output)} characters of output from {executable}"
            )
            output = output[: self.max_output]
        return output


__all__ = [
    "LocalFileSystem",
    "SubprocessRunner",
    "DEFAULT_COMMAND_TIMEOUT",
    "DEFAULT_MAX_OUTPUT",
]
