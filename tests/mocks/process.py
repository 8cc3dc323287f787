"""
Scripted command runner for testing.
"""

from typing import Dict, List, Sequence, Tuple, Union

from cudakit.core.exceptions import CommandError
from cudakit.core.interfaces import CommandRunner


class ScriptedRunner(CommandRunner):
    """
    Command runner returning canned output per executable.

    Args:
        outputs: Mapping of executable path to its stdout, or to an
            exception instance to raise
    """

    def __init__(self, outputs: Dict[str, Union[str, Exception]] = None):
        self.outputs = dict(outputs or {})
        self.calls: List[Tuple[str, Tuple[str, ...]]] = []

    def run(self, executable: str, args: Sequence[str] = ()) -> str:
        self.calls.append((str(executable), tuple(args)))
        result = self.outputs.get(str(executable))
        if result is None:
            raise CommandError(str(executable), "not scripted")
        if isinstance(result, Exception):
            raise result
        return result
