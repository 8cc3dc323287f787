"""
Environment signals for discovery.

Reads installation-root variables and PATH-like search variables from an
environment mapping without modifying it.
"""

import logging
import os
from typing import List, Mapping, Optional, Sequence, Tuple

from ..core.filesystem import unique_paths

logger = logging.getLogger(__name__)


class EnvironmentSignalCollector:
    """
    Collect caller-supplied directories from environment variables.

    Args:
        environ: Environment mapping (defaults to ``os.environ``)
        list_separator: Separator for PATH-like variables (defaults to ``os.pathsep``)
    """

    def __init__(
        self,
        environ: Optional[Mapping[str, str]] = None,
        list_separator: Optional[str] = None,
    ):
        self.environ = os.environ if environ is None else environ
        self.list_separator = list_separator or os.pathsep

    def get(self, name: str) -> Optional[str]:
        """Value of ``name``, or None if unset or empty."""
        value = self.environ.get(name)
        return value if value else None

    def collect(self, var_names: Sequence[str]) -> List[Tuple[str, str]]:
        """
        Collect set variables in declaration order.

        Returns:
            ``(name, value)`` pairs for every variable that is set and non-empty
        """
        found = []
        for name in var_names:
            value = self.get(name)
            if value is not None:
                found.append((name, value))
        return found

    def directories(self, var_names: Sequence[str], description: str = "") -> List[str]:
        """
        Distinct directories named by ``var_names``, first-declared first.

        Values naming the same normalized path count as one directory; the
        first spelling is kept. Logs a warning when the variables disagree.
        """
        found = self.collect(var_names)
        values = unique_paths(value for _, value in found)

        if len(values) > 1:
            names = [name for name, _ in found]
            if description:
                subject = f"{description} environment variables"
            else:
                subject = "Environment variables"
            logger.warning(
                f"{subject} set to different values: {_join(names)}; using {names[0]}"
            )
        return values

    def search_path(self, var_name: str = "PATH") -> List[str]:
        """Non-empty segments of a PATH-like variable, in order."""
        value = self.environ.get(var_name, "")
        return [segment for segment in value.split(self.list_separator) if segment]


def _join(names: Sequence[str]) -> str:
    names = list(names)
    if len(names) <= 1:
        return "".join(names)
    return ", ".join(names[:-1]) + " and " + names[-1]


__all__ = ["EnvironmentSignalCollector"]
