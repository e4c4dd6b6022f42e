"""
Diff and report writing.

Subtracts the reached set from the universe and persists the result as
a pretty-printed JSON array of project-relative paths.
"""

import json
import logging
from pathlib import Path
from typing import Iterable

from useless.core.config import Policy
from useless.core.errors import ReportWriteError
from useless.core.path_utils import canonicalize, relative_canonical
from useless.core.tracing import DebugTracer
from useless.core.universe import FileSet

logger = logging.getLogger(__name__)


def diff_file_sets(universe: FileSet, reached: FileSet) -> list[str]:
    """
    Return the universe members that were never reached.

    Args:
        universe: Canonical paths on disk
        reached: Canonical paths the build touched

    Returns:
        Sorted canonical paths in universe and not in reached
    """
    return sorted(universe - reached)


def to_report_entries(paths: Iterable[str], project_root: Path) -> list[str]:
    """
    Convert canonical absolute paths to sorted project-relative entries.

    Args:
        paths: Canonical absolute paths
        project_root: Directory entries are made relative to

    Returns:
        Sorted forward-slash, lower-cased relative paths
    """
    root = canonicalize(project_root)
    return sorted(relative_canonical(path, root) for path in paths)


def render_report(entries: list[str]) -> str:
    """Render report entries as a JSON array with 2-space indent and trailing newline."""
    return json.dumps(entries, indent=2, ensure_ascii=False) + "\n"


class ReportWriter:
    """Writes the unused-file report for a policy."""

    def __init__(self, policy: Policy):
        self._policy = policy
        self._tracer = DebugTracer.from_policy(policy, "report")

    def build_entries(self, universe: FileSet, reached: FileSet) -> list[str]:
        """Diff the two sets and relativize the survivors to the project root."""
        unused = diff_file_sets(universe, reached)
        self._tracer.trace("Unused", unused)

        entries = to_report_entries(unused, self._policy.project_root)
        self._tracer.trace("Report entries", entries)
        return entries

    def write(self, entries: list[str]) -> Path:
        """
        Write report entries to the policy's output path.

        Args:
            entries: Project-relative paths

        Returns:
            Path of the written report

        Raises:
            ReportWriteError: If the directory cannot be created or the
                              file cannot be written
        """
        output_path = self._policy.output_path
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ReportWriteError(str(output_path), f"cannot create directory: {e}") from e

        try:
            with output_path.open("w", encoding="utf-8", newline="\n") as handle:
                handle.write(render_report(entries))
        except OSError as e:
            raise ReportWriteError(str(output_path), str(e)) from e

        logger.info(f"Wrote {len(entries)} unused file(s) to {output_path}")
        self._tracer.trace("Report saved to", output_path)
        return output_path
