"""
File-universe enumeration.

Walks the source root and returns every file that survives the
ignore/important rules, as a set of canonical paths.
"""

import logging
from pathlib import Path
from typing import Iterator

from useless.core.config import Policy
from useless.core.path_utils import canonicalize
from useless.core.patterns import InclusionRules
from useless.core.tracing import DebugTracer

logger = logging.getLogger(__name__)

FileSet = frozenset[str]


class FileUniverseEnumerator:
    """
    Enumerates the universe of candidate files for a policy.

    Provides recursive directory walking with:
    - Hidden files and directories included (exclusion only via patterns)
    - Important patterns overriding ignore patterns
    - Symlinked files listed, symlinked directories not descended into
    - Unreadable entries skipped with a warning
    """

    def __init__(self, policy: Policy):
        self._policy = policy
        self._rules = InclusionRules(policy.ignore_patterns, policy.important_patterns)
        self._tracer = DebugTracer.from_policy(policy, "universe")

    def enumerate(self) -> FileSet:
        """
        Return the universe of canonical file paths.

        Returns:
            Frozen set of canonical absolute paths
        """
        root = self._policy.source_root
        self._tracer.trace("Source root", root)

        universe = frozenset(
            canonicalize(path) for path in self.iter_files() if self._included(path, root)
        )

        self._tracer.trace("Universe", universe)
        return universe

    def iter_files(self) -> Iterator[Path]:
        """Yield every file under the source root, before filtering."""
        yield from self._walk(self._policy.source_root)

    def _included(self, path: Path, root: Path) -> bool:
        return self._rules.includes(path.relative_to(root).as_posix())

    def _walk(self, current_path: Path) -> Iterator[Path]:
        """
        Recursively list files below a directory.

        Args:
            current_path: Directory being walked

        Yields:
            File paths in name order
        """
        try:
            entries = sorted(current_path.iterdir(), key=lambda p: p.name)
        except PermissionError as e:
            logger.warning(f"Permission denied accessing directory: {current_path} - {e}")
            return
        except OSError as e:
            logger.warning(f"Error accessing directory: {current_path} - {e}")
            return

        for entry in entries:
            try:
                is_symlink = entry.is_symlink()
                is_dir = entry.is_dir()
                is_file = entry.is_file()
            except OSError as e:
                logger.warning(f"Error reading entry: {entry} - {e}")
                continue

            if is_dir:
                if is_symlink:
                    logger.debug(f"Skipping symlinked directory: {entry}")
                    continue
                yield from self._walk(entry)
            elif is_file:
                yield entry
            else:
                logger.debug(f"Skipping non-regular entry: {entry}")
