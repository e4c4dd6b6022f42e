"""
Stylesheet preprocessor import resolution.

The host build's module graph does not contain ``@import``/``@use``/
``@forward`` targets for preprocessor loaders: the loader inlines them
before the bundler sees any edge. This module recovers those edges by
scanning stylesheet sources and resolving each target the way the
preprocessor does, including the underscore partial convention.
"""

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional

from useless.core.path_utils import canonicalize, disk_path, is_vendored
from useless.core.tracing import DebugTracer

logger = logging.getLogger(__name__)

# Tried in this order when a target has no extension
STYLESHEET_EXTENSIONS: tuple[str, ...] = (".scss", ".sass", ".less", ".css")

# Loader identifiers whose imports are invisible to the module graph
STYLESHEET_LOADERS: tuple[str, ...] = ("sass-loader", "less-loader")

# Quoted strings are matched first so that comment markers inside them survive
_COMMENT_RE = re.compile(r"(\"[^\"\n]*\"|'[^'\n]*')|/\*.*?\*/|//[^\n]*", re.DOTALL)
_DIRECTIVE_RE = re.compile(
    r"@(?:import|use|forward)\s+(?:\([^)]*\)\s*)?"
    r"((?:(?:\"[^\"\n]*\"|'[^'\n]*')\s*,\s*)*(?:\"[^\"\n]*\"|'[^'\n]*'))"
)
_QUOTED_RE = re.compile(r"\"([^\"\n]*)\"|'([^'\n]*)'")
_EXTERNAL_PREFIXES = ("http://", "https://", "//", "data:", "sass:", "~")


def uses_stylesheet_loader(loaders: tuple[str, ...] | list[str]) -> bool:
    """Check if a loader chain contains a stylesheet preprocessor loader."""
    return any(name in loader for loader in loaders for name in STYLESHEET_LOADERS)


def _strip_comment(match: re.Match) -> str:
    return match.group(1) or " "


def extract_targets(text: str) -> list[str]:
    """
    Extract directive targets from stylesheet source.

    Handles single or double quotes, comma-separated ``@import`` lists and
    missing terminators. Comments are skipped.

    Args:
        text: Stylesheet source

    Returns:
        Target strings in source order
    """
    text = _COMMENT_RE.sub(_strip_comment, text)

    targets: list[str] = []
    for match in _DIRECTIVE_RE.finditer(text):
        for double, single in _QUOTED_RE.findall(match.group(1)):
            target = (double or single).strip()
            if target:
                targets.append(target)
    return targets


def _is_external(target: str) -> bool:
    return target.startswith(_EXTERNAL_PREFIXES)


def _partial(candidate: Path) -> Path:
    return candidate.with_name(f"_{candidate.name}")


def candidate_paths(target: str, importer_dir: Path) -> list[Path]:
    """
    List the files a target may refer to, in resolution order.

    Order:
    1. The target itself, if it carries a stylesheet extension;
       otherwise the target plus each extension in STYLESHEET_EXTENSIONS
    2. The partial (underscore-prefixed) variants of the same candidates
    3. The directory index files (``_index.*``, ``index.*``)
    """
    base = importer_dir / target
    if not base.name:
        return []
    if base.suffix.lower() in STYLESHEET_EXTENSIONS:
        plain = [base]
    else:
        plain = [base.with_name(base.name + ext) for ext in STYLESHEET_EXTENSIONS]

    candidates = plain + [_partial(p) for p in plain]
    if base.suffix.lower() not in STYLESHEET_EXTENSIONS:
        candidates += [base / f"_index{ext}" for ext in STYLESHEET_EXTENSIONS]
        candidates += [base / f"index{ext}" for ext in STYLESHEET_EXTENSIONS]
    return candidates


@dataclass
class ClosureResult:
    """
    Files reached through stylesheet directives.

    Attributes:
        resolved: Canonical paths of every file in the closure (entry included)
        misses: (importer, target) pairs that resolved to no file
    """

    resolved: set[str] = field(default_factory=set)
    misses: list[tuple[str, str]] = field(default_factory=list)


class StylesheetImportResolver:
    """
    Resolves the transitive closure of stylesheet directives.

    The walk is depth-first. A set of files currently being resolved
    guards against cycles; files already in the closure are not rescanned.
    """

    def __init__(
        self,
        tracer: Optional[DebugTracer] = None,
        exists: Callable[[Path], bool] = Path.is_file,
    ):
        self._tracer = tracer or DebugTracer()
        self._exists = exists

    def resolve_target(self, target: str, importer: Path) -> Optional[Path]:
        """
        Resolve one directive target relative to the importing file.

        Args:
            target: Directive target string
            importer: On-disk path of the importing stylesheet

        Returns:
            Path of the first existing candidate, or None
        """
        if _is_external(target) or is_vendored(target):
            return None
        for candidate in candidate_paths(target, importer.parent):
            if self._exists(candidate):
                return candidate
        return None

    def collect_closure(self, entry: str | Path, base: str | Path | None = None) -> ClosureResult:
        """
        Collect every stylesheet reachable from an entry file.

        Args:
            entry: Resource path of the entry stylesheet (query suffix allowed)
            base: Directory a relative entry is resolved against

        Returns:
            ClosureResult with canonical resolved paths and misses
        """
        result = ClosureResult()
        self._descend(disk_path(entry, base), set(), result)
        return result

    def _descend(self, path: Path, in_progress: set[str], result: ClosureResult) -> None:
        key = canonicalize(path)
        if key in in_progress:
            self._tracer.trace("Import cycle", f"{path}")
            return
        if key in result.resolved:
            return

        in_progress.add(key)
        try:
            for target in self._read_targets(path):
                dependency = self.resolve_target(target, path)
                if dependency is None:
                    result.misses.append((key, target))
                    self._tracer.trace("Unresolved import", f"{target!r} in {path}")
                    continue
                self._descend(dependency, in_progress, result)
        finally:
            in_progress.discard(key)

        result.resolved.add(key)

    def _read_targets(self, path: Path) -> list[str]:
        try:
            text = path.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            logger.debug(f"Cannot read stylesheet: {path} - {e}")
            return []
        return extract_targets(text)
