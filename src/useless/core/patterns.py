"""
Glob pattern matching for the file-universe enumerator.

Each pattern is matched against the whole POSIX path relative to the
source root:
- ``*`` matches within a single path segment
- ``**`` matches zero or more whole segments
- ``?`` matches exactly one character (never ``/``)
- Patterns are anchored: ``*.js`` matches ``a.js`` but not ``lib/a.js``
- A pattern matches files, never directories; ``dist/**`` (or ``dist/``)
  is needed to cover a directory's contents
- ``*`` and ``?`` also match a leading dot (``**/.*`` matches ``src/.env``)
- ``!`` and ``#`` have no special meaning; ``\\`` escapes the next character

Patterns are compiled by ``pathspec``: each glob is rewritten to an
anchored gitignore line, and the compiled expression must match the full
path so that gitignore's directory-prefix matching does not apply.

Matching is case-sensitive on every platform.
"""

import logging
import re
from dataclasses import dataclass, field
from pathlib import PurePath
from typing import Iterable, Optional

import pathspec

from useless.core.errors import InvalidPatternError

logger = logging.getLogger(__name__)

_PATTERN_STYLE = "gitignore"

# Expression pathspec emits for patterns that match every path
_MATCH_ALL = "."


def to_gitignore_line(raw: str) -> str:
    """
    Rewrite a glob as an anchored gitignore line.

    Args:
        raw: Glob pattern relative to the source root

    Returns:
        Line for the gitignore pattern compiler
    """
    line = raw
    while line.startswith("./"):
        line = line[2:]
    if line.startswith(("!", "#")):
        line = "\\" + line
    if line == "**" or line.endswith("/**"):
        line += "/*"
    elif line.endswith("/"):
        line += "**/*"
    if not line.startswith(("/", "**/")):
        line = "/" + line
    return line


@dataclass(frozen=True)
class GlobPattern:
    """
    A compiled glob pattern.

    Attributes:
        raw: Pattern as given
        regex: Compiled expression, or None for a blank pattern (matches nothing)
    """

    raw: str
    regex: Optional[re.Pattern] = field(repr=False, compare=False)

    def matches(self, rel_path: str) -> bool:
        if self.regex is None:
            return False
        if self.regex.pattern == _MATCH_ALL:
            return True
        return self.regex.fullmatch(rel_path) is not None


def compile_pattern(raw: str) -> GlobPattern:
    """
    Compile a single pattern.

    Args:
        raw: Pattern string

    Returns:
        GlobPattern for the pattern

    Raises:
        InvalidPatternError: If the pattern is malformed
    """
    if not raw.strip():
        return GlobPattern(raw, None)

    factory = pathspec.util.lookup_pattern(_PATTERN_STYLE)
    try:
        compiled = factory(to_gitignore_line(raw))
    except ValueError as e:
        raise InvalidPatternError(raw, str(e)) from e
    return GlobPattern(raw, compiled.regex)


def validate_patterns(patterns: Iterable[str]) -> None:
    """Compile every pattern, raising InvalidPatternError on the first bad one."""
    for raw in patterns:
        compile_pattern(raw)


def _relative_posix(rel_path: str | PurePath) -> str:
    if isinstance(rel_path, PurePath):
        return rel_path.as_posix()
    return rel_path.replace("\\", "/")


@dataclass
class PatternSet:
    """
    An ordered list of glob patterns with their compiled matchers.

    Attributes:
        patterns: Raw pattern strings, in the order given
    """

    patterns: tuple[str, ...]
    _compiled: tuple[GlobPattern, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        self.patterns = tuple(self.patterns)
        self._compiled = tuple(compile_pattern(raw) for raw in self.patterns)

    def __bool__(self) -> bool:
        return bool(self.patterns)

    def matches(self, rel_path: str | PurePath) -> bool:
        """
        Check if a path relative to the source root matches any pattern.

        Args:
            rel_path: Relative path (string or PurePath)

        Returns:
            True if any pattern matches
        """
        path = _relative_posix(rel_path)
        return any(pattern.matches(path) for pattern in self._compiled)


class InclusionRules:
    """
    Decides which files belong to the universe.

    Important patterns override ignore patterns unconditionally:
    - matches an important pattern -> included
    - otherwise matches an ignore pattern -> excluded
    - otherwise -> included
    """

    def __init__(self, ignore_patterns: Iterable[str], important_patterns: Iterable[str]):
        self._ignore = PatternSet(tuple(ignore_patterns))
        self._important = PatternSet(tuple(important_patterns))

    def includes(self, rel_path: str | PurePath) -> bool:
        """
        Check if a relative file path belongs to the universe.

        Args:
            rel_path: Path relative to the source root

        Returns:
            True if the file is included
        """
        if self._important.matches(rel_path):
            return True
        if self._ignore.matches(rel_path):
            logger.debug(f"Ignoring: {rel_path}")
            return False
        return True
