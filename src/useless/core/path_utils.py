"""
Path utilities for the unused-file auditor.

Provides the canonical path form shared by every component, vendored
dependency detection, and the source root validation used by the
policy resolver.

A canonical path is absolute, forward-slash separated, lower-cased and
has any ``?query`` suffix removed. Two paths name the same file iff
their canonical forms are equal. Canonicalization is a pure string
operation: symlinks are not resolved and the filesystem is not touched.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

# Directory names whose contents are third-party code
VENDOR_DIRECTORIES = frozenset(["node_modules"])


@dataclass
class PathValidationResult:
    """Result of source root validation.

    Attributes:
        valid: True if the path is an existing directory.
        exists: False if the path does not exist at all.
        error_message: Human-readable error message if validation failed.
    """
    valid: bool
    exists: bool = True
    error_message: Optional[str] = None


def strip_query(path: str) -> str:
    """Remove a trailing ``?query`` suffix, as reported for virtual modules."""
    index = path.find("?")
    if index == -1:
        return path
    return path[:index]


def to_forward_slashes(path: str) -> str:
    """Replace backslash separators with forward slashes."""
    return path.replace("\\", "/")


def canonicalize(path: str | os.PathLike[str], base: str | os.PathLike[str] | None = None) -> str:
    """
    Return the canonical form of a path.

    Args:
        path: Absolute path, or path relative to ``base``.
        base: Directory relative paths are resolved against
              (defaults to the current working directory).

    Returns:
        Absolute, forward-slash, lower-cased path without a query suffix.
    """
    raw = to_forward_slashes(strip_query(os.fspath(path)))
    if not os.path.isabs(raw):
        raw = os.path.join(os.fspath(base) if base is not None else os.getcwd(), raw)
    return to_forward_slashes(os.path.normpath(raw)).lower()


def disk_path(path: str | os.PathLike[str], base: str | os.PathLike[str] | None = None) -> Path:
    """
    Return the on-disk path for a reported resource.

    Strips the query suffix but keeps the original case, so the file can
    be opened on case-sensitive filesystems. Relative paths are joined
    with ``base`` (defaults to the current working directory).
    """
    raw = to_forward_slashes(strip_query(os.fspath(path)))
    if not os.path.isabs(raw):
        raw = os.path.join(os.fspath(base) if base is not None else os.getcwd(), raw)
    return Path(os.path.normpath(raw))


def is_vendored(path: str) -> bool:
    """Check if a path lies under a vendored-dependency directory."""
    parts = to_forward_slashes(path).lower().split("/")
    return any(part in VENDOR_DIRECTORIES for part in parts)


def relative_canonical(path: str, start: str) -> str:
    """
    Make a canonical path relative to a canonical start directory.

    Returns:
        Forward-slash, lower-cased relative path.
    """
    return to_forward_slashes(os.path.relpath(path, start)).lower()


def validate_source_root(path: Path) -> PathValidationResult:
    """
    Validate that a path can serve as the enumeration root.

    Performs the following checks:
    1. Path exists
    2. Path is a directory

    Args:
        path: Absolute path to validate.

    Returns:
        PathValidationResult with valid=True if all checks pass,
        or valid=False with an appropriate error message.
    """
    try:
        if not path.exists():
            return PathValidationResult(
                valid=False,
                exists=False,
                error_message=f"Source root '{path}' does not exist",
            )

        if not path.is_dir():
            return PathValidationResult(
                valid=False,
                error_message=f"Source root '{path}' is not a directory",
            )

        return PathValidationResult(valid=True)

    except (OSError, ValueError) as e:
        return PathValidationResult(
            valid=False,
            exists=False,
            error_message=f"Invalid path '{path}': {e}",
        )
