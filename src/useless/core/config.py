"""
Policy resolution for the unused-file auditor.

Merges the default policy, a named preset and user overrides into one
validated, immutable Policy. All option validation happens before the
filesystem is touched; the only I/O is the final source root check.
"""

import json
import logging
import os
from collections.abc import Mapping
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Optional

import yaml

from useless.core.errors import (
    InvalidOptionTypeError,
    SourceRootNotADirectoryError,
    SourceRootNotFoundError,
    UnknownOptionError,
    UnknownPresetError,
)
from useless.core.path_utils import validate_source_root
from useless.core.patterns import validate_patterns
from useless.core.presets import DEFAULT_OUTPUT, DEFAULT_PRESET, available_presets, get_preset
from useless.core.tracing import DebugTracer

logger = logging.getLogger(__name__)

# Canonical option name -> accepted aliases
_OPTION_ALIASES: dict[str, tuple[str, ...]] = {
    "preset": (),
    "src": ("source_root",),
    "ignores": ("ignore_patterns",),
    "important": ("important_patterns",),
    "output": ("output_path",),
    "debug": ("debug_enabled",),
}

_KEY_TO_OPTION: dict[str, str] = {
    key: option
    for option, aliases in _OPTION_ALIASES.items()
    for key in (option, *aliases)
}


@dataclass(frozen=True)
class Policy:
    """
    Resolved, immutable auditor configuration.

    Attributes:
        preset: Name of the preset used as the resolution base
        source_root: Absolute directory that is enumerated
        ignore_patterns: Preset ignore patterns followed by user patterns
        important_patterns: Patterns that override ignores
        output_path: Absolute path of the JSON report
        debug_enabled: Whether components emit debug traces
        project_root: Working directory report paths are relative to
    """

    preset: str
    source_root: Path
    ignore_patterns: tuple[str, ...]
    important_patterns: tuple[str, ...]
    output_path: Path
    debug_enabled: bool
    project_root: Path

    def to_dict(self) -> dict:
        """Convert the policy to a plain dictionary."""
        data = asdict(self)
        for key in ("source_root", "output_path", "project_root"):
            data[key] = data[key].as_posix()
        data["ignore_patterns"] = list(self.ignore_patterns)
        data["important_patterns"] = list(self.important_patterns)
        return data


@dataclass(frozen=True)
class _UserOptions:
    """Type-checked user options; None means the option was not given."""

    preset: Optional[str] = None
    src: Optional[str] = None
    ignores: Optional[tuple[str, ...]] = None
    important: Optional[tuple[str, ...]] = None
    output: Optional[str] = None
    debug: Optional[bool] = None


def _is_path_like(value: Any) -> bool:
    return isinstance(value, (str, os.PathLike))


def _check_pattern_list(name: str, value: Any) -> tuple[str, ...]:
    if isinstance(value, str) or not isinstance(value, (list, tuple)):
        raise InvalidOptionTypeError(
            f"Option '{name}' must be a list of strings, got {type(value).__name__}"
        )
    for item in value:
        if not isinstance(item, str):
            raise InvalidOptionTypeError(
                f"Option '{name}' must be a list of strings, "
                f"found {type(item).__name__} item {item!r}"
            )
    return tuple(value)


def _parse_user_options(options: Any) -> _UserOptions:
    """Validate the shape and types of raw options."""
    if options is None:
        return _UserOptions()

    if not isinstance(options, Mapping):
        raise InvalidOptionTypeError(
            f"Options must be a mapping, got {type(options).__name__}"
        )

    unknown = sorted(str(key) for key in options if key not in _KEY_TO_OPTION)
    if unknown:
        raise UnknownOptionError(unknown)

    values: dict[str, Any] = {}
    for key, value in options.items():
        option = _KEY_TO_OPTION[key]
        if value is None:
            continue
        if option in values:
            raise InvalidOptionTypeError(
                f"Option '{option}' given more than once (via '{key}')"
            )
        values[option] = value

    preset = values.get("preset")
    if preset is not None and not isinstance(preset, str):
        raise InvalidOptionTypeError(
            f"Option 'preset' must be a string, got {type(preset).__name__}"
        )

    src = values.get("src")
    if src is not None and not _is_path_like(src):
        raise InvalidOptionTypeError(
            f"Option 'src' must be a string path, got {type(src).__name__}"
        )

    output = values.get("output")
    if output is not None and not _is_path_like(output):
        raise InvalidOptionTypeError(
            f"Option 'output' must be a string path, got {type(output).__name__}"
        )

    debug = values.get("debug")
    if debug is not None and not isinstance(debug, bool):
        raise InvalidOptionTypeError(
            f"Option 'debug' must be a boolean, got {type(debug).__name__}"
        )

    ignores = values.get("ignores")
    important = values.get("important")

    return _UserOptions(
        preset=preset,
        src=os.fspath(src) if src is not None else None,
        ignores=_check_pattern_list("ignores", ignores) if ignores is not None else None,
        important=_check_pattern_list("important", important) if important is not None else None,
        output=os.fspath(output) if output is not None else None,
        debug=debug,
    )


def _absolute(path: str, cwd: Path) -> Path:
    candidate = Path(path).expanduser()
    if not candidate.is_absolute():
        candidate = cwd / candidate
    return Path(os.path.normpath(candidate))


def resolve_policy(
    options: Optional[Mapping[str, Any]] = None,
    *,
    cwd: Optional[Path | str] = None,
) -> Policy:
    """
    Resolve raw user options into a validated Policy.

    Args:
        options: Raw options mapping with keys preset, src, ignores,
                 important, output, debug (or their long aliases)
        cwd: Project root used for relative paths (defaults to os.getcwd())

    Returns:
        Immutable Policy

    Raises:
        InvalidOptionTypeError: If options or a value has the wrong type
        UnknownOptionError: If an option key is not recognized
        UnknownPresetError: If the preset is not registered
        InvalidPatternError: If a pattern cannot be compiled
        SourceRootNotFoundError: If the source root does not exist
        SourceRootNotADirectoryError: If the source root is not a directory
    """
    user = _parse_user_options(options)

    preset_name = user.preset if user.preset is not None else DEFAULT_PRESET
    preset = get_preset(preset_name)
    if preset is None:
        raise UnknownPresetError(preset_name, available_presets())

    ignore_patterns = preset.ignore_patterns + (user.ignores or ())
    important_patterns = (
        user.important if user.important is not None else preset.important_patterns
    )
    validate_patterns(ignore_patterns)
    validate_patterns(important_patterns)

    project_root = Path(os.path.abspath(cwd if cwd is not None else os.getcwd()))
    source_root = _absolute(user.src if user.src is not None else preset.source_root, project_root)
    output_path = _absolute(user.output if user.output is not None else DEFAULT_OUTPUT, project_root)

    validation = validate_source_root(source_root)
    if not validation.valid:
        if not validation.exists:
            raise SourceRootNotFoundError(str(source_root))
        raise SourceRootNotADirectoryError(str(source_root))

    policy = Policy(
        preset=preset_name,
        source_root=source_root,
        ignore_patterns=ignore_patterns,
        important_patterns=important_patterns,
        output_path=output_path,
        debug_enabled=user.debug if user.debug is not None else False,
        project_root=project_root,
    )

    DebugTracer.from_policy(policy, "policy").trace("Resolved policy", policy.to_dict())
    return policy


def load_options(path: Path | str) -> dict[str, Any]:
    """
    Load raw options from a YAML or JSON file.

    The result is not validated; pass it to resolve_policy().

    Args:
        path: Path to the options file (.yaml, .yml, or .json)

    Returns:
        Raw options mapping (empty for an empty file)

    Raises:
        FileNotFoundError: If the file doesn't exist
        InvalidOptionTypeError: If the format is unsupported or the content
                                is not a mapping
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Options file not found: {path}")

    content = path.read_text(encoding="utf-8")

    if path.suffix in (".yaml", ".yml"):
        try:
            data = yaml.safe_load(content) or {}
        except yaml.YAMLError as e:
            raise InvalidOptionTypeError(f"Invalid YAML in options file {path}: {e}") from e
    elif path.suffix == ".json":
        try:
            data = json.loads(content) if content.strip() else {}
        except json.JSONDecodeError as e:
            raise InvalidOptionTypeError(f"Invalid JSON in options file {path}: {e}") from e
    else:
        raise InvalidOptionTypeError(f"Unsupported options file format: {path.suffix}")

    if not isinstance(data, dict):
        raise InvalidOptionTypeError(
            f"Options file {path} must contain a mapping, got {type(data).__name__}"
        )

    logger.debug(f"Loaded {len(data)} option(s) from {path}")
    return data
