"""
Module records from webpack stats JSON.

Converts the output of ``webpack --json`` (or ``stats.toJson()``) into
ModuleRecord instances. Concatenated modules and child compilations are
flattened.
"""

import json
import logging
from pathlib import Path
from typing import Any, Iterator, Mapping, Optional

from useless.core.reachability import ModuleRecord

logger = logging.getLogger(__name__)


def _split_identifier(identifier: str) -> tuple[Optional[str], tuple[str, ...]]:
    """
    Split a module identifier into resource and loader chain.

    ``type|loader1!loader2!/abs/resource?query`` -> resource, (loader1, loader2)
    """
    parts = [part for part in identifier.split("!") if part]
    if not parts:
        return None, ()

    segments = parts[-1].split("|")
    resource = next(
        (segment for segment in segments if Path(segment.split("?")[0]).is_absolute()),
        segments[0],
    )
    loaders = list(parts[:-1])
    if loaders and "|" in loaders[0]:
        loaders[0] = loaders[0].split("|", 1)[1]
    return resource or None, tuple(loader for loader in loaders if loader)


def _record_from_module(module: Mapping[str, Any]) -> Optional[ModuleRecord]:
    identifier = module.get("identifier")
    resource: Optional[str] = None
    loaders: tuple[str, ...] = ()

    if isinstance(identifier, str):
        resource, loaders = _split_identifier(identifier)

    name_for_condition = module.get("nameForCondition")
    if isinstance(name_for_condition, str) and name_for_condition:
        resource = name_for_condition

    if resource is None or not Path(resource.split("?")[0]).is_absolute():
        return None
    return ModuleRecord(resource_path=resource, loaders=loaders)


def _iter_modules(stats: Mapping[str, Any]) -> Iterator[Mapping[str, Any]]:
    for module in stats.get("modules") or []:
        if not isinstance(module, Mapping):
            continue
        yield module
        nested = module.get("modules")
        if nested:
            yield from _iter_modules({"modules": nested})
    for child in stats.get("children") or []:
        if isinstance(child, Mapping):
            yield from _iter_modules(child)


def modules_from_stats(stats: Mapping[str, Any]) -> list[ModuleRecord]:
    """
    Convert a webpack stats mapping into module records.

    Args:
        stats: Parsed stats JSON

    Returns:
        Module records in stats order; modules without an absolute
        resource are dropped
    """
    records: list[ModuleRecord] = []
    skipped = 0
    for module in _iter_modules(stats):
        record = _record_from_module(module)
        if record is None:
            skipped += 1
            continue
        records.append(record)

    logger.debug(f"Read {len(records)} module record(s) from stats ({skipped} without a resource)")
    return records


def load_stats_modules(path: Path | str) -> list[ModuleRecord]:
    """
    Read a webpack stats JSON file and return its module records.

    Raises:
        FileNotFoundError: If the stats file doesn't exist
        ValueError: If the file is not a JSON object
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Stats file not found: {path}")

    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"Stats file {path} must contain a JSON object")
    return modules_from_stats(data)
