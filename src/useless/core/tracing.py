"""
Debug trace facility.

Tracing is enabled per policy, never through process-wide state: every
component builds its tracer from the Policy it was handed. Traces are
purely observational and go to the ``useless.trace`` logger.
"""

import logging
from collections.abc import Mapping, Set
from dataclasses import dataclass
from pathlib import PurePath
from typing import Any, Protocol

TRACE_LOGGER_NAME = "useless.trace"

_trace_logger = logging.getLogger(TRACE_LOGGER_NAME)


class _HasDebugFlag(Protocol):
    debug_enabled: bool


def _render(value: Any) -> str:
    """Render a traced value deterministically (sets are sorted)."""
    if isinstance(value, Set):
        items = sorted(str(item) for item in value)
        return f"{len(items)} item(s)" + "".join(f"\n  {item}" for item in items)
    if isinstance(value, (list, tuple)):
        return f"{len(value)} item(s)" + "".join(f"\n  {item}" for item in value)
    if isinstance(value, Mapping):
        return "".join(f"\n  {key}: {_render(val)}" for key, val in value.items())
    if isinstance(value, PurePath):
        return value.as_posix()
    return str(value)


@dataclass(frozen=True)
class DebugTracer:
    """Emits labeled traces of intermediate values when enabled."""

    enabled: bool = False
    component: str = ""

    @classmethod
    def from_policy(cls, policy: _HasDebugFlag, component: str = "") -> "DebugTracer":
        """Create a tracer bound to the policy's debug flag."""
        return cls(enabled=policy.debug_enabled, component=component)

    def trace(self, label: str, value: Any = None) -> None:
        """
        Log a labeled value if tracing is enabled.

        Args:
            label: Short description of the value
            value: Value to render; omitted values log the label alone
        """
        if not self.enabled:
            return
        prefix = f"[{self.component}] " if self.component else ""
        if value is None:
            _trace_logger.info(f"{prefix}{label}")
        else:
            _trace_logger.info(f"{prefix}{label}: {_render(value)}")
