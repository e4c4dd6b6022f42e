"""
Audit Service data models.
"""

from dataclasses import dataclass, field
from pathlib import Path

from useless.core.universe import FileSet


@dataclass
class AuditResult:
    """Result of one audit run."""

    universe: FileSet
    reached: FileSet
    unused: list[str] = field(default_factory=list)
    output_path: Path | None = None

    @property
    def unused_count(self) -> int:
        return len(self.unused)
