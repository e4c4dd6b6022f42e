"""
Audit Service for the unused-file auditor.

Coordinates one audit: universe enumeration, reachability collection,
diffing and report writing. The policy is resolved once, at construction,
so configuration errors surface before the host build starts.
"""

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Iterable, Optional

from useless.core.config import Policy, resolve_policy
from useless.core.reachability import ModuleRecord, ReachabilityCollector
from useless.core.report import ReportWriter
from useless.core.universe import FileUniverseEnumerator
from useless.services.audit_models import AuditResult

logger = logging.getLogger(__name__)


class UnusedFileAuditor:
    """
    Reports source files the build never reached.

    Each run recomputes the universe and the reached set from scratch;
    nothing is cached between runs.
    """

    def __init__(
        self,
        options: Optional[Mapping[str, Any] | Policy] = None,
        *,
        cwd: Optional[Path | str] = None,
    ):
        """
        Initialize the auditor.

        Args:
            options: Raw options mapping, or an already resolved Policy
            cwd: Project root for relative paths (default: os.getcwd())

        Raises:
            ConfigurationError: If the options do not resolve to a valid policy
        """
        if isinstance(options, Policy):
            self._policy = options
        else:
            self._policy = resolve_policy(options, cwd=cwd)

    @property
    def policy(self) -> Policy:
        return self._policy

    def run(self, modules: Iterable[ModuleRecord]) -> AuditResult:
        """
        Audit a finished build and write the report.

        Args:
            modules: Read-only snapshot of the build's module records

        Returns:
            AuditResult with the universe, reached set and report entries

        Raises:
            ReportWriteError: If the report cannot be written
        """
        universe = FileUniverseEnumerator(self._policy).enumerate()
        reached = ReachabilityCollector(self._policy).collect(modules)

        writer = ReportWriter(self._policy)
        entries = writer.build_entries(universe, reached)
        output_path = writer.write(entries)

        logger.info(
            f"Audit complete: {len(universe)} candidate file(s), "
            f"{len(reached)} reached, {len(entries)} unused"
        )
        return AuditResult(
            universe=universe,
            reached=reached,
            unused=entries,
            output_path=output_path,
        )

    def on_build_complete(self, modules: Iterable[ModuleRecord]) -> AuditResult:
        """Build-completion hook entry point; see run()."""
        return self.run(tuple(modules))
