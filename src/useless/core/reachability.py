"""
Reachability collection.

Derives the set of files the build reached from the host build's module
records, extended by the stylesheet import closure.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from useless.core.config import Policy
from useless.core.path_utils import canonicalize, is_vendored
from useless.core.stylesheets import StylesheetImportResolver, uses_stylesheet_loader
from useless.core.tracing import DebugTracer
from useless.core.universe import FileSet

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ModuleRecord:
    """
    One node of the host build's module graph.

    Attributes:
        resource_path: Resource path, absolute or relative to the project root
                       (may carry a ?query suffix),
                       or None for modules without a file
        loaders: Loader identifiers applied to the resource, in order
    """

    resource_path: Optional[str]
    loaders: tuple[str, ...] = ()

    @property
    def participates(self) -> bool:
        """True if the record names a file outside vendored dependencies."""
        return bool(self.resource_path) and not is_vendored(self.resource_path)


class ReachabilityCollector:
    """
    Computes the Reached file set for a policy.

    Step 1 adds every participating module's canonical path. Step 2
    re-reads stylesheets processed by a preprocessor loader and adds the
    transitive closure of their ``@import``/``@use``/``@forward`` targets.
    """

    def __init__(self, policy: Policy):
        self._policy = policy
        self._tracer = DebugTracer.from_policy(policy, "reachability")

    def collect(self, modules: Iterable[ModuleRecord]) -> FileSet:
        """
        Return the canonical paths reached by the build.

        Args:
            modules: Module records from the finished build; not modified

        Returns:
            Frozen set of canonical paths
        """
        records = [record for record in modules if record.participates]
        root = self._policy.project_root

        direct = {canonicalize(record.resource_path, base=root) for record in records}
        self._tracer.trace("Directly built modules", direct)

        resolver = StylesheetImportResolver(tracer=self._tracer)
        closure: set[str] = set()
        scanned: set[str] = set()
        for record in records:
            if not uses_stylesheet_loader(record.loaders):
                continue
            key = canonicalize(record.resource_path, base=root)
            if key in scanned:
                continue
            scanned.add(key)
            result = resolver.collect_closure(record.resource_path, base=root)
            closure.update(result.resolved)
            if result.misses:
                logger.debug(f"{len(result.misses)} unresolved import(s) below {key}")

        reached = frozenset(direct | closure)
        self._tracer.trace("Stylesheet closure", closure - direct)
        self._tracer.trace("Reached", reached)
        return reached
