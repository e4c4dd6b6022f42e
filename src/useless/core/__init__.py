"""
Core Layer - policy resolution, file-universe enumeration, reachability
collection, stylesheet import resolution, diffing and tracing.
"""

from useless.core.config import Policy, load_options, resolve_policy
from useless.core.errors import (
    ConfigurationError,
    InvalidOptionTypeError,
    InvalidPatternError,
    InvalidSourceRootError,
    ReportWriteError,
    SourceRootNotADirectoryError,
    SourceRootNotFoundError,
    UnknownOptionError,
    UnknownPresetError,
    UselessAnalyzerError,
)
from useless.core.path_utils import canonicalize
from useless.core.patterns import InclusionRules, PatternSet
from useless.core.presets import PRESETS, Preset
from useless.core.reachability import ModuleRecord, ReachabilityCollector
from useless.core.report import ReportWriter, diff_file_sets, to_report_entries
from useless.core.stylesheets import StylesheetImportResolver, extract_targets
from useless.core.tracing import DebugTracer
from useless.core.universe import FileSet, FileUniverseEnumerator

__all__ = [
    # Config
    "Policy",
    "resolve_policy",
    "load_options",
    "Preset",
    "PRESETS",
    # Errors
    "UselessAnalyzerError",
    "ConfigurationError",
    "UnknownPresetError",
    "UnknownOptionError",
    "InvalidOptionTypeError",
    "InvalidPatternError",
    "InvalidSourceRootError",
    "SourceRootNotFoundError",
    "SourceRootNotADirectoryError",
    "ReportWriteError",
    # Paths and patterns
    "canonicalize",
    "PatternSet",
    "InclusionRules",
    # Universe
    "FileSet",
    "FileUniverseEnumerator",
    # Reachability
    "ModuleRecord",
    "ReachabilityCollector",
    "StylesheetImportResolver",
    "extract_targets",
    # Report
    "ReportWriter",
    "diff_file_sets",
    "to_report_entries",
    # Tracing
    "DebugTracer",
]
