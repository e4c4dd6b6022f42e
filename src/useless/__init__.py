"""
useless-analyzer: find source files a build never reached.
"""

from useless.core import (
    ConfigurationError,
    ModuleRecord,
    Policy,
    ReportWriteError,
    load_options,
    resolve_policy,
)
from useless.integrations import load_stats_modules, modules_from_stats
from useless.services import AuditResult, UnusedFileAuditor

__version__ = "0.1.0"

__all__ = [
    "AuditResult",
    "ConfigurationError",
    "ModuleRecord",
    "Policy",
    "ReportWriteError",
    "UnusedFileAuditor",
    "load_options",
    "load_stats_modules",
    "modules_from_stats",
    "resolve_policy",
]
