"""
Integrations - adapters from host build output to module records.
"""

from useless.integrations.webpack_stats import load_stats_modules, modules_from_stats

__all__ = [
    "load_stats_modules",
    "modules_from_stats",
]
