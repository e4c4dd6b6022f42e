"""
Built-in presets for the unused-file auditor.

A preset supplies the default source root and the baseline ignore list.
User-supplied ignore patterns are appended to the preset's list, never
substituted for it.
"""

from dataclasses import dataclass

DEFAULT_PRESET = "common"

DEFAULT_OUTPUT = ".useless/unused-files.json"

DEFAULT_IGNORE_PATTERNS: tuple[str, ...] = (
    # Dependencies and build output
    "node_modules/**/*",
    "dist/**/*",
    "build/**/*",
    # Config files
    "*.config.js",
    "*.config.ts",
    "*.config.json",
    "*.config.yaml",
    "*.config.yml",
    "*.config.toml",
    # Tool profiles
    "sonar-project.properties",
    "jsconfig.json",
    # Package manager files
    "package.json",
    "package-lock.json",
    "yarn.lock",
    "pnpm-lock.yaml",
    # Dot files and dot directories
    "**/.*",
    "**/.*/**",
    # Documentation
    "**/*.md",
    "**/*.txt",
    "**/LICENSE",
    # Static resources
    "assets/**/*",
    "public/**/*",
    "static/**/*",
    # Scripts
    "**/*.sh",
    "**/*.bat",
    "**/*.ps1",
    "sudo",
    # Non-source artifacts
    "**/*.d.ts",
    "**/*.map",
    "**/*.min.*",
)


@dataclass(frozen=True)
class Preset:
    """
    A named, partial policy used as the resolution base.

    Attributes:
        name: Registered preset name
        source_root: Default source root, relative to the project root
        ignore_patterns: Baseline ignore patterns
        important_patterns: Baseline important patterns
    """

    name: str
    source_root: str
    ignore_patterns: tuple[str, ...]
    important_patterns: tuple[str, ...] = ()


PRESETS: dict[str, Preset] = {
    "common": Preset(
        name="common",
        source_root="./",
        ignore_patterns=DEFAULT_IGNORE_PATTERNS,
    ),
    "webpack": Preset(
        name="webpack",
        source_root="./src",
        ignore_patterns=DEFAULT_IGNORE_PATTERNS,
    ),
    "vue": Preset(
        name="vue",
        source_root="./src",
        ignore_patterns=DEFAULT_IGNORE_PATTERNS,
    ),
    "nuxt": Preset(
        name="nuxt",
        source_root="./",
        ignore_patterns=DEFAULT_IGNORE_PATTERNS
        + (
            ".nuxt/**/*",
            "app/**/*",
            "modules/**/*",
            "router/**/*",
            "app.html",
        ),
    ),
}


def get_preset(name: str) -> Preset | None:
    """Return the registered preset with the given name, or None."""
    return PRESETS.get(name)


def available_presets() -> list[str]:
    """Return the registered preset names in sorted order."""
    return sorted(PRESETS)
