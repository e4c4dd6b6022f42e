"""Exception types for the unused-file auditor."""


class UselessAnalyzerError(Exception):
    """Base exception for all auditor errors."""

    pass


class ConfigurationError(UselessAnalyzerError):
    """Invalid options; raised while resolving a policy, before any audit runs."""

    pass


class UnknownPresetError(ConfigurationError):
    """The requested preset name is not registered."""

    def __init__(self, preset: str, available: list[str]):
        self.preset = preset
        self.available = available
        super().__init__(
            f'Preset "{preset}" is not supported (available: {", ".join(available)})'
        )


class UnknownOptionError(ConfigurationError):
    """An option key is not part of the recognized option set."""

    def __init__(self, keys: list[str]):
        self.keys = keys
        super().__init__(f"Unknown option(s): {', '.join(keys)}")


class InvalidOptionTypeError(ConfigurationError):
    """An option value has the wrong type."""

    pass


class InvalidPatternError(ConfigurationError):
    """An ignore or important pattern cannot be compiled."""

    def __init__(self, pattern: str, reason: str):
        self.pattern = pattern
        super().__init__(f"Invalid pattern {pattern!r}: {reason}")


class InvalidSourceRootError(ConfigurationError):
    """The source root cannot be used for enumeration."""

    def __init__(self, path: str, message: str):
        self.path = path
        super().__init__(message)


class SourceRootNotFoundError(InvalidSourceRootError):
    """The source root does not exist."""

    def __init__(self, path: str):
        super().__init__(path, f"Source root '{path}' does not exist")


class SourceRootNotADirectoryError(InvalidSourceRootError):
    """The source root exists but is not a directory."""

    def __init__(self, path: str):
        super().__init__(path, f"Source root '{path}' is not a directory")


class ReportWriteError(UselessAnalyzerError):
    """The report could not be written to disk.

    Raised when either the output directory cannot be created or the
    report file cannot be written. Not retried.
    """

    def __init__(self, path: str, reason: str):
        self.path = path
        super().__init__(f"Failed to write report to '{path}': {reason}")
