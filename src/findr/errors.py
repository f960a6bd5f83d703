"""Custom exception classes."""


class FindrError(Exception):
    """Base class for configuration-time failures."""


class PatternError(FindrError):
    """Raised when a name pattern is not a valid regular expression."""

    def __init__(self, pattern: str, message: str) -> None:
        super().__init__(f"invalid name pattern {pattern!r}: {message}")
        self.pattern = pattern
        self.message = message


class ConfigLoadError(FindrError):
    """Raised when a configuration file cannot be loaded."""
