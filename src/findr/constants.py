"""Project-wide constants, enums, and small helpers."""

from __future__ import annotations

from enum import StrEnum


class EntryType(StrEnum):
    """Kinds of filesystem entries the type filter can request."""

    DIRECTORY = "d"
    FILE = "f"
    SYMLINK = "l"

    @classmethod
    def from_code(cls, code: str) -> EntryType:
        """Return the member for a ``d``/``f``/``l`` code (case-insensitive)."""
        try:
            return cls(code.strip().lower())
        except ValueError:
            msg = f"unknown entry type code: {code!r} (expected one of d, f, l)"
            raise ValueError(msg) from None


TYPE_CODES: tuple[str, ...] = tuple(t.value for t in EntryType)

DEFAULT_PATH = "."

# Process exit codes
EXIT_OK = 0
EXIT_USAGE = 2  # matches click.UsageError.exit_code
EXIT_CONFIG = 3
EXIT_INTERRUPT = 130

# Keys recognised in TOML configuration files
CONFIG_PATHS = "paths"
CONFIG_NAMES = "names"
CONFIG_TYPES = "types"
