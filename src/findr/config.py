"""Search configuration: the immutable ``FindConfig`` and its sources.

``FindConfig`` is built once from command-line arguments, optionally layered
over TOML defaults, and handed to :func:`findr.core.run`.
"""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

import tomlkit
from tomlkit.exceptions import TOMLKitError

from findr.constants import CONFIG_NAMES, CONFIG_PATHS, CONFIG_TYPES, DEFAULT_PATH, EntryType
from findr.errors import ConfigLoadError, PatternError
from findr.logging_utils import StructuredLogEvent, get_logger, log_event

if TYPE_CHECKING:
    from collections.abc import Iterable

# Configuration filenames
TOML_CONFIG = ".findr.toml"
PYPROJECT = "pyproject.toml"
ENV_CONFIG_PATH = "FINDR_CONFIG_PATH"

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class FindConfig:
    """What to search and how to filter it."""

    paths: tuple[str, ...] = (DEFAULT_PATH,)
    names: tuple[re.Pattern[str], ...] = ()
    entry_types: tuple[EntryType, ...] = ()


def compile_pattern(pattern: str) -> re.Pattern[str]:
    """Compile a name pattern, raising :class:`PatternError` on bad syntax."""
    try:
        return re.compile(pattern)
    except re.error as e:
        raise PatternError(pattern, str(e)) from e


def build_config(
    *,
    paths: Iterable[str] = (),
    names: Iterable[str] = (),
    types: Iterable[str | EntryType] = (),
) -> FindConfig:
    """Validate raw arguments and return a ``FindConfig``.

    Patterns are compiled eagerly so that a bad one aborts before any
    traversal. Type order and duplicates are kept as given.
    """
    return FindConfig(
        paths=tuple(str(p) for p in paths) or (DEFAULT_PATH,),
        names=tuple(compile_pattern(n) for n in names),
        entry_types=tuple(t if isinstance(t, EntryType) else EntryType.from_code(t) for t in types),
    )


def _string_list(value: object, *, key: str, source: Path) -> list[str]:
    if isinstance(value, str):
        return [value]
    if isinstance(value, list) and all(isinstance(v, str) for v in value):
        return list(value)
    msg = f"{source}: '{key}' must be a string or a list of strings"
    raise ConfigLoadError(msg)


def _normalise_table(table: dict[str, Any], source: Path) -> dict[str, list[str]]:
    """Keep only recognised keys and check their shapes."""
    cfg: dict[str, list[str]] = {}
    for key in (CONFIG_PATHS, CONFIG_NAMES, CONFIG_TYPES):
        if key in table:
            cfg[key] = _string_list(table[key], key=key, source=source)
    for code in cfg.get(CONFIG_TYPES, []):
        try:
            EntryType.from_code(code)
        except ValueError as e:
            msg = f"{source}: {e}"
            raise ConfigLoadError(msg) from e
    return cfg


def _parse_toml(path: Path) -> dict[str, Any]:
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        msg = f"Error reading {path}: {e.strerror or e}"
        raise ConfigLoadError(msg) from e
    try:
        return tomlkit.loads(raw).unwrap()
    except TOMLKitError as e:
        msg = f"Error parsing {path.name}: {e}"
        raise ConfigLoadError(msg) from e


def load_toml_config(path: Path) -> dict[str, list[str]]:
    """Load recognised keys from a standalone findr TOML file."""
    return _normalise_table(_parse_toml(path), path)


def _load_pyproject_config(path: Path) -> dict[str, list[str]]:
    """Return the [tool.findr] table; a pyproject that does not parse is skipped."""
    try:
        data = _parse_toml(path)
    except ConfigLoadError as e:
        log_event(
            logger,
            StructuredLogEvent(
                name="config.pyproject_skipped",
                message="ignoring unreadable pyproject.toml",
                level=logging.WARNING,
                context={"path": path, "reason": str(e)},
            ),
        )
        return {}
    tool = data.get("tool", {})
    if isinstance(tool, dict):
        table = tool.get("findr")
        if isinstance(table, dict):
            return _normalise_table(table, path)
    return {}


def _xdg_config_path() -> Path:
    xdg_home = os.environ.get("XDG_CONFIG_HOME")
    xdg_dir = Path(xdg_home) if xdg_home else Path.home() / ".config"
    return xdg_dir / "findr" / "config.toml"


def _discover_config(base_path: Path, sources: list[Path]) -> dict[str, list[str]]:
    cfg: dict[str, list[str]] = {}
    for p in (_xdg_config_path(), base_path / TOML_CONFIG):
        if p.is_file():
            cfg |= load_toml_config(p)
            sources.append(p)

    pyproject = base_path / PYPROJECT
    if pyproject.is_file():
        cfg |= _load_pyproject_config(pyproject)
        sources.append(pyproject)

    env_path = os.environ.get(ENV_CONFIG_PATH)
    if env_path:
        p = Path(env_path)
        if p.is_file():
            cfg |= load_toml_config(p)
            sources.append(p)
    return cfg


def read_config(
    *,
    base_path: Path,
    explicit_config: Path | None = None,
    discover: bool = True,
) -> dict[str, list[str]]:
    """Read configured defaults, merging sources with clear precedence.

    Precedence (low → high):
      1. XDG config: $XDG_CONFIG_HOME/findr/config.toml (or ~/.config/findr/config.toml)
      2. ``.findr.toml`` in ``base_path``
      3. [tool.findr] table in pyproject.toml at ``base_path``
      4. $FINDR_CONFIG_PATH (if set)
      5. ``explicit_config`` (from --config)
    Later sources override earlier ones key by key. With ``discover`` off
    only ``explicit_config`` is read.
    """
    cfg: dict[str, list[str]] = {}
    sources: list[Path] = []

    if discover:
        cfg |= _discover_config(base_path, sources)

    if explicit_config is not None:
        if not explicit_config.is_file():
            msg = f"Explicit config file not found: {explicit_config}"
            raise ConfigLoadError(msg)
        cfg |= load_toml_config(explicit_config)
        sources.append(explicit_config)

    log_event(
        logger,
        StructuredLogEvent(
            name="config.loaded",
            message="loaded configuration defaults",
            context={"sources": sources, "keys": sorted(cfg)},
            level=logging.DEBUG,
        ),
    )
    return cfg


def load_find_config(
    *,
    paths: tuple[str, ...],
    names: tuple[str, ...],
    types: tuple[str, ...],
    base_path: Path,
    explicit_config: Path | None = None,
    no_config: bool = False,
) -> FindConfig:
    """Layer command-line values over file defaults and build the config.

    A value given on the command line replaces the configured one entirely.
    ``no_config`` skips every discovered file; ``explicit_config`` still applies.
    """
    defaults = read_config(base_path=base_path, explicit_config=explicit_config, discover=not no_config)
    return build_config(
        paths=paths or defaults.get(CONFIG_PATHS, ()),
        names=names or defaults.get(CONFIG_NAMES, ()),
        types=types or defaults.get(CONFIG_TYPES, ()),
    )
