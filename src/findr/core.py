"""Core search: walks each root, applies the name and type filters, emits paths."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import partial
from time import perf_counter
from typing import TYPE_CHECKING

import click

from findr.constants import EntryType
from findr.logging_utils import StructuredLogEvent, get_logger, log_event
from findr.walker import WalkError, display_path, walk

if TYPE_CHECKING:
    import re
    from collections.abc import Callable, Sequence

    from findr.config import FindConfig
    from findr.walker import WalkEntry

logger = get_logger(__name__)

type Writer = Callable[[str], None]


@dataclass(frozen=True, slots=True)
class RunResult:
    roots: int = 0
    visited: int = 0
    matched: int = 0
    errors: int = 0
    skipped: int = 0


def is_text_name(name: str) -> bool:
    """Return ``False`` for names holding undecodable bytes (surrogate escapes)."""
    try:
        name.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def matches_name(name: str, patterns: Sequence[re.Pattern[str]]) -> bool:
    """An empty pattern list matches everything; otherwise any partial match wins."""
    return not patterns or any(p.search(name) for p in patterns)


def matches_type(path: str, entry_type: EntryType) -> bool:
    """Classify ``path`` on disk against ``entry_type``."""
    match entry_type:
        case EntryType.DIRECTORY:
            return os.path.isdir(path)
        case EntryType.FILE:
            return os.path.isfile(path) and not os.path.islink(path)
        case EntryType.SYMLINK:
            return os.path.islink(path)


def emit_count(path: str, entry_types: Sequence[EntryType]) -> int:
    """Return how many times ``path`` is printed for the requested types.

    With no type filter a path is printed once. Otherwise it is printed once
    per listed type it satisfies, so a repeated type repeats the line.
    """
    if not entry_types:
        return 1
    return sum(1 for t in entry_types if matches_type(path, t))


def _echo(message: str, *, err: bool = False) -> None:
    click.echo(message, err=err)


def _search_root(
    root: str,
    config: FindConfig,
    *,
    out: Writer,
    err: Writer,
) -> RunResult:
    visited = matched = errors = skipped = 0
    for item in walk(root):
        if isinstance(item, WalkError):
            errors += 1
            err(str(item))
            log_event(
                logger,
                StructuredLogEvent(
                    name="find.walk_error",
                    message="could not read entry",
                    level=logging.DEBUG,
                    context={"path": item.path, "depth": item.depth, "errno": item.error.errno},
                ),
            )
            continue

        entry: WalkEntry = item
        visited += 1
        if not is_text_name(entry.name):
            skipped += 1
            continue
        if not matches_name(entry.name, config.names):
            continue
        for _ in range(emit_count(entry.path, config.entry_types)):
            out(display_path(entry.path))
            matched += 1

    return RunResult(roots=1, visited=visited, matched=matched, errors=errors, skipped=skipped)


def run(
    config: FindConfig,
    *,
    out: Writer | None = None,
    err: Writer | None = None,
) -> RunResult:
    """Search every root in ``config`` in order and write matching paths.

    Traversal errors go to ``err`` one per line and never stop the search.
    Returns counters describing the run.
    """
    out = _echo if out is None else out
    err = partial(_echo, err=True) if err is None else err

    start = perf_counter()
    log_event(
        logger,
        StructuredLogEvent(
            name="find.start",
            message="starting search",
            context={
                "paths": config.paths,
                "names": config.names,
                "entry_types": config.entry_types,
            },
        ),
    )

    totals = RunResult()
    try:
        for root in config.paths:
            log_event(logger, StructuredLogEvent(name="find.root.start", message="walking root", context={"root": root}))
            result = _search_root(root, config, out=out, err=err)
            log_event(
                logger,
                StructuredLogEvent(
                    name="find.root.complete",
                    message="finished root",
                    context={"root": root, "matched": result.matched, "errors": result.errors},
                ),
            )
            totals = RunResult(
                roots=totals.roots + result.roots,
                visited=totals.visited + result.visited,
                matched=totals.matched + result.matched,
                errors=totals.errors + result.errors,
                skipped=totals.skipped + result.skipped,
            )
    except KeyboardInterrupt:
        log_event(
            logger,
            StructuredLogEvent(
                name="find.interrupted",
                message="search interrupted by user",
                level=logging.WARNING,
                context={"duration_seconds": perf_counter() - start, "matched": totals.matched},
            ),
        )
        raise

    log_event(
        logger,
        StructuredLogEvent(
            name="find.complete",
            message="completed search",
            context={
                "duration_seconds": perf_counter() - start,
                "roots": totals.roots,
                "visited": totals.visited,
                "matched": totals.matched,
                "errors": totals.errors,
                "skipped": totals.skipped,
            },
        ),
    )
    return totals
