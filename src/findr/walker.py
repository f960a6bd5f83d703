"""Depth-first directory traversal yielding entries and errors as values."""

from __future__ import annotations

import os
import stat
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator


@dataclass(frozen=True, slots=True)
class WalkEntry:
    """One filesystem node visited by :func:`walk`.

    ``is_dir`` comes from the directory listing without following links and
    only decides whether the walk descends; filters must query ``path``.
    """

    path: str
    name: str
    depth: int
    is_dir: bool = False


@dataclass(frozen=True, slots=True)
class WalkError:
    """A failure to read ``path``; the walk continues past it."""

    path: str
    depth: int
    error: OSError

    def __str__(self) -> str:
        detail = self.error.strerror or str(self.error)
        return f"{display_path(self.path)}: {detail}"


type WalkItem = WalkEntry | WalkError


def display_path(path: str) -> str:
    """Return ``path`` as printable text, replacing undecodable bytes with U+FFFD."""
    return os.fsencode(path).decode("utf-8", "replace")


def base_name(path: str) -> str:
    """Return the final component of ``path``, or ``path`` itself if it has none."""
    return os.path.basename(os.path.normpath(path)) or path


def _children(directory: str, depth: int) -> Iterator[WalkItem]:
    try:
        with os.scandir(directory) as it:
            entries = sorted(it, key=lambda e: e.name)
    except OSError as e:
        yield WalkError(directory, depth - 1, e)
        return

    for entry in entries:
        try:
            is_dir = entry.is_dir(follow_symlinks=False)
        except OSError as e:
            yield WalkError(entry.path, depth, e)
            continue
        yield WalkEntry(path=entry.path, name=entry.name, depth=depth, is_dir=is_dir)


def walk(root: str | os.PathLike[str]) -> Iterator[WalkItem]:
    """Yield ``root`` and then everything below it, depth-first.

    Directories come before their contents and siblings are ordered by
    name. Links below the root are reported but not followed; a root that
    is a link to a directory is descended. Read failures are yielded as
    :class:`WalkError` items instead of being raised.
    """
    top = os.fspath(root)
    try:
        st = os.stat(top)
    except OSError as e:
        yield WalkError(top, 0, e)
        return

    yield WalkEntry(path=top, name=base_name(top), depth=0, is_dir=stat.S_ISDIR(st.st_mode))
    if not stat.S_ISDIR(st.st_mode):
        return

    # Explicit stack of listings so deep trees do not hit the recursion limit.
    stack = [_children(top, 1)]
    while stack:
        item = next(stack[-1], None)
        if item is None:
            stack.pop()
            continue
        yield item
        if isinstance(item, WalkEntry) and item.is_dir:
            stack.append(_children(item.path, item.depth + 1))
