from __future__ import annotations

import os
import re
import tempfile
from pathlib import Path

import pytest

try:  # import at module level; skip the whole module if unavailable
    from hypothesis import given, settings
    from hypothesis import strategies as st
except ImportError:  # pragma: no cover - tooling availability
    pytest.skip("hypothesis not available", allow_module_level=True)

from findr.config import build_config
from findr.core import run

NAME = st.text(min_size=1, max_size=8, alphabet="abcxyz._-")
FRAGMENT = st.text(min_size=1, max_size=3, alphabet="abcxyz.")


def _collect(root: str, **kwargs: object) -> list[str]:
    out: list[str] = []
    run(build_config(paths=[root], **kwargs), out=out.append, err=lambda _: None)
    return out


@settings(max_examples=40, deadline=None)
@given(names=st.sets(NAME, min_size=1, max_size=6), fragments=st.lists(FRAGMENT, min_size=1, max_size=3))
def test_emitted_names_match_some_pattern(names: set[str], fragments: list[str]) -> None:
    with tempfile.TemporaryDirectory() as d:
        root = Path(d) / "root"
        root.mkdir()
        for name in names:
            if name in {".", ".."}:
                continue
            (root / name).write_text("x", encoding="utf-8")

        patterns = [re.escape(f) for f in fragments]
        emitted = _collect(str(root), names=patterns, types=["f"])

        expected = sorted(
            str(root / n) for n in names if n not in {".", ".."} and any(f in n for f in fragments)
        )
        assert sorted(emitted) == expected


@settings(max_examples=25, deadline=None)
@given(layout=st.lists(st.lists(NAME, min_size=1, max_size=3), min_size=1, max_size=5))
def test_unfiltered_listing_is_the_full_tree(layout: list[list[str]]) -> None:
    with tempfile.TemporaryDirectory() as d:
        root = Path(d) / "root"
        root.mkdir()
        for parts in layout:
            if any(p in {".", ".."} for p in parts):
                continue
            target = root.joinpath(*parts)
            if target.exists():
                continue
            target.mkdir(parents=True)

        expected = {str(root)}
        for dirpath, dirnames, filenames in os.walk(root):
            expected.update(os.path.join(dirpath, n) for n in (*dirnames, *filenames))

        assert set(_collect(str(root))) == expected
