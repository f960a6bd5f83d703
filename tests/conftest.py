from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path


@pytest.fixture(autouse=True)
def _isolate_config(tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the user's own findr config files out of every test."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path_factory.mktemp("xdg")))
    monkeypatch.delenv("FINDR_CONFIG_PATH", raising=False)


@pytest.fixture
def sample_tree(tmp_path: Path) -> Path:
    """root/a.txt and root/sub/b.txt."""
    root = tmp_path / "root"
    (root / "sub").mkdir(parents=True)
    (root / "a.txt").write_text("a", encoding="utf-8")
    (root / "sub" / "b.txt").write_text("b", encoding="utf-8")
    return root


@pytest.fixture
def link_tree(sample_tree: Path) -> Path:
    """``sample_tree`` plus ``link`` pointing at ``a.txt``."""
    (sample_tree / "link").symlink_to(sample_tree / "a.txt")
    return sample_tree


@pytest.fixture(autouse=True)
def _restore_root_logger() -> Iterator[None]:
    """Undo ``logging.basicConfig(force=True)`` calls made by the CLI."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
