from __future__ import annotations

import io
import sys

import pytest

from findr.cli import common
from findr.constants import EXIT_CONFIG, EXIT_INTERRUPT
from findr.errors import PatternError

pytestmark = pytest.mark.small


def test_report_config_error_prints_one_line(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        common.report_config_error(PatternError("(", "missing )"))
    assert excinfo.value.code == EXIT_CONFIG
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err == "findr: invalid name pattern '(': missing )\n"


def test_exit_on_interrupt(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        common.exit_on_interrupt()
    assert excinfo.value.code == EXIT_INTERRUPT
    assert "Interrupted by user." in capsys.readouterr().err


def test_exit_on_broken_pipe_without_real_stdout(monkeypatch: pytest.MonkeyPatch) -> None:
    # A StringIO has no file descriptor; the helper must still exit cleanly.
    monkeypatch.setattr(sys, "stdout", io.StringIO())
    with pytest.raises(SystemExit) as excinfo:
        common.exit_on_broken_pipe()
    assert excinfo.value.args[0] == 0
