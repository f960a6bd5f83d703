"""Shared CLI helpers: error reporting and exit handling."""

from __future__ import annotations

import contextlib
import os
import sys
from typing import NoReturn

import click

from findr.constants import EXIT_CONFIG, EXIT_INTERRUPT, EXIT_OK
from findr.errors import FindrError


def report_config_error(err: FindrError) -> NoReturn:
    """Print a configuration failure as one stderr line and exit."""
    click.echo(f"findr: {err}", err=True)
    raise SystemExit(EXIT_CONFIG) from err


def exit_on_interrupt() -> NoReturn:
    click.echo("\nInterrupted by user.", err=True)
    raise SystemExit(EXIT_INTERRUPT)


def exit_on_broken_pipe() -> NoReturn:
    """Exit quietly when the reader of stdout has gone away."""
    # Point stdout at devnull so the interpreter's final flush cannot fail again.
    with contextlib.suppress(OSError, ValueError):
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())
    raise SystemExit(EXIT_OK)
