"""The ``findr`` click command: arguments → config → search."""

from __future__ import annotations

import io
import logging
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from findr import __version__
from findr.config import load_find_config
from findr.constants import TYPE_CODES
from findr.core import run
from findr.errors import FindrError
from findr.logging_utils import resolve_log_level

from .common import exit_on_broken_pipe, exit_on_interrupt, report_config_error

CLI_CONTEXT_SETTINGS = {
    "help_option_names": ["-h", "--help"],
}

HELP_WIDTH = 100


def _options_table() -> Table:
    table = Table(
        show_header=False,
        show_edge=False,
        box=None,
        pad_edge=False,
        expand=False,
    )
    table.add_column(style="cyan", no_wrap=True)
    table.add_column(style="default")
    return table


class _FindrCommand(click.Command):
    """Click command whose help text is laid out with rich tables."""

    def get_help(self, ctx: click.Context) -> str:
        """Return help for the command.

        Layout:
          - Usage line
          - Short description
          - Arguments
          - Options
        """
        console = Console(record=True, file=io.StringIO(), width=HELP_WIDTH)

        console.print(f"[bold]Usage:[/bold] {escape(ctx.command_path)} \\[OPTIONS] \\[PATH]...")
        console.print()
        for line in (self.help or "").strip().splitlines():
            console.print(f"  {line.strip()}", markup=False)
        console.print()

        console.print("[bold]Arguments:[/bold]")
        args_table = _options_table()
        args_table.add_row("PATH", escape("Search roots, walked in order [default: .]"))
        console.print(args_table)
        console.print()

        console.print("[bold]Options:[/bold]")
        opts_table = _options_table()
        for param in self.get_params(ctx):
            if not isinstance(param, click.Option):
                continue
            record = param.get_help_record(ctx)
            if not record:
                continue
            opts, help_text = record
            # click metavars such as [d|f|l] would otherwise parse as markup
            opts_table.add_row(escape(opts), escape(help_text or ""))
        console.print(opts_table)

        return console.export_text()


@click.command(cls=_FindrCommand, context_settings=CLI_CONTEXT_SETTINGS)
@click.argument("paths", nargs=-1)
@click.option(
    "-n",
    "--name",
    "names",
    multiple=True,
    metavar="NAME",
    help="Regular expression matched anywhere in the entry name (repeatable)",
)
@click.option(
    "-t",
    "--type",
    "types",
    multiple=True,
    type=click.Choice(TYPE_CODES, case_sensitive=False),
    help="Entry type: d (directory), f (file), l (link) (repeatable)",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    help="Explicit config file path",
)
@click.option("--no-config", is_flag=True, help="Ignore discovered config files (--config still applies)")
@click.option("-v", "--verbose", count=True, help="Increase verbosity (use -vv for debug)")
@click.option(
    "--log-level",
    type=click.Choice(["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"], case_sensitive=False),
    help="Set log level explicitly",
)
@click.version_option(__version__, "-V", "--version")
def cli(
    *,
    paths: tuple[str, ...],
    names: tuple[str, ...],
    types: tuple[str, ...],
    config_path: Path | None,
    no_config: bool,
    verbose: int,
    log_level: str | None,
) -> None:
    """Walk each PATH and print entries whose name and type match.

    With no filters every file, directory and link below each PATH is printed,
    the PATH itself included.
    """
    logging.basicConfig(level=resolve_log_level(verbose=verbose, log_level=log_level), force=True)

    try:
        config = load_find_config(
            paths=paths,
            names=names,
            types=types,
            base_path=Path(),
            explicit_config=config_path,
            no_config=no_config,
        )
    except FindrError as err:
        report_config_error(err)

    try:
        run(config)
    except BrokenPipeError:
        exit_on_broken_pipe()
    except KeyboardInterrupt:
        exit_on_interrupt()


def main(argv: list[str] | None = None) -> None:
    """Console entry point."""
    cli.main(args=argv, prog_name="findr")
