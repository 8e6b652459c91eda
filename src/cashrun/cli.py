"""Root CLI group: global flags, settings resolution, and command registration."""

from __future__ import annotations

from pathlib import Path

import click

from cashrun import __version__
from cashrun.commands import register_commands
from cashrun.commands._context import AppContext
from cashrun.config.settings import CashrunSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="cashrun")
@click.option("--json", "json_output", is_flag=True, help="Print results as JSON.")
@click.option("-q", "--quiet", is_flag=True, help="Print only the status line.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging for cashrun.")
@click.option("--log-json", is_flag=True, help="JSON log lines on stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Path to cashrun.toml.")
@click.option(
    "--data-root",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory holding .cashrun/ (default: config file's directory or CWD).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    data_root: Path | None,
) -> None:
    """cashrun: order lifecycle and ATM assignment for cash delivery."""
    settings = CashrunSettings.from_cli(
        config_path=config_path,
        data_root=data_root,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
    )
    app = AppContext(settings)
    ctx.obj = app
    ctx.call_on_close(app.close)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
