"""Root CLI group for reltag with global flags and command registration."""

from __future__ import annotations

import click

from reltag import __version__
from reltag.commands import register_commands
from reltag.commands._context import AppContext
from reltag.config.settings import ReltagSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="reltag")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Print only the tag.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug logging.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override reltag.toml path.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """reltag — next release tag for year/update release lines."""
    ctx.ensure_object(dict)
    settings = ReltagSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
