"""Root CLI group for pwctl with global flags and command registration."""

from __future__ import annotations

import click

from pwctl import __version__
from pwctl.commands import register_commands
from pwctl.commands._context import AppContext
from pwctl.config.settings import PwctlSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="pwctl")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("--no-interact", is_flag=True, help="Non-interactive mode (no prompts).")
@click.option("-y", "--yes", is_flag=True, help="Answer yes to every confirmation.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option("--store", "store_path", default=None, help="Override the store directory.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    no_interact: bool,
    yes: bool,
    config_path: str | None,
    store_path: str | None,
) -> None:
    """pwctl — password generator for a hierarchical secret store."""
    ctx.ensure_object(dict)
    settings = PwctlSettings.from_cli(
        config_path=config_path,
        store_path=store_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
        no_interact=no_interact,
        yes=yes,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
