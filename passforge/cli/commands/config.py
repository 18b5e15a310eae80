"""
Native Click implementation of the config command.

Usage: passforge config [list|get] [key]
"""

import click

from ...config import config_get, config_list
from ..context import PassforgeContext
from ..decorators import handle_errors, pass_passforge_context

# Keys whose values are never echoed
_SECRET_KEYS = {"pepper"}


@click.group("config", invoke_without_command=True)
@click.pass_context
def config(ctx: click.Context) -> None:
    """View configuration.

    Config is read from .passforge/config.toml, [tool.passforge] in
    pyproject.toml and PASSFORGE_* environment variables.

    \b
    Examples:

        passforge config list                # List all options

        passforge config get scrypt.work_factor  # Get a value
    """
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@config.command("list")
def config_list_cmd() -> None:
    """List all config options."""
    keys = config_list()
    click.echo("Available config options:")
    click.echo("")

    for key, info in keys.items():
        default = info["default"]
        desc = info["description"]
        click.echo(f"  {key}")
        click.echo(f"    {desc}")
        click.echo(f"    Default: {default}")
        click.echo("")


@config.command("get")
@click.argument("key")
@pass_passforge_context
@handle_errors
def config_get_cmd(ctx: PassforgeContext, key: str) -> None:
    """Get a config value.

    Arguments:

        KEY    The config key to get (e.g. scrypt.work_factor)
    """
    value = config_get(key, start_dir=str(ctx.cwd), config_path=ctx.config_path)
    if value is None:
        click.echo(f"{key}: (not set)")
    elif key in _SECRET_KEYS:
        click.echo(f"{key}: (set)")
    else:
        click.echo(f"{key}: {value}")
