"""
Click-based CLI for passforge.

This module provides the main Click command group and serves as the
entry point for the passforge CLI.

Usage:
    from passforge.cli import cli
    cli()  # Invokes the CLI
"""

from __future__ import annotations

from pathlib import Path

import click

from .context import PassforgeContext

# Version is loaded from package metadata
try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("passforge")
except PackageNotFoundError:
    __version__ = "0.1.0"


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="passforge")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Read configuration from this TOML file",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Path | None) -> None:
    """passforge - hash, verify and tune password hashes

    \b
    Hashing:
        passforge hash             Hash a password
        passforge check <hash>     Verify a password against a hash

    \b
    Information:
        passforge info             Show resolved algorithm parameters
        passforge benchmark        Find parameters for a time budget

    \b
    Configuration:
        passforge config           View configuration
        passforge pepper           Generate a random pepper
    """
    ctx.ensure_object(dict)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        ctx.exit(0)
    else:
        ctx.obj = PassforgeContext.create(config_path=config_path)


def register_commands() -> None:
    """Register all CLI commands with the main group."""
    from .commands import COMMANDS

    for cmd in COMMANDS:
        cli.add_command(cmd)


# Register commands at module load time
register_commands()


__all__ = [
    "PassforgeContext",
    "__version__",
    "cli",
    "register_commands",
]
