"""
Native Click implementation of the info command.

Usage: passforge info [--algorithm NAME]
"""

from __future__ import annotations

import click

from ...core.models.params import ALGORITHM_NAMES
from ..context import PassforgeContext
from ..decorators import handle_errors, pass_passforge_context


@click.command("info")
@click.option(
    "--algorithm",
    "-a",
    type=click.Choice(ALGORITHM_NAMES),
    default=None,
    help="Hash family (default: configured default_algorithm)",
)
@pass_passforge_context
@handle_errors
def info(ctx: PassforgeContext, algorithm: str | None) -> None:
    """Show the resolved parameters of a hash family."""
    finder = ctx.finder
    function = finder.get(algorithm) if algorithm else finder.get_default_instance()

    click.echo(f"Algorithm: {function.algorithm_name}")
    for key, value in function.params.model_dump(exclude={"algorithm"}).items():
        click.echo(f"  {key}: {value}")
    click.echo(f"Required memory: {function.required_memory_bytes} bytes")
    config_file = getattr(finder.settings, "config_file", None)
    if config_file:
        click.echo(f"Config file: {config_file}")
