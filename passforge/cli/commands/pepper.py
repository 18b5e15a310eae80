"""
Native Click implementation of the pepper command.

Usage: passforge pepper [--length N]
"""

from __future__ import annotations

import click

from ...hashing.salt import PepperGenerator


@click.command("pepper")
@click.option(
    "--length",
    type=click.IntRange(min=1),
    default=24,
    show_default=True,
    help="Number of characters",
)
def pepper(length: int) -> None:
    """Print a new random pepper.

    Store it outside the password database, e.g. in PASSFORGE_PEPPER.

    \b
    Examples:

        passforge pepper

        export PASSFORGE_PEPPER="$(passforge pepper --length 32)"
    """
    click.echo(PepperGenerator.generate(length))
