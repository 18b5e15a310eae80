"""
Native Click implementation of the check command.

Usage: passforge check HASH [--algorithm NAME] [--salt-hex HEX] [--pepper]
"""

from __future__ import annotations

import click

from ...core.models.params import ALGORITHM_NAMES
from ...password import Password
from ..context import PassforgeContext
from ..decorators import handle_errors, parse_hex, pass_passforge_context


@click.command("check")
@click.argument("hashed")
@click.option(
    "--algorithm",
    "-a",
    type=click.Choice(ALGORITHM_NAMES),
    default=None,
    help="Hash family (default: identified from HASH)",
)
@click.option("--salt-hex", default=None, help="Salt as hex, for families that do not store it")
@click.option("--pepper/--no-pepper", default=False, help="Prepend the configured pepper")
@click.option("--password", prompt=True, hide_input=True, help="Password (prompted when omitted)")
@pass_passforge_context
@handle_errors
def check_cmd(
    ctx: PassforgeContext,
    hashed: str,
    algorithm: str | None,
    salt_hex: str | None,
    pepper: bool,
    password: str,
) -> None:
    """Verify a password against HASH.

    Exits with status 0 when the password matches and 1 otherwise.

    Arguments:

        HASH    The encoded hash to verify against
    """
    finder = ctx.finder
    function = finder.get(algorithm) if algorithm else finder.identify(hashed)

    checker = Password.check(password, hashed, finder)
    salt = parse_hex(salt_hex)
    if salt is not None:
        checker = checker.add_salt(salt)
    if pepper:
        checker = checker.add_pepper()

    if checker.with_(function):
        click.echo("verified")
    else:
        click.echo("not verified")
        raise SystemExit(1)
