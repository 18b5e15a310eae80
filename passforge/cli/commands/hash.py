"""
Native Click implementation of the hash command.

Usage: passforge hash [--algorithm NAME] [--salt-hex HEX] [--pepper]
"""

from __future__ import annotations

import click

from ...core.models.params import ALGORITHM_NAMES
from ...password import Password
from ..context import PassforgeContext
from ..decorators import handle_errors, parse_hex, pass_passforge_context


@click.command("hash")
@click.option(
    "--algorithm",
    "-a",
    type=click.Choice(ALGORITHM_NAMES),
    default=None,
    help="Hash family (default: configured default_algorithm)",
)
@click.option("--salt-hex", default=None, help="Salt as hex (default: random)")
@click.option("--pepper/--no-pepper", default=False, help="Prepend the configured pepper")
@click.option("--password", prompt=True, hide_input=True, help="Password (prompted when omitted)")
@pass_passforge_context
@handle_errors
def hash_cmd(
    ctx: PassforgeContext,
    algorithm: str | None,
    salt_hex: str | None,
    pepper: bool,
    password: str,
) -> None:
    """Hash a password and print the encoded result.

    For families that do not store the salt in the hash (pbkdf2,
    message_digest) the salt is printed too; keep it to verify later.

    \b
    Examples:

        passforge hash                       # Configured default family

        passforge hash -a scrypt --pepper    # SCrypt with the configured pepper
    """
    finder = ctx.finder
    function = finder.get(algorithm) if algorithm else finder.get_default_instance()

    builder = Password.hash(password, finder)
    salt = parse_hex(salt_hex)
    if salt is not None:
        builder = builder.add_salt(salt)
    if pepper:
        if finder.pepper is None:
            raise click.ClickException("No pepper configured (set 'pepper' or PASSFORGE_PEPPER)")
        builder = builder.add_pepper()

    result = builder.with_(function)
    click.echo(result.encoded)
    if result.salt is not None and function.embedded_salt(result.encoded) is None:
        click.echo(f"salt: {result.salt.hex()}")
