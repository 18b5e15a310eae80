"""
Click decorators for passforge CLI commands.

- pass_passforge_context: click.pass_obj typed for PassforgeContext
- handle_errors: Turns library errors into click.ClickException
"""

from __future__ import annotations

import functools
from collections.abc import Callable
from typing import Any, TypeVar

import click

from ..core.exceptions import PassforgeError

F = TypeVar("F", bound=Callable[..., Any])


def handle_errors(f: F) -> F:
    """Decorator reporting PassforgeError as a CLI error (exit code 1).

    Usage:
        @cli.command()
        @pass_passforge_context
        @handle_errors
        def info(ctx: PassforgeContext):
            ...
    """

    @functools.wraps(f)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return f(*args, **kwargs)
        except PassforgeError as e:
            raise click.ClickException(str(e)) from e

    return wrapper  # type: ignore[return-value]


def pass_passforge_context(f: F) -> F:
    """Convenience decorator combining @click.pass_obj with type hints.

    Usage:
        @cli.command()
        @pass_passforge_context
        def info(ctx: PassforgeContext):
            ...
    """
    return click.pass_obj(f)  # type: ignore[return-value]


def parse_hex(value: str | None, option: str = "--salt-hex") -> bytes | None:
    """Decode a hex option value, None when not given."""
    if value is None:
        return None
    try:
        return bytes.fromhex(value)
    except ValueError as e:
        raise click.BadParameter(f"not a hexadecimal string: {value!r}", param_hint=option) from e
