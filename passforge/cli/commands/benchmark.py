"""
Native Click implementation of the benchmark command.

Usage: passforge benchmark [bcrypt|pbkdf2|scrypt|argon2] --max-ms N
"""

from __future__ import annotations

import click

from ...benchmark import (
    BenchmarkResult,
    find_optimal_argon2,
    find_optimal_bcrypt,
    find_optimal_pbkdf2,
    find_optimal_scrypt,
)
from ..decorators import handle_errors

_max_ms_option = click.option(
    "--max-ms",
    "max_ms",
    type=click.FloatRange(min=0, min_open=True),
    required=True,
    help="Time budget of one derivation in milliseconds",
)


def _report(result: BenchmarkResult) -> None:
    click.echo(f"Algorithm: {result.params.algorithm}")
    for key, value in result.params.model_dump(exclude={"algorithm"}).items():
        click.echo(f"  {key}: {value}")
    click.echo(f"Elapsed: {result.elapsed_ms:.1f} ms")


@click.group("benchmark", invoke_without_command=True)
@click.pass_context
def benchmark(ctx: click.Context) -> None:
    """Find the strongest parameters that fit a time budget on this machine.

    \b
    Examples:

        passforge benchmark bcrypt --max-ms 300

        passforge benchmark scrypt --max-ms 500 --max-memory 67108864
    """
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@benchmark.command("bcrypt")
@_max_ms_option
@handle_errors
def benchmark_bcrypt(max_ms: float) -> None:
    """Tune the bcrypt cost."""
    _report(find_optimal_bcrypt(max_ms))


@benchmark.command("pbkdf2")
@_max_ms_option
@click.option(
    "--hmac",
    type=click.Choice(["SHA1", "SHA224", "SHA256", "SHA384", "SHA512"]),
    default="SHA512",
    show_default=True,
)
@handle_errors
def benchmark_pbkdf2(max_ms: float, hmac: str) -> None:
    """Tune the PBKDF2 iteration count."""
    _report(find_optimal_pbkdf2(max_ms, hmac))  # type: ignore[arg-type]


@benchmark.command("scrypt")
@_max_ms_option
@click.option(
    "--max-memory",
    type=click.IntRange(min=1),
    default=64 * 1024 * 1024,
    show_default=True,
    help="Memory budget in bytes",
)
@handle_errors
def benchmark_scrypt(max_ms: float, max_memory: int) -> None:
    """Tune the SCrypt work factor."""
    _report(find_optimal_scrypt(max_ms, max_memory))


@benchmark.command("argon2")
@_max_ms_option
@click.option(
    "--memory",
    type=click.IntRange(min=8),
    default=15360,
    show_default=True,
    help="Memory cost in KiB",
)
@handle_errors
def benchmark_argon2(max_ms: float, memory: int) -> None:
    """Tune the Argon2 iteration count."""
    _report(find_optimal_argon2(max_ms, memory))
