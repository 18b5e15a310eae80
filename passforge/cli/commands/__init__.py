"""
Click command implementations for passforge CLI.

Each module corresponds to a passforge command (e.g., hash.py implements
'passforge hash'). Commands are registered with the main CLI group via
the register_commands() function in passforge.cli.
"""

from .benchmark import benchmark
from .check import check_cmd
from .config import config
from .hash import hash_cmd
from .info import info
from .pepper import pepper

COMMANDS = [
    benchmark,
    check_cmd,
    config,
    hash_cmd,
    info,
    pepper,
]

__all__ = [
    "COMMANDS",
    "benchmark",
    "check_cmd",
    "config",
    "hash_cmd",
    "info",
    "pepper",
]
