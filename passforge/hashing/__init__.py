"""
Password hashing functions and the finder that resolves them.

Each family is one HashingFunction strategy; AlgorithmFinder maps
configuration and parameter models onto them.
"""

from .argon2 import Argon2Function
from .base import HashingFunction
from .bcrypt import BcryptFunction
from .digest import DIGESTS, MessageDigestFunction
from .finder import (
    FUNCTIONS,
    AlgorithmFinder,
    get_default_finder,
    reset_default_finder,
    set_default_finder,
)
from .hash import Hash
from .pbkdf2 import CompressedPBKDF2Function, PBKDF2Function
from .salt import PepperGenerator, SaltGenerator
from .scrypt import ScryptFunction

__all__ = [
    "DIGESTS",
    "FUNCTIONS",
    "AlgorithmFinder",
    "Argon2Function",
    "BcryptFunction",
    "CompressedPBKDF2Function",
    "Hash",
    "HashingFunction",
    "MessageDigestFunction",
    "PBKDF2Function",
    "PepperGenerator",
    "SaltGenerator",
    "ScryptFunction",
    "get_default_finder",
    "reset_default_finder",
    "set_default_finder",
]
