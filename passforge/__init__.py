"""
passforge - pluggable password hashing.

Hash, verify and migrate passwords with BCrypt, SCrypt, PBKDF2, Argon2
or a plain message digest through one fluent interface:

    from passforge import Password

    hashed = Password.hash("secret").with_scrypt()
    Password.check("secret", hashed.encoded).with_scrypt()  # True
"""

from .core.exceptions import (
    ConfigFileError,
    ConfigurationError,
    FormatError,
    InvalidParametersError,
    PassforgeError,
)
from .hashing import (
    AlgorithmFinder,
    Argon2Function,
    BcryptFunction,
    CompressedPBKDF2Function,
    Hash,
    HashingFunction,
    MessageDigestFunction,
    PBKDF2Function,
    PepperGenerator,
    SaltGenerator,
    ScryptFunction,
    get_default_finder,
    reset_default_finder,
    set_default_finder,
)
from .password import (
    HashBuilder,
    HashChecker,
    HashUpdate,
    HashUpdater,
    Password,
    check_password,
    hash_password,
)

__all__ = [
    "AlgorithmFinder",
    "Argon2Function",
    "BcryptFunction",
    "CompressedPBKDF2Function",
    "ConfigFileError",
    "ConfigurationError",
    "FormatError",
    "Hash",
    "HashBuilder",
    "HashChecker",
    "HashUpdate",
    "HashUpdater",
    "HashingFunction",
    "InvalidParametersError",
    "MessageDigestFunction",
    "PBKDF2Function",
    "PassforgeError",
    "Password",
    "PepperGenerator",
    "SaltGenerator",
    "ScryptFunction",
    "check_password",
    "get_default_finder",
    "hash_password",
    "reset_default_finder",
    "set_default_finder",
]
