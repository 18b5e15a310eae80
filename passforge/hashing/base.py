"""
Hashing function contract.

Each concrete function encapsulates one CHF: its frozen parameter set,
the call into the primitive library, its encoding and its constant-time
comparison. Functions hold no per-operation state and can be shared
across threads.
"""

from __future__ import annotations

import hmac
import time
from abc import ABC, abstractmethod
from typing import Any

from ..services.logging import get_logger
from .hash import Hash
from .salt import SaltGenerator

Plaintext = str | bytes


class HashingFunction(ABC):
    """
    Abstract base class for password hashing functions.

    Implementations must provide:
    - algorithm_name: Family identifier (e.g. 'bcrypt', 'scrypt')
    - required_memory_bytes: Advisory memory cost of one derivation
    - _derive(): Derive and encode from the composed password bytes
    - _verify(): Recompute and compare against an encoded hash
    """

    # Salt length used when hash() has to generate one; None means the
    # salt generator's configured default.
    default_salt_length: int | None = None

    def __init__(self, params: Any, salt_generator: SaltGenerator | None = None) -> None:
        self._params = params
        self._salt_generator = salt_generator or SaltGenerator()

    @property
    @abstractmethod
    def algorithm_name(self) -> str:
        """Return the family identifier."""

    @property
    @abstractmethod
    def required_memory_bytes(self) -> int:
        """Approximate memory one derivation needs, for admission control."""

    @property
    def params(self) -> Any:
        """The frozen parameter model of this function."""
        return self._params

    def hash(
        self,
        plain: Plaintext,
        salt: bytes | None = None,
        pepper: str | None = None,
    ) -> Hash:
        """
        Derive and encode a hash of ``plain``.

        Args:
            plain: Plaintext password
            salt: Salt to use; a fresh one is generated when omitted
            pepper: Secret prepended to the password before derivation

        Returns:
            The resulting Hash

        Raises:
            InvalidParametersError: If the parameters or salt are invalid
        """
        if salt is None:
            salt = self._salt_generator.generate(self.default_salt_length)
        data = compose(plain, pepper)

        start = time.perf_counter()
        result = self._derive(data, salt)
        elapsed_ms = (time.perf_counter() - start) * 1000
        get_logger().debug(
            "%s hash with %s, salt length %d, took %.1f ms",
            self.algorithm_name,
            self._describe_params(),
            len(salt),
            elapsed_ms,
        )
        return result

    def check(
        self,
        plain: Plaintext | None,
        hashed: str | bytes | None,
        salt: bytes | None = None,
        pepper: str | None = None,
    ) -> bool:
        """
        Check whether ``hashed`` was produced from ``plain``.

        A mismatch is a normal False. An artifact of another family is
        also False.

        Raises:
            FormatError: If the artifact belongs to this family but cannot be parsed
        """
        if plain is None or hashed is None:
            return False
        if isinstance(hashed, bytes):
            try:
                hashed = hashed.decode("ascii")
            except UnicodeDecodeError:
                return False
        data = compose(plain, pepper)
        return self._verify(data, hashed, salt)

    def accepts_salt(self, salt: bytes) -> bool:
        """Whether hash() can take ``salt``."""
        return len(salt) > 0

    def embedded_salt(self, hashed: str | bytes) -> bytes | None:
        """
        Return the salt stored in ``hashed``.

        None for families whose artifacts do not carry the salt.

        Raises:
            FormatError: If the artifact cannot be parsed
        """
        if isinstance(hashed, bytes):
            hashed = hashed.decode("ascii")
        return self._embedded_salt(hashed)

    def _embedded_salt(self, hashed: str) -> bytes | None:
        return None

    @abstractmethod
    def _derive(self, data: bytes, salt: bytes) -> Hash:
        """Derive from the composed password bytes and encode."""

    @abstractmethod
    def _verify(self, data: bytes, hashed: str, salt: bytes | None) -> bool:
        """Recompute from the composed password bytes and compare."""

    def _describe_params(self) -> str:
        values = self._params.model_dump(exclude={"algorithm"})
        return ", ".join(f"{k}={v}" for k, v in values.items())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HashingFunction):
            return NotImplemented
        return type(self) is type(other) and self._params == other._params

    def __hash__(self) -> int:
        return hash((type(self), self._params))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._describe_params()})"


def compose(plain: Plaintext, pepper: str | None) -> bytes:
    """Concatenate ``pepper + plain`` and encode as UTF-8."""
    data = plain.encode("utf-8") if isinstance(plain, str) else bytes(plain)
    if pepper:
        return pepper.encode("utf-8") + data
    return data


def constant_time_equals(a: bytes, b: bytes) -> bool:
    """Compare two byte strings in time independent of where they differ."""
    return hmac.compare_digest(a, b)
