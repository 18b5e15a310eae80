"""
Message digest hashing function and its digest strategies.

Each digest strategy encapsulates one hash algorithm so new digests can
be registered without touching ``MessageDigestFunction``. The salt is
not embedded in the hex artifact and must be handed back to ``check``.
"""

from __future__ import annotations

import hashlib
from abc import ABC, abstractmethod
from typing import Any

import blake3

from ..core.models.params import MessageDigestParams, build_params
from .base import HashingFunction, constant_time_equals
from .hash import Hash
from .salt import SaltGenerator


class DigestStrategy(ABC):
    """
    Abstract base class for digest strategies.

    Implementations must provide:
    - algorithm_name: Identifier used in MessageDigestParams.digest
    - create_hasher(): Factory method for hasher instances
    """

    @property
    @abstractmethod
    def algorithm_name(self) -> str:
        """Return algorithm identifier (e.g., 'SHA-256')."""

    @abstractmethod
    def create_hasher(self) -> Any:
        """Create a new hasher instance."""

    def digest(self, data: bytes) -> bytes:
        hasher = self.create_hasher()
        hasher.update(data)
        return hasher.digest()


class HashlibDigest(DigestStrategy):
    """Any digest ``hashlib.new`` knows."""

    def __init__(self, algorithm_name: str, hashlib_name: str) -> None:
        self._algorithm_name = algorithm_name
        self._hashlib_name = hashlib_name

    @property
    def algorithm_name(self) -> str:
        return self._algorithm_name

    def create_hasher(self) -> Any:
        return hashlib.new(self._hashlib_name)


class Blake3Digest(DigestStrategy):
    """BLAKE3 - fast cryptographic hash."""

    @property
    def algorithm_name(self) -> str:
        return "BLAKE3"

    def create_hasher(self) -> Any:
        return blake3.blake3()


DIGESTS: dict[str, DigestStrategy] = {
    strategy.algorithm_name: strategy
    for strategy in (
        HashlibDigest("MD5", "md5"),
        HashlibDigest("SHA-1", "sha1"),
        HashlibDigest("SHA-224", "sha224"),
        HashlibDigest("SHA-256", "sha256"),
        HashlibDigest("SHA-384", "sha384"),
        HashlibDigest("SHA-512", "sha512"),
        HashlibDigest("SHA3-256", "sha3_256"),
        HashlibDigest("SHA3-512", "sha3_512"),
        Blake3Digest(),
    )
}


class MessageDigestFunction(HashingFunction):
    """Single-pass digest of the salted, peppered password."""

    def __init__(
        self,
        digest: str = "SHA-512",
        salt_option: str = "append",
        *,
        salt_generator: SaltGenerator | None = None,
    ) -> None:
        super().__init__(
            build_params(MessageDigestParams, digest=digest, salt_option=salt_option),
            salt_generator,
        )
        self._strategy = DIGESTS[self._params.digest]

    @classmethod
    def from_params(
        cls, params: MessageDigestParams, salt_generator: SaltGenerator | None = None
    ) -> MessageDigestFunction:
        return cls(params.digest, params.salt_option, salt_generator=salt_generator)

    @property
    def algorithm_name(self) -> str:
        return "message_digest"

    @property
    def digest(self) -> str:
        return self._params.digest

    @property
    def salt_option(self) -> str:
        return self._params.salt_option

    @property
    def required_memory_bytes(self) -> int:
        return 0

    def accepts_salt(self, salt: bytes) -> bool:
        return True

    def _salted(self, data: bytes, salt: bytes | None) -> bytes:
        if not salt:
            return data
        if self.salt_option == "prepend":
            return salt + data
        return data + salt

    def _derive(self, data: bytes, salt: bytes) -> Hash:
        derived = self._strategy.digest(self._salted(data, salt))
        return Hash(encoded=derived.hex(), raw=derived, salt=salt, function=self)

    def _verify(self, data: bytes, hashed: str, salt: bytes | None) -> bool:
        try:
            expected = bytes.fromhex(hashed)
        except ValueError:
            return False
        computed = self._strategy.digest(self._salted(data, salt))
        return constant_time_equals(computed, expected)

