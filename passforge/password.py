"""
Entry points for hashing, verifying and migrating passwords.

Usage:
    from passforge import Password

    hashed = Password.hash("secret").add_pepper("pepper").with_scrypt()
    ok = Password.check("secret", hashed.encoded).add_pepper("pepper").with_scrypt()

    update = (
        Password.check("secret", stored)
        .and_update()
        .with_(old_function, new_function)
    )

Every request object is an immutable value: configuration methods return
a new instance and leave the receiver unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .core.exceptions import InvalidParametersError
from .hashing.base import HashingFunction
from .hashing.finder import AlgorithmFinder, get_default_finder
from .hashing.hash import Hash
from .services.logging import get_logger

Plaintext = str | bytes


def _to_bytes(salt: bytes | str) -> bytes:
    return salt.encode("utf-8") if isinstance(salt, str) else bytes(salt)


class _Request(BaseModel):
    """Common fields of the request values."""

    model_config = ConfigDict(
        frozen=True,
        strict=True,
        extra="forbid",
        arbitrary_types_allowed=True,
    )

    plain: Plaintext | None = Field(default=None, repr=False)
    salt: bytes | None = Field(default=None, repr=False)
    pepper: str | None = Field(default=None, repr=False)
    finder: AlgorithmFinder | None = Field(default=None, repr=False, exclude=True)

    def _finder(self) -> AlgorithmFinder:
        return self.finder if self.finder is not None else get_default_finder()

    def _resolve_pepper(self, pepper: str | None) -> str | None:
        return pepper if pepper is not None else self._finder().pepper


class HashBuilder(_Request):
    """Collects salt and pepper before deriving a new hash."""

    def add_salt(self, salt: bytes | str) -> HashBuilder:
        """Use ``salt`` (str values are UTF-8 encoded)."""
        return self.model_copy(update={"salt": _to_bytes(salt)})

    def add_random_salt(self, length: int | None = None) -> HashBuilder:
        """Use a fresh random salt (configured length when omitted)."""
        return self.model_copy(update={"salt": self._finder().salt_generator.generate(length)})

    def add_pepper(self, pepper: str | None = None) -> HashBuilder:
        """Prepend ``pepper`` to the password; the configured pepper when omitted."""
        return self.model_copy(update={"pepper": self._resolve_pepper(pepper)})

    def with_(self, function: HashingFunction) -> Hash:
        """
        Hash with an explicit function. Configuration is not consulted.

        Raises:
            InvalidParametersError: If the password is missing or the salt
                does not suit the function
        """
        if self.plain is None:
            raise InvalidParametersError("Password must not be None")
        return function.hash(self.plain, self.salt, self.pepper)

    def with_default(self) -> Hash:
        return self.with_(self._finder().get_default_instance())

    def with_bcrypt(self) -> Hash:
        return self.with_(self._finder().get_bcrypt_instance())

    def with_scrypt(self) -> Hash:
        return self.with_(self._finder().get_scrypt_instance())

    def with_pbkdf2(self) -> Hash:
        return self.with_(self._finder().get_pbkdf2_instance())

    def with_compressed_pbkdf2(self) -> Hash:
        return self.with_(self._finder().get_compressed_pbkdf2_instance())

    def with_argon2(self) -> Hash:
        return self.with_(self._finder().get_argon2_instance())

    def with_message_digest(self) -> Hash:
        return self.with_(self._finder().get_message_digest_instance())


class HashChecker(_Request):
    """Collects salt and pepper before verifying an existing hash."""

    hashed: str | bytes | None = None

    def add_salt(self, salt: bytes | str) -> HashChecker:
        """Verify with ``salt``, for functions that do not embed it."""
        return self.model_copy(update={"salt": _to_bytes(salt)})

    def add_pepper(self, pepper: str | None = None) -> HashChecker:
        """Prepend ``pepper`` to the password; the configured pepper when omitted."""
        return self.model_copy(update={"pepper": self._resolve_pepper(pepper)})

    def with_(self, function: HashingFunction) -> bool:
        """
        Verify with an explicit function. Configuration is not consulted.

        Returns False without calling the function when the password is None.
        """
        if self.plain is None:
            return False
        return function.check(self.plain, self.hashed, self.salt, self.pepper)

    def with_default(self) -> bool:
        return self.with_(self._finder().get_default_instance())

    def with_bcrypt(self) -> bool:
        return self.with_(self._finder().get_bcrypt_instance())

    def with_scrypt(self) -> bool:
        return self.with_(self._finder().get_scrypt_instance())

    def with_pbkdf2(self) -> bool:
        return self.with_(self._finder().get_pbkdf2_instance())

    def with_compressed_pbkdf2(self) -> bool:
        return self.with_(self._finder().get_compressed_pbkdf2_instance())

    def with_argon2(self) -> bool:
        return self.with_(self._finder().get_argon2_instance())

    def with_message_digest(self) -> bool:
        return self.with_(self._finder().get_message_digest_instance())

    def and_update(self) -> HashUpdater:
        """
        Start a migration carrying this check's password, salt and pepper.

        Use add_new_salt()/add_new_pepper() on the updater to change them.
        """
        return HashUpdater(
            checker=self,
            plain=self.plain,
            salt=self.salt,
            pepper=self.pepper,
            finder=self.finder,
        )


@dataclass(frozen=True)
class HashUpdate:
    """Outcome of HashUpdater: whether the old hash verified, and the new one."""

    verified: bool
    hash: Hash | None = None

    def __bool__(self) -> bool:
        return self.verified


class HashUpdater(_Request):
    """Verifies with an old function and, on success, rehashes with a new one."""

    checker: HashChecker
    salt_replaced: bool = False

    def add_new_salt(self, salt: bytes | str) -> HashUpdater:
        return self.model_copy(update={"salt": _to_bytes(salt), "salt_replaced": True})

    def add_new_random_salt(self, length: int | None = None) -> HashUpdater:
        salt = self._finder().salt_generator.generate(length)
        return self.model_copy(update={"salt": salt, "salt_replaced": True})

    def add_new_pepper(self, pepper: str | None = None) -> HashUpdater:
        return self.model_copy(update={"pepper": self._resolve_pepper(pepper)})

    def with_(self, old_function: HashingFunction, new_function: HashingFunction) -> HashUpdate:
        """
        Verify with ``old_function`` and rehash with ``new_function``.

        The carried salt is the checker's salt or, when the checker had
        none, the salt embedded in the old artifact. A carried salt the new
        function cannot take is replaced by a fresh one.
        """
        if not self.checker.with_(old_function):
            return HashUpdate(verified=False)

        salt = self.salt
        if not self.salt_replaced:
            if salt is None and self.checker.hashed is not None:
                salt = old_function.embedded_salt(self.checker.hashed)
            if salt is not None and not new_function.accepts_salt(salt):
                get_logger().debug(
                    "%s cannot take a %d-byte salt; generating a new one",
                    new_function.algorithm_name,
                    len(salt),
                )
                salt = None

        return HashUpdate(verified=True, hash=new_function.hash(self.plain, salt, self.pepper))  # type: ignore[arg-type]

    def with_bcrypt(self, old_function: HashingFunction) -> HashUpdate:
        return self.with_(old_function, self._finder().get_bcrypt_instance())

    def with_scrypt(self, old_function: HashingFunction) -> HashUpdate:
        return self.with_(old_function, self._finder().get_scrypt_instance())

    def with_pbkdf2(self, old_function: HashingFunction) -> HashUpdate:
        return self.with_(old_function, self._finder().get_pbkdf2_instance())

    def with_compressed_pbkdf2(self, old_function: HashingFunction) -> HashUpdate:
        return self.with_(old_function, self._finder().get_compressed_pbkdf2_instance())

    def with_argon2(self, old_function: HashingFunction) -> HashUpdate:
        return self.with_(old_function, self._finder().get_argon2_instance())

    def with_message_digest(self, old_function: HashingFunction) -> HashUpdate:
        return self.with_(old_function, self._finder().get_message_digest_instance())


class Password:
    """Starting point of the hashing and verification chains."""

    @staticmethod
    def hash(plain: Plaintext, finder: AlgorithmFinder | None = None) -> HashBuilder:
        """Begin hashing ``plain``."""
        if plain is None:
            raise InvalidParametersError("Password must not be None")
        return HashBuilder(plain=plain, finder=finder)

    @staticmethod
    def check(
        plain: Plaintext | None,
        hashed: str | bytes | Hash | None,
        finder: AlgorithmFinder | None = None,
    ) -> HashChecker:
        """Begin verifying ``plain`` against ``hashed``."""
        if isinstance(hashed, Hash):
            hashed = hashed.encoded
        return HashChecker(plain=plain, hashed=hashed, finder=finder)


def hash_password(plain: Plaintext, **kwargs: Any) -> Hash:
    """Hash with the configured default function and pepper policy."""
    return Password.hash(plain, **kwargs).with_default()


def check_password(plain: Plaintext | None, hashed: str | bytes, **kwargs: Any) -> bool:
    """Verify against the configured default function."""
    return Password.check(plain, hashed, **kwargs).with_default()
