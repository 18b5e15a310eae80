"""
Salt and pepper sources.
"""

from __future__ import annotations

import secrets

from ..core.exceptions import InvalidParametersError

DEFAULT_SALT_LENGTH = 64


class SaltGenerator:
    """Produces cryptographically random salts of a default length."""

    def __init__(self, length: int = DEFAULT_SALT_LENGTH) -> None:
        if length < 1:
            raise InvalidParametersError(
                "Salt length must be positive", context={"length": length}
            )
        self._length = length

    @property
    def length(self) -> int:
        return self._length

    def generate(self, length: int | None = None) -> bytes:
        """Return ``length`` random bytes (the default length if omitted)."""
        size = self._length if length is None else length
        if size < 1:
            raise InvalidParametersError("Salt length must be positive", context={"length": size})
        return secrets.token_bytes(size)


class PepperGenerator:
    """Resolves the configured pepper and creates new random ones."""

    def __init__(self, pepper: str | None = None) -> None:
        self._pepper = pepper or None

    def get(self) -> str | None:
        """The configured pepper, or None when none is configured."""
        return self._pepper

    @staticmethod
    def generate(length: int = 24) -> str:
        """A new random URL-safe pepper of ``length`` characters."""
        if length < 1:
            raise InvalidParametersError("Pepper length must be positive", context={"length": length})
        return secrets.token_urlsafe(length)[:length]

    def __repr__(self) -> str:
        # Never show the pepper itself
        return f"PepperGenerator(configured={self._pepper is not None})"
