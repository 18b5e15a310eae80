"""
The result of a password derivation.
"""

from __future__ import annotations

import hmac
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .base import HashingFunction


@dataclass(frozen=True, eq=False)
class Hash:
    """
    Immutable outcome of ``HashingFunction.hash``.

    Attributes:
        encoded: The transportable artifact to store
        raw: The derived bytes alone
        salt: The salt used, or None for unsalted derivations
        function: The function that produced this hash

    The pepper is never kept here.
    """

    encoded: str
    raw: bytes = field(repr=False)
    salt: bytes | None
    function: HashingFunction = field(repr=False)

    def check(self, plain: str | bytes | None, pepper: str | None = None) -> bool:
        """Verify ``plain`` against this hash using its own salt and function."""
        if plain is None:
            return False
        return self.function.check(plain, self.encoded, salt=self.salt, pepper=pepper)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Hash):
            return NotImplemented
        return (
            hmac.compare_digest(self.encoded.encode(), other.encoded.encode())
            and self.salt == other.salt
        )

    def __hash__(self) -> int:
        return hash((self.encoded, self.salt))

    def __str__(self) -> str:
        return self.encoded
