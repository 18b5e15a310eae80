"""
Text encodings shared by the hash formats.

Decoders raise FormatError; callers add the algorithm and field name.
"""

from __future__ import annotations

import base64
import binascii

from ..core.exceptions import FormatError

_STD_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"
_BCRYPT_ALPHABET = "./ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789"

_TO_BCRYPT = str.maketrans(_STD_ALPHABET, _BCRYPT_ALPHABET)
_FROM_BCRYPT = str.maketrans(_BCRYPT_ALPHABET, _STD_ALPHABET)


def b64encode(data: bytes, *, padding: bool = True) -> str:
    """Standard base64, optionally without trailing '='."""
    text = base64.b64encode(data).decode("ascii")
    return text if padding else text.rstrip("=")


def b64decode(text: str, *, algorithm: str | None = None, field: str | None = None) -> bytes:
    """Decode standard base64 with or without padding."""
    if len(text) % 4 == 1 or not text.isascii():
        raise FormatError("Invalid base64 segment", algorithm=algorithm, field=field)
    padded = text + "=" * (-len(text) % 4)
    try:
        return base64.b64decode(padded, validate=True)
    except (binascii.Error, ValueError) as e:
        raise FormatError("Invalid base64 segment", algorithm=algorithm, field=field, cause=e) from e


def bcrypt_b64encode(data: bytes) -> str:
    """Encode with bcrypt's base64 alphabet, no padding."""
    return b64encode(data, padding=False).translate(_TO_BCRYPT)


def bcrypt_b64decode(text: str, *, field: str | None = None) -> bytes:
    """Decode bcrypt's base64 alphabet."""
    if not text.isascii() or any(c not in _BCRYPT_ALPHABET for c in text):
        raise FormatError("Invalid bcrypt base64 segment", algorithm="bcrypt", field=field)
    return b64decode(text.translate(_FROM_BCRYPT), algorithm="bcrypt", field=field)
