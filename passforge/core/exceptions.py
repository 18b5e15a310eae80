"""
Custom exception hierarchy for passforge.

Separates misconfiguration and corrupted input from the normal
"password incorrect" outcome, which is never an exception.
"""

from __future__ import annotations


class PassforgeError(Exception):
    """
    Base exception for all passforge errors.

    Attributes:
        message: Human-readable error description
        context: Additional debugging context (parameter values, field names)

    Context must never contain plaintext passwords or peppers.
    """

    def __init__(
        self,
        message: str,
        *,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.message = message
        self.context = context or {}
        if cause is not None:
            self.__cause__ = cause
        super().__init__(message)

    def __str__(self) -> str:
        if self.context:
            ctx_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({ctx_str})"
        return self.message


# =============================================================================
# Parameter Errors
# =============================================================================


class InvalidParametersError(PassforgeError, ValueError):
    """
    Algorithm parameters or salt outside the algorithm's valid domain.

    Raised for non-power-of-two work factors, non-positive costs,
    oversized memory requests and salts of an unsupported length.
    Values are never clamped.
    """

    def __init__(
        self,
        message: str,
        *,
        algorithm: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if algorithm:
            ctx["algorithm"] = algorithm
        super().__init__(message, context=ctx, cause=cause)


# =============================================================================
# Format Errors
# =============================================================================


class FormatError(PassforgeError, ValueError):
    """
    An encoded hash could not be parsed into its fields.

    Raised when an artifact carries an algorithm's identifier but has
    the wrong number of fields or a field that cannot be decoded.
    """

    def __init__(
        self,
        message: str,
        *,
        algorithm: str | None = None,
        field: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if algorithm:
            ctx["algorithm"] = algorithm
        if field:
            ctx["field"] = field
        super().__init__(message, context=ctx, cause=cause)


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(PassforgeError):
    """
    Configuration names an unknown algorithm or a nonsensical parameter.

    Raised at resolution time, never deferred to the first hash.
    """

    def __init__(
        self,
        message: str,
        *,
        key: str | None = None,
        value: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if key:
            ctx["key"] = key
        if value is not None:
            ctx["value"] = value
        super().__init__(message, context=ctx, cause=cause)


class ConfigFileError(ConfigurationError):
    """
    Error reading or parsing a configuration file.

    Raised for TOML parsing errors, permission errors, etc.
    """

    def __init__(
        self,
        message: str,
        *,
        file_path: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if file_path:
            ctx["file_path"] = file_path
        super().__init__(message, context=ctx, cause=cause)
