"""
Core infrastructure for passforge.

This module provides:
- Custom exception hierarchy
- Configuration models and settings loading
- Interface definitions
"""

from .exceptions import (
    ConfigFileError,
    ConfigurationError,
    FormatError,
    InvalidParametersError,
    PassforgeError,
)

__all__ = [
    "ConfigFileError",
    "ConfigurationError",
    "FormatError",
    "InvalidParametersError",
    "PassforgeError",
]
