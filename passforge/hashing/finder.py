"""
Algorithm finder.

Resolves a hashing family to a ready-to-use function, applying explicit
parameters first, then configured values, then model defaults.
Follows Open/Closed Principle: a new family is a new entry in
``FUNCTIONS`` and a new member of the ``AlgorithmParams`` union.
"""

from __future__ import annotations

import threading
from collections import OrderedDict
from collections.abc import Mapping
from typing import Any

from ..core.exceptions import ConfigurationError, FormatError
from ..core.models.config import PassforgeConfig
from ..core.models.params import (
    ALGORITHM_NAMES,
    CompressedPBKDF2Params,
    ParamsModel,
    build_params,
    parse_params,
)
from ..core.settings import PassforgeSettings
from ..services.logging import get_logger
from .argon2 import Argon2Function
from .base import HashingFunction
from .bcrypt import BcryptFunction, is_bcrypt
from .digest import MessageDigestFunction
from .pbkdf2 import CompressedPBKDF2Function, PBKDF2Function, is_compressed_pbkdf2
from .salt import PepperGenerator, SaltGenerator
from .scrypt import ScryptFunction

# Most resolved functions a finder keeps; least recently used go first
CACHE_SIZE = 64

FUNCTIONS: dict[str, type[HashingFunction]] = {
    "bcrypt": BcryptFunction,
    "scrypt": ScryptFunction,
    "pbkdf2": PBKDF2Function,
    "compressed_pbkdf2": CompressedPBKDF2Function,
    "argon2": Argon2Function,
    "message_digest": MessageDigestFunction,
}

# Settings section holding each family's parameters
_SECTIONS: dict[str, str] = {
    "bcrypt": "bcrypt",
    "scrypt": "scrypt",
    "pbkdf2": "pbkdf2",
    "compressed_pbkdf2": "pbkdf2",
    "argon2": "argon2",
    "message_digest": "message_digest",
}


class AlgorithmFinder:
    """
    Configuration context that hands out hashing functions.

    Functions are immutable, so resolutions are cached per parameter set
    and the same instance is returned for identical parameters.

    Example:
        finder = AlgorithmFinder(load_settings())

        scrypt = finder.get_scrypt_instance()
        fast = finder.get("bcrypt", rounds=4)
    """

    def __init__(
        self,
        settings: PassforgeSettings | PassforgeConfig | None = None,
        salt_generator: SaltGenerator | None = None,
    ):
        """
        Initialize the finder.

        Args:
            settings: Configuration to read defaults from; model defaults if None
            salt_generator: Salt source; built from the salt settings if None
        """
        self._settings = settings if settings is not None else PassforgeConfig()
        self._salt_generator = salt_generator or SaltGenerator(self._settings.salt.length)
        self._pepper = PepperGenerator(self._settings.pepper)
        self._cache: OrderedDict[Any, HashingFunction] = OrderedDict()
        self._lock = threading.Lock()

    @property
    def settings(self) -> PassforgeSettings | PassforgeConfig:
        return self._settings

    @property
    def salt_generator(self) -> SaltGenerator:
        return self._salt_generator

    @property
    def pepper_generator(self) -> PepperGenerator:
        return self._pepper

    @property
    def pepper(self) -> str | None:
        """The configured pepper, or None."""
        return self._pepper.get()

    @property
    def available_algorithms(self) -> list[str]:
        """List family names."""
        return list(FUNCTIONS.keys())

    def __contains__(self, algorithm: str) -> bool:
        return algorithm in FUNCTIONS

    def from_params(self, params: ParamsModel | Mapping[str, Any]) -> HashingFunction:
        """
        Return the function for a parameter model, dispatching on its tag.

        Args:
            params: One of the AlgorithmParams models, or a mapping with an
                ``algorithm`` tag (e.g. parameters stored next to a hash)

        Returns:
            Cached HashingFunction for these parameters

        Raises:
            InvalidParametersError: If a mapping does not validate
        """
        if isinstance(params, Mapping):
            params = parse_params(dict(params))
        algorithm = getattr(params, "algorithm", None)
        function_cls = FUNCTIONS.get(algorithm)  # type: ignore[arg-type]
        if function_cls is None:
            raise ConfigurationError(f"Unknown hash algorithm: {algorithm}", value=str(algorithm))

        with self._lock:
            cached = self._cache.get(params)
            if cached is not None:
                self._cache.move_to_end(params)
                return cached
            function = function_cls.from_params(params, self._salt_generator)  # type: ignore[attr-defined]
            self._cache[params] = function
            if len(self._cache) > CACHE_SIZE:
                self._cache.popitem(last=False)

        get_logger().debug("Resolved %r", function)
        return function

    def params_for(self, algorithm: str, **overrides: Any) -> ParamsModel:
        """
        Merge configured parameters of ``algorithm`` with explicit overrides.

        Raises:
            ConfigurationError: If algorithm is unknown
            InvalidParametersError: If the merged parameters are invalid
        """
        if algorithm not in FUNCTIONS:
            raise ConfigurationError(
                f"Unknown hash algorithm: {algorithm}",
                key="default_algorithm",
                value=algorithm,
                context={"available": list(ALGORITHM_NAMES)},
            )
        section = getattr(self._settings, _SECTIONS[algorithm])
        values = section.model_dump(exclude={"algorithm"})
        values.update(overrides)
        model = CompressedPBKDF2Params if algorithm == "compressed_pbkdf2" else type(section)
        return build_params(model, **values)

    def get(self, algorithm: str, **overrides: Any) -> HashingFunction:
        """
        Get a function by family name.

        Args:
            algorithm: Family name (e.g. 'bcrypt', 'scrypt')
            **overrides: Explicit parameters that win over configuration

        Raises:
            ConfigurationError: If algorithm is unknown
            InvalidParametersError: If the parameters are invalid
        """
        return self.from_params(self.params_for(algorithm, **overrides))

    def get_default_instance(self) -> HashingFunction:
        """The function of the configured default family."""
        return self.get(self._settings.default_algorithm)

    def get_bcrypt_instance(self, **overrides: Any) -> BcryptFunction:
        return self.get("bcrypt", **overrides)  # type: ignore[return-value]

    def get_scrypt_instance(self, **overrides: Any) -> ScryptFunction:
        return self.get("scrypt", **overrides)  # type: ignore[return-value]

    def get_pbkdf2_instance(self, **overrides: Any) -> PBKDF2Function:
        return self.get("pbkdf2", **overrides)  # type: ignore[return-value]

    def get_compressed_pbkdf2_instance(self, **overrides: Any) -> CompressedPBKDF2Function:
        return self.get("compressed_pbkdf2", **overrides)  # type: ignore[return-value]

    def get_argon2_instance(self, **overrides: Any) -> Argon2Function:
        return self.get("argon2", **overrides)  # type: ignore[return-value]

    def get_message_digest_instance(self, **overrides: Any) -> MessageDigestFunction:
        return self.get("message_digest", **overrides)  # type: ignore[return-value]

    def identify(self, hashed: str) -> HashingFunction:
        """
        Return the function that produced a self-describing artifact.

        Raises:
            FormatError: If no family recognises the artifact
        """
        if is_bcrypt(hashed):
            function: HashingFunction = BcryptFunction.from_encoded(hashed)
        elif hashed.startswith("$s0$"):
            function = ScryptFunction.from_encoded(hashed)
        elif hashed.startswith("$argon2"):
            function = Argon2Function.from_encoded(hashed)
        elif is_compressed_pbkdf2(hashed):
            function = CompressedPBKDF2Function.from_encoded(hashed)
        else:
            raise FormatError("Unrecognised hash format")
        return self.from_params(function.params)


_default_finder: AlgorithmFinder | None = None
_default_lock = threading.Lock()


def get_default_finder() -> AlgorithmFinder:
    """
    Return the process default finder, creating it on first use.

    The default reads settings with load_settings() and installs the
    configured logger.
    """
    global _default_finder
    with _default_lock:
        if _default_finder is None:
            from ..core.settings import load_settings
            from ..services.logging import configure_logging

            settings = load_settings()
            configure_logging(settings.logging)
            _default_finder = AlgorithmFinder(settings)
        return _default_finder


def set_default_finder(finder: AlgorithmFinder) -> None:
    """Replace the process default finder."""
    global _default_finder
    with _default_lock:
        _default_finder = finder


def reset_default_finder() -> None:
    """Forget the process default finder (for testing)."""
    global _default_finder
    with _default_lock:
        _default_finder = None
