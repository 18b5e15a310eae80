"""
Parameter tuning helpers.

Each ``find_optimal_*`` function times single derivations with increasing
cost on this machine and returns the strongest parameters that stayed
within the budget. Results are advisory: timings vary with load.
"""

from __future__ import annotations

import time
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from .core.exceptions import InvalidParametersError
from .core.models.params import HmacAlgorithm, ParamsModel
from .hashing.argon2 import Argon2Function
from .hashing.base import HashingFunction
from .hashing.bcrypt import BcryptFunction
from .hashing.pbkdf2 import PBKDF2Function
from .hashing.salt import DEFAULT_SALT_LENGTH, SaltGenerator
from .hashing.scrypt import ScryptFunction
from .services.logging import get_logger

_SAMPLE_PASSWORD = "abcDEF123@~# xyz+-*/=456spqr"

MIN_PBKDF2_ITERATIONS = 1000
MIN_SCRYPT_WORK_FACTOR = 2 << 9
MAX_ARGON2_ITERATIONS = 1024

# hashlib.scrypt cannot address much more scratch space than this
MAX_SCRYPT_MEMORY = 1 << 30


@dataclass(frozen=True)
class BenchmarkResult:
    """Parameters found by a search and the time one derivation took."""

    params: ParamsModel
    elapsed_ms: float


def _measure(function: HashingFunction, salt: bytes) -> float:
    length = function.default_salt_length or len(salt)
    start = time.perf_counter()
    function.hash(_SAMPLE_PASSWORD, salt[:length])
    return (time.perf_counter() - start) * 1000


def _search(functions: Iterable[HashingFunction], max_milliseconds: float) -> BenchmarkResult:
    if max_milliseconds <= 0:
        raise InvalidParametersError(
            "Time budget must be positive", context={"max_milliseconds": max_milliseconds}
        )
    salt = SaltGenerator(DEFAULT_SALT_LENGTH).generate()
    result: BenchmarkResult | None = None
    for function in functions:
        elapsed = _measure(function, salt)
        get_logger().debug("Benchmark %r took %.1f ms", function, elapsed)
        if elapsed > max_milliseconds:
            # The weakest candidate is reported even when it is over budget
            if result is None:
                result = BenchmarkResult(function.params, elapsed)
            break
        result = BenchmarkResult(function.params, elapsed)

    assert result is not None
    get_logger().info("Benchmark selected %s in %.1f ms", result.params, result.elapsed_ms)
    return result


def find_optimal_bcrypt(max_milliseconds: float) -> BenchmarkResult:
    """Highest bcrypt cost whose derivation takes at most ``max_milliseconds``."""
    return _search((BcryptFunction(rounds) for rounds in range(4, 32)), max_milliseconds)


def find_optimal_pbkdf2(
    max_milliseconds: float,
    algorithm: HmacAlgorithm = "SHA512",
    length: int = 512,
) -> BenchmarkResult:
    """Highest PBKDF2 iteration count (doubling from 1000) within the budget."""

    def candidates() -> Iterator[PBKDF2Function]:
        iterations = MIN_PBKDF2_ITERATIONS
        while iterations < 2**31:
            yield PBKDF2Function(algorithm, iterations, length)
            iterations *= 2

    return _search(candidates(), max_milliseconds)


def find_optimal_scrypt(
    max_milliseconds: float,
    max_memory_bytes: int,
    resources: int = 8,
    parallelization: int = 1,
) -> BenchmarkResult:
    """
    Highest SCrypt work factor within both the time and the memory budget.

    Args:
        max_milliseconds: Time budget of one derivation
        max_memory_bytes: Upper bound for required_memory_bytes
        resources: Fixed block size r
        parallelization: Fixed parallelization p
    """

    def candidates() -> Iterator[ScryptFunction]:
        work_factor = MIN_SCRYPT_WORK_FACTOR
        while True:
            function = ScryptFunction(work_factor, resources, parallelization)
            too_big = function.required_memory_bytes > min(max_memory_bytes, MAX_SCRYPT_MEMORY)
            if too_big and work_factor > MIN_SCRYPT_WORK_FACTOR:
                return
            yield function
            work_factor *= 2

    return _search(candidates(), max_milliseconds)


def find_optimal_argon2(
    max_milliseconds: float,
    memory: int,
    parallelism: int = 1,
    type: str = "id",
) -> BenchmarkResult:
    """Highest Argon2 iteration count for a fixed memory cost (KiB)."""
    functions = (
        Argon2Function(memory, iterations, parallelism, type=type)
        for iterations in range(1, MAX_ARGON2_ITERATIONS + 1)
    )
    return _search(functions, max_milliseconds)
