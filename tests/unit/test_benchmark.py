"""
Unit tests for the parameter tuning helpers.

Timing is replaced by a cost model so the searches are deterministic.
"""

import pytest

from passforge import benchmark
from passforge.benchmark import (
    BenchmarkResult,
    find_optimal_argon2,
    find_optimal_bcrypt,
    find_optimal_pbkdf2,
    find_optimal_scrypt,
)
from passforge.core.exceptions import InvalidParametersError
from passforge.core.models.params import BcryptParams


@pytest.fixture
def fake_clock(monkeypatch):
    """Make each derivation 'take' a time derived from its parameters."""

    def measure(function, salt):
        params = function.params
        if params.algorithm == "bcrypt":
            return float(2 ** (params.rounds - 4))
        if params.algorithm == "pbkdf2":
            return params.iterations / 1000
        if params.algorithm == "scrypt":
            return params.work_factor / 1024
        return float(params.iterations * 3)

    monkeypatch.setattr(benchmark, "_measure", measure)


class TestSearches:
    """Tests for the find_optimal_* searches."""

    def test_bcrypt(self, fake_clock):
        """The highest cost within budget is chosen."""
        result = find_optimal_bcrypt(10)

        assert isinstance(result, BenchmarkResult)
        assert result.params == BcryptParams(rounds=7)
        assert result.elapsed_ms == 8.0

    def test_pbkdf2_doubles_iterations(self, fake_clock):
        """PBKDF2 iterations double from 1000."""
        result = find_optimal_pbkdf2(5, "SHA256")

        assert result.params.iterations == 4000
        assert result.params.hmac == "SHA256"

    def test_scrypt_time_budget(self, fake_clock):
        """SCrypt stops at the time budget."""
        assert find_optimal_scrypt(4, 1 << 30).params.work_factor == 4096

    def test_scrypt_memory_budget(self, fake_clock):
        """SCrypt stops at the memory budget even with time to spare."""
        result = find_optimal_scrypt(1000, 128 * 2048 * 8)
        assert result.params.work_factor == 2048

    def test_argon2(self, fake_clock):
        """Argon2 iterations grow for a fixed memory cost."""
        result = find_optimal_argon2(10, 64)

        assert result.params.iterations == 3
        assert result.params.memory == 64

    def test_weakest_when_nothing_fits(self, fake_clock):
        """The weakest parameters are returned when even they are too slow."""
        result = find_optimal_argon2(1, 64)

        assert result.params.iterations == 1
        assert result.elapsed_ms == 3.0

    def test_non_positive_budget_rejected(self):
        """The time budget must be positive."""
        with pytest.raises(InvalidParametersError):
            find_optimal_bcrypt(0)


class TestRealTiming:
    """A smoke test against the real clock."""

    def test_bcrypt_tiny_budget(self):
        """With a tiny budget the minimum cost is reported."""
        result = find_optimal_bcrypt(0.001)

        assert result.params.rounds == 4
        assert result.elapsed_ms > 0
