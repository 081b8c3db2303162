"""Shared fixtures for base1024 tests."""

import pytest

from base1024.core.alphabet import DEFAULT_ALPHABET


@pytest.fixture
def tables():
    """Mutable copies of the default V1 and V2 tables."""
    return list(DEFAULT_ALPHABET.v1), list(DEFAULT_ALPHABET.v2)


@pytest.fixture
def sample_bytes():
    """Deterministic 23-byte payload (4 full blocks + 3 residual bytes)."""
    return bytes((i * 37 + 11) % 256 for i in range(23))
