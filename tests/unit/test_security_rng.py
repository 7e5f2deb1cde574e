"""Unit tests for the secure random source."""

from unittest.mock import patch

import pytest

from sealbox.core.exceptions import EntropyUnavailable, InvalidArgument
from sealbox.security.rng import RandomSource, generate_iv, generate_salt, random_bytes


def test_generate_salt_defaults():
    """Ensure salt generation returns bytes of the default length (16)."""
    salt = generate_salt()
    assert isinstance(salt, bytes)
    assert len(salt) == 16


def test_generate_iv_custom_length():
    iv = generate_iv(length=12)
    assert isinstance(iv, bytes)
    assert len(iv) == 12


def test_random_bytes_independent_calls():
    assert random_bytes(16) != random_bytes(16)


@pytest.mark.parametrize("n", [0, -1, 1.5, "16", True])
def test_random_bytes_rejects_bad_length(n):
    with pytest.raises(InvalidArgument, match="positive integer"):
        random_bytes(n)


def test_random_bytes_entropy_unavailable():
    """os.urandom failures surface as EntropyUnavailable, not OSError."""
    with patch("sealbox.security.rng.os.urandom", side_effect=NotImplementedError("no rng")):
        with pytest.raises(EntropyUnavailable, match="no rng"):
            random_bytes(16)

    with patch("sealbox.security.rng.os.urandom", side_effect=OSError("getrandom failed")):
        with pytest.raises(EntropyUnavailable):
            RandomSource().random_bytes(16)
