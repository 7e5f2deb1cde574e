"""Secure random bytes for salts and IVs."""
import os

from sealbox.config import IV_LENGTH, SALT_LENGTH
from sealbox.core.exceptions import EntropyUnavailable, InvalidArgument


def random_bytes(n: int) -> bytes:
    """Return ``n`` cryptographically secure random bytes from the OS."""
    if isinstance(n, bool) or not isinstance(n, int) or n <= 0:
        raise InvalidArgument(f"random byte count must be a positive integer, got {n!r}")
    try:
        return os.urandom(n)
    except (NotImplementedError, OSError) as exc:
        raise EntropyUnavailable(f"secure random source unavailable: {exc}") from exc


def generate_salt(length: int = SALT_LENGTH) -> bytes:
    """Return a cryptographically secure random salt."""
    return random_bytes(length)


def generate_iv(length: int = IV_LENGTH) -> bytes:
    return random_bytes(length)


class RandomSource:
    """Injectable wrapper around :func:`random_bytes`.

    os.urandom is thread-safe, so one instance can be shared by concurrent calls.
    """

    def random_bytes(self, n: int) -> bytes:
        return random_bytes(n)
