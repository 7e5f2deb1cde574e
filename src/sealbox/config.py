"""Configuration constants for SealBox.

The KDF cost lives here rather than on the public encrypt/decrypt calls so a
caller cannot weaken it per call. ``CryptoConfig.from_env`` allows raising the
cost or switching algorithm through ``SEALBOX_*`` environment variables.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
import os

from sealbox.core.exceptions import InvalidArgument


SALT_LENGTH = 16
IV_LENGTH = 16

KDF_ITERATIONS = 5000
KEY_BITS = 256

DEFAULT_MODE = "AES-GCM"
DEFAULT_KDF = "pbkdf2-sha256"

# scrypt cost (only used when algorithm == "scrypt")
SCRYPT_N = 2 ** 14
SCRYPT_R = 8
SCRYPT_P = 1

# argon2id cost (only used when algorithm == "argon2id"); iterations is the time cost
ARGON2_TIME_COST = 3
ARGON2_MEMORY_COST = 65536
ARGON2_PARALLELISM = 1

# default and minimum "iterations" per KDF; scrypt ignores it
KDF_DEFAULT_COST = {
    "pbkdf2-sha256": KDF_ITERATIONS,
    "scrypt": KDF_ITERATIONS,
    "argon2id": ARGON2_TIME_COST,
}


def default_cost(algorithm: str) -> int:
    return KDF_DEFAULT_COST.get(algorithm, KDF_ITERATIONS)


@dataclass(frozen=True)
class CryptoConfig:
    """Immutable bundle of the parameters a facade is built with.

    ``kdf_iterations`` left as None resolves to the algorithm's default cost.
    """

    kdf_algorithm: str = DEFAULT_KDF
    kdf_iterations: Optional[int] = None
    key_bits: int = KEY_BITS
    salt_length: int = SALT_LENGTH
    iv_length: int = IV_LENGTH
    kdf_timeout: Optional[float] = None

    def __post_init__(self):
        if self.kdf_iterations is None:
            object.__setattr__(self, "kdf_iterations", default_cost(self.kdf_algorithm))

    @classmethod
    def from_env(cls, prefix: str = "SEALBOX_") -> "CryptoConfig":
        """
        Build a config from environment variables.

        - ``SEALBOX_KDF_ALGORITHM``: pbkdf2-sha256 | scrypt | argon2id
        - ``SEALBOX_KDF_ITERATIONS``: may only raise the algorithm's default cost
        - ``SEALBOX_KDF_TIMEOUT``: seconds allowed for one key derivation
        """
        algorithm = os.getenv(f"{prefix}KDF_ALGORITHM") or DEFAULT_KDF

        floor = default_cost(algorithm)
        iterations = floor
        raw_iterations = os.getenv(f"{prefix}KDF_ITERATIONS")
        if raw_iterations:
            try:
                iterations = int(raw_iterations)
            except ValueError as exc:
                raise InvalidArgument(f"{prefix}KDF_ITERATIONS must be an integer") from exc
            if iterations < floor:
                raise InvalidArgument(
                    f"{prefix}KDF_ITERATIONS may not be lower than {floor} for {algorithm}"
                )

        timeout = None
        raw_timeout = os.getenv(f"{prefix}KDF_TIMEOUT")
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError as exc:
                raise InvalidArgument(f"{prefix}KDF_TIMEOUT must be a number") from exc
            if timeout <= 0:
                raise InvalidArgument(f"{prefix}KDF_TIMEOUT must be positive")

        return cls(kdf_algorithm=algorithm, kdf_iterations=iterations, kdf_timeout=timeout)
