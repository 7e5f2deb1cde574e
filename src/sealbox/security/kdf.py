"""Password-based key derivation for SealBox.

Three algorithms are available; PBKDF2-HMAC-SHA256 with 5000 rounds and a
256-bit output is the default used by the facade.
"""
from typing import Dict, Optional, Union

from argon2.exceptions import Argon2Error
from argon2.low_level import Type, hash_secret_raw
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC
from cryptography.hazmat.primitives.kdf.scrypt import Scrypt

from sealbox.config import (
    ARGON2_MEMORY_COST,
    ARGON2_PARALLELISM,
    DEFAULT_KDF,
    KEY_BITS,
    SCRYPT_N,
    SCRYPT_P,
    SCRYPT_R,
    CryptoConfig,
    default_cost,
)
from sealbox.core.exceptions import KeyDerivationError

KDF_PBKDF2 = "pbkdf2-sha256"
KDF_SCRYPT = "scrypt"
KDF_ARGON2ID = "argon2id"

SUPPORTED_KDFS = (KDF_PBKDF2, KDF_SCRYPT, KDF_ARGON2ID)


def _pbkdf2(password: bytes, salt: bytes, iterations: int, key_len: int) -> bytes:
    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA256(),
        length=key_len,
        salt=salt,
        iterations=iterations,
    )
    return kdf.derive(password)


def _scrypt(password: bytes, salt: bytes, iterations: int, key_len: int) -> bytes:
    # scrypt has its own cost parameters; iterations is not used
    kdf = Scrypt(salt=salt, length=key_len, n=SCRYPT_N, r=SCRYPT_R, p=SCRYPT_P)
    return kdf.derive(password)


def _argon2id(password: bytes, salt: bytes, iterations: int, key_len: int) -> bytes:
    return hash_secret_raw(
        secret=password,
        salt=salt,
        time_cost=iterations,
        memory_cost=ARGON2_MEMORY_COST,
        parallelism=ARGON2_PARALLELISM,
        hash_len=key_len,
        type=Type.ID,
    )


_KDFS = {
    KDF_PBKDF2: _pbkdf2,
    KDF_SCRYPT: _scrypt,
    KDF_ARGON2ID: _argon2id,
}


def derive_key(
    password: Union[str, bytes],
    salt: bytes,
    iterations: Optional[int] = None,
    key_bits: int = KEY_BITS,
    algorithm: str = DEFAULT_KDF,
) -> bytes:
    """
    Derive a symmetric key from a password and salt.
    Returns raw derived key bytes of ``key_bits // 8`` length.
    ``iterations`` defaults to the algorithm's configured cost.

    Raises KeyDerivationError on an empty password or salt, bad cost values,
    an unknown algorithm, or a failure inside the primitive.
    """
    if iterations is None:
        iterations = default_cost(algorithm)
    if isinstance(password, str):
        password = password.encode("utf-8")
    if not password:
        raise KeyDerivationError("password must not be empty")
    if not salt:
        raise KeyDerivationError("salt must not be empty")
    if isinstance(iterations, bool) or not isinstance(iterations, int) or iterations <= 0:
        raise KeyDerivationError("iterations must be a positive integer")
    if isinstance(key_bits, bool) or not isinstance(key_bits, int) or key_bits <= 0 or key_bits % 8:
        raise KeyDerivationError("key_bits must be a positive multiple of 8")

    kdf = _KDFS.get(algorithm)
    if kdf is None:
        raise KeyDerivationError(f"Unsupported KDF algorithm: {algorithm}")

    try:
        return kdf(bytes(password), bytes(salt), iterations, key_bits // 8)
    except (ValueError, TypeError, Argon2Error) as exc:
        raise KeyDerivationError(f"{algorithm} derivation failed: {exc}") from exc


def kdf_params_to_dict(salt: bytes, algorithm: str, iterations: int, key_bits: int) -> Dict:
    return {
        "algo": algorithm,
        "salt": salt.hex(),
        "iterations": iterations,
        "key_bits": key_bits,
    }


class KeyDeriver:
    """Derives keys with a cost fixed at construction time."""

    def __init__(self, config: Optional[CryptoConfig] = None):
        config = config or CryptoConfig()
        if config.kdf_algorithm not in _KDFS:
            raise KeyDerivationError(f"Unsupported KDF algorithm: {config.kdf_algorithm}")
        self.algorithm = config.kdf_algorithm
        self.iterations = config.kdf_iterations
        self.key_bits = config.key_bits

    def derive(self, password: Union[str, bytes], salt: bytes) -> bytes:
        return derive_key(
            password,
            salt,
            iterations=self.iterations,
            key_bits=self.key_bits,
            algorithm=self.algorithm,
        )

    def describe(self, salt: bytes) -> Dict:
        return kdf_params_to_dict(salt, self.algorithm, self.iterations, self.key_bits)
