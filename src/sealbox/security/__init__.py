"""Security helpers: random source, KDF and AEAD cipher for SealBox.

This package provides:
- OS-backed secure random bytes for salts and IVs
- PBKDF2 / scrypt / Argon2id key derivation with fixed, configured cost
- AES-256-GCM encryption behind a pluggable cipher registry
- AESFacade, which ties the three together for encrypt/decrypt of text
"""

from .rng import RandomSource, random_bytes, generate_salt, generate_iv
from .kdf import KeyDeriver, derive_key, kdf_params_to_dict
from .cipher import AESGCMCipher, CipherProvider, get_cipher, register_cipher, supported_modes
from .aes import AESFacade, get_facade, encrypt, decrypt, decrypt_result

__all__ = [
    "RandomSource",
    "random_bytes",
    "generate_salt",
    "generate_iv",
    "KeyDeriver",
    "derive_key",
    "kdf_params_to_dict",
    "AESGCMCipher",
    "CipherProvider",
    "get_cipher",
    "register_cipher",
    "supported_modes",
    "AESFacade",
    "get_facade",
    "encrypt",
    "decrypt",
    "decrypt_result",
]
