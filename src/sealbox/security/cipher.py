"""Authenticated cipher backends.

The facade talks to a ``CipherProvider`` looked up by mode label. The only
production binding is AES-256-GCM from :mod:`cryptography`; ciphertext travels
as base64 of ``ciphertext || tag``.
"""

from __future__ import annotations

from typing import Dict, Protocol
import base64
import binascii
import logging

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from sealbox.config import DEFAULT_MODE, IV_LENGTH, KEY_BITS
from sealbox.core.exceptions import (
    AuthenticationFailure,
    CipherError,
    DecryptionError,
    InvalidArgument,
)

logger = logging.getLogger(__name__)

GCM_TAG_LENGTH = 16


class CipherProvider(Protocol):
    mode: str
    key_bits: int
    iv_length: int

    def encrypt(self, plaintext: str, key: bytes, iv: bytes) -> str:
        ...

    def decrypt(self, ciphertext: str, key: bytes, iv: bytes) -> str:
        ...


class AESGCMCipher:
    """
    AES-256-GCM via :class:`cryptography.hazmat.primitives.ciphers.aead.AESGCM`.

    A 16-byte IV is used as the GCM nonce. No associated data is bound.
    """

    mode = DEFAULT_MODE
    key_bits = KEY_BITS
    iv_length = IV_LENGTH

    def _check(self, key: bytes, iv: bytes, error: type) -> None:
        if len(key) * 8 != self.key_bits:
            raise error(f"{self.mode} requires a {self.key_bits}-bit key, got {len(key) * 8} bits")
        if len(iv) != self.iv_length:
            raise error(f"{self.mode} requires a {self.iv_length}-byte IV, got {len(iv)} bytes")

    def encrypt(self, plaintext: str, key: bytes, iv: bytes) -> str:
        self._check(key, iv, CipherError)
        ct = AESGCM(key).encrypt(iv, plaintext.encode("utf-8"), None)
        return base64.b64encode(ct).decode("ascii")

    def decrypt(self, ciphertext: str, key: bytes, iv: bytes) -> str:
        self._check(key, iv, DecryptionError)
        try:
            raw = base64.b64decode(ciphertext, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise DecryptionError(f"ciphertext is not valid base64: {exc}") from exc
        if len(raw) < GCM_TAG_LENGTH:
            raise DecryptionError("Ciphertext too short to contain authentication tag")

        try:
            pt = AESGCM(key).decrypt(iv, raw, None)
        except InvalidTag as exc:
            raise AuthenticationFailure(
                "authentication tag mismatch (wrong password or tampered ciphertext)"
            ) from exc

        try:
            return pt.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise DecryptionError("decrypted payload is not valid UTF-8 text") from exc


_REGISTRY: Dict[str, CipherProvider] = {}
_ALIASES = {"AES-256-GCM": DEFAULT_MODE}


def _normalize_mode(mode: str) -> str:
    key = mode.strip().upper()
    return _ALIASES.get(key, key)


def register_cipher(provider: CipherProvider) -> None:
    """Make ``provider`` available under its mode label."""
    _REGISTRY[_normalize_mode(provider.mode)] = provider


def get_cipher(mode: str) -> CipherProvider:
    if not isinstance(mode, str) or not mode.strip():
        raise InvalidArgument("Encrypt mode is required")
    provider = _REGISTRY.get(_normalize_mode(mode))
    if provider is None:
        raise InvalidArgument(f"Unsupported cipher mode: {mode}")
    return provider


def supported_modes() -> list:
    return sorted(_REGISTRY)


def encrypt(plaintext: str, key: bytes, iv: bytes, mode: str = DEFAULT_MODE) -> str:
    return get_cipher(mode).encrypt(plaintext, key, iv)


def decrypt(ciphertext: str, key: bytes, iv: bytes, mode: str = DEFAULT_MODE) -> str:
    provider = get_cipher(mode)
    try:
        return provider.decrypt(ciphertext, key, iv)
    except AuthenticationFailure:
        logger.warning("%s authentication failed", provider.mode)
        raise


register_cipher(AESGCMCipher())
