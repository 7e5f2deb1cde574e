"""
Password-based AES encryption of text values.

AESFacade composes the random source, the key deriver and the cipher registry:

- encrypt: fresh salt + IV, derive key from (password, salt), encrypt with IV
- decrypt: re-derive the key from the stored salt, decrypt with the stored IV

The facade keeps no mutable state, so a single instance can serve concurrent
callers. Derived keys never leave the call that created them.
"""

from __future__ import annotations

from typing import Optional, Union
import asyncio
import logging
import threading

from sealbox.config import DEFAULT_MODE, CryptoConfig
from sealbox.core.encoding import BytesLike, coerce_bytes
from sealbox.core.exceptions import InvalidArgument, KeyDerivationError
from sealbox.core.models import EncryptionResult

from . import cipher
from .kdf import KeyDeriver
from .rng import RandomSource

logger = logging.getLogger(__name__)


def _is_empty(data) -> bool:
    if data is None:
        return True
    if isinstance(data, (str, bytes, bytearray, memoryview, list, tuple)):
        return len(data) == 0
    return False


class AESFacade:
    """
    Encrypt and decrypt text with a password.

    ``kdf_timeout`` (seconds) bounds the key-derivation step. Derivation then
    runs on a daemon thread: on timeout it is not cancelled, it finishes in
    the background and its result is discarded. Being a daemon, it never
    holds up interpreter exit.
    """

    def __init__(
        self,
        config: Optional[CryptoConfig] = None,
        random_source: Optional[RandomSource] = None,
        key_deriver: Optional[KeyDeriver] = None,
        kdf_timeout: Optional[float] = None,
    ):
        self.config = config or CryptoConfig()
        self._random = random_source or RandomSource()
        self._kdf = key_deriver or KeyDeriver(self.config)
        self.kdf_timeout = kdf_timeout if kdf_timeout is not None else self.config.kdf_timeout

    # ------------------------------------------------------------------
    # Public operations
    # ------------------------------------------------------------------

    def encrypt(self, password: str, value: str, mode: str = DEFAULT_MODE) -> EncryptionResult:
        """
        Encrypt ``value`` with a key derived from ``password``.

        Returns an EncryptionResult holding the base64 ciphertext and the
        random salt and IV generated for this call.
        """
        if not password:
            raise InvalidArgument("Key is required")
        if not value:
            raise InvalidArgument("Value is required")
        provider = cipher.get_cipher(mode)

        salt = self._random.random_bytes(self.config.salt_length)
        iv = self._random.random_bytes(provider.iv_length)
        logger.debug("encrypt: mode=%s kdf=%s iv_len=%d",
                     provider.mode, self._kdf.describe(salt), len(iv))

        key = self._derive(password, salt)
        ciphertext = provider.encrypt(value, key, iv)
        return EncryptionResult(ciphertext, salt, iv)

    def decrypt(
        self,
        password: str,
        value: str,
        salt: BytesLike,
        iv: BytesLike,
        mode: str = DEFAULT_MODE,
    ) -> str:
        """
        Decrypt ``value`` using the salt and IV from the original encrypt call.

        salt and iv may be bytes, a list of ints or a hex string.
        Raises AuthenticationFailure on a wrong password or tampered data.
        """
        if not password:
            raise InvalidArgument("Key is required")
        if not value:
            raise InvalidArgument("Value is required")
        if _is_empty(salt):
            raise InvalidArgument("Salt is required")
        if _is_empty(iv):
            raise InvalidArgument("IV is required")
        if not mode:
            raise InvalidArgument("Encrypt mode is required")

        # parse to bytes
        salt_bytes = coerce_bytes(salt, "salt")
        iv_bytes = coerce_bytes(iv, "iv")
        if not salt_bytes:
            raise InvalidArgument("Salt is required")
        if not iv_bytes:
            raise InvalidArgument("IV is required")
        if len(salt_bytes) != self.config.salt_length:
            raise InvalidArgument(
                f"Salt must be {self.config.salt_length} bytes, got {len(salt_bytes)}"
            )

        provider = cipher.get_cipher(mode)
        logger.debug("decrypt: mode=%s kdf=%s", provider.mode, self._kdf.describe(salt_bytes))

        key = self._derive(password, salt_bytes)
        return cipher.decrypt(value, key, iv_bytes, provider.mode)

    def decrypt_result(
        self,
        password: str,
        result: Union[EncryptionResult, str],
        mode: str = DEFAULT_MODE,
    ) -> str:
        """Decrypt an EncryptionResult or its serialized JSON form."""
        if isinstance(result, str):
            result = EncryptionResult.parse(result)
        return self.decrypt(password, result.value, result.salt, result.iv, mode)

    async def encrypt_async(self, password: str, value: str, mode: str = DEFAULT_MODE) -> EncryptionResult:
        return await asyncio.to_thread(self.encrypt, password, value, mode)

    async def decrypt_async(
        self,
        password: str,
        value: str,
        salt: BytesLike,
        iv: BytesLike,
        mode: str = DEFAULT_MODE,
    ) -> str:
        return await asyncio.to_thread(self.decrypt, password, value, salt, iv, mode)

    # ------------------------------------------------------------------
    # Key derivation
    # ------------------------------------------------------------------

    def _derive(self, password: str, salt: bytes) -> bytes:
        if self.kdf_timeout is None:
            return self._kdf.derive(password, salt)

        outcome = {}

        def run():
            try:
                outcome["key"] = self._kdf.derive(password, salt)
            except Exception as exc:
                # re-raised on the calling thread below
                outcome["error"] = exc

        worker = threading.Thread(target=run, name="sealbox-kdf", daemon=True)
        worker.start()
        worker.join(self.kdf_timeout)
        if worker.is_alive():
            logger.warning("key derivation exceeded %.3fs timeout", self.kdf_timeout)
            raise KeyDerivationError(f"key derivation timed out after {self.kdf_timeout}s")
        if "error" in outcome:
            raise outcome["error"]
        return outcome["key"]


# module-level default facade
_default_facade = AESFacade()


def get_facade() -> AESFacade:
    return _default_facade


def encrypt(password: str, value: str, mode: str = DEFAULT_MODE) -> EncryptionResult:
    return get_facade().encrypt(password, value, mode)


def decrypt(password: str, value: str, salt: BytesLike, iv: BytesLike, mode: str = DEFAULT_MODE) -> str:
    return get_facade().decrypt(password, value, salt, iv, mode)


def decrypt_result(password: str, result: Union[EncryptionResult, str], mode: str = DEFAULT_MODE) -> str:
    return get_facade().decrypt_result(password, result, mode)
