"""Unit tests for the AEAD cipher registry and AES-GCM backend."""

import base64

import pytest

from sealbox.core.exceptions import (
    AuthenticationFailure,
    CipherError,
    DecryptionError,
    InvalidArgument,
)
from sealbox.security import cipher
from sealbox.security.cipher import AESGCMCipher, get_cipher, register_cipher, supported_modes


KEY = bytes(range(32))
IV = bytes(range(16))


@pytest.fixture
def aes():
    return AESGCMCipher()


def test_roundtrip(aes):
    ct = aes.encrypt("hello world", KEY, IV)
    assert isinstance(ct, str)
    assert aes.decrypt(ct, KEY, IV) == "hello world"


def test_ciphertext_includes_tag(aes):
    raw = base64.b64decode(aes.encrypt("hello", KEY, IV))
    assert len(raw) == len(b"hello") + 16


def test_unicode_roundtrip(aes):
    msg = "pässwörd 🔒 текст"
    assert aes.decrypt(aes.encrypt(msg, KEY, IV), KEY, IV) == msg


def test_wrong_key_is_authentication_failure(aes):
    ct = aes.encrypt("hello", KEY, IV)
    with pytest.raises(AuthenticationFailure):
        aes.decrypt(ct, bytes(32), IV)


def test_wrong_iv_is_authentication_failure(aes):
    ct = aes.encrypt("hello", KEY, IV)
    with pytest.raises(AuthenticationFailure):
        aes.decrypt(ct, KEY, bytes(16))


def test_tampered_ciphertext(aes):
    raw = bytearray(base64.b64decode(aes.encrypt("hello world", KEY, IV)))
    raw[0] ^= 0x01
    with pytest.raises(AuthenticationFailure, match="authentication tag mismatch"):
        aes.decrypt(base64.b64encode(bytes(raw)).decode("ascii"), KEY, IV)


# ==============================================================================
# Tests: Malformed input
# ==============================================================================

def test_decrypt_invalid_base64(aes):
    with pytest.raises(DecryptionError, match="not valid base64"):
        aes.decrypt("not base64 !!", KEY, IV)


def test_decrypt_too_short(aes):
    short = base64.b64encode(b"abc").decode("ascii")
    with pytest.raises(DecryptionError, match="too short"):
        aes.decrypt(short, KEY, IV)


def test_decrypt_key_length_mismatch(aes):
    ct = aes.encrypt("hello", KEY, IV)
    with pytest.raises(DecryptionError, match="256-bit key"):
        aes.decrypt(ct, KEY[:16], IV)


def test_decrypt_iv_length_mismatch(aes):
    ct = aes.encrypt("hello", KEY, IV)
    with pytest.raises(DecryptionError, match="16-byte IV"):
        aes.decrypt(ct, KEY, IV[:12])


def test_encrypt_length_mismatch_is_cipher_error(aes):
    with pytest.raises(CipherError):
        aes.encrypt("hello", KEY[:31], IV)


def test_authentication_failure_is_distinct_subclass():
    assert issubclass(AuthenticationFailure, DecryptionError)
    assert not issubclass(DecryptionError, AuthenticationFailure)


# ==============================================================================
# Tests: Registry
# ==============================================================================

@pytest.mark.parametrize("mode", ["AES-GCM", "aes-gcm", " AES-GCM ", "AES-256-GCM"])
def test_get_cipher_aliases(mode):
    assert isinstance(get_cipher(mode), AESGCMCipher)


@pytest.mark.parametrize("mode", ["", "   ", None])
def test_get_cipher_requires_mode(mode):
    with pytest.raises(InvalidArgument, match="mode is required"):
        get_cipher(mode)


def test_get_cipher_unsupported_mode():
    with pytest.raises(InvalidArgument, match="Unsupported cipher mode"):
        get_cipher("AES-CBC")


def test_module_level_helpers():
    ct = cipher.encrypt("hi", KEY, IV, "AES-GCM")
    assert cipher.decrypt(ct, KEY, IV, "AES-GCM") == "hi"
    assert "AES-GCM" in supported_modes()


def test_register_custom_cipher(monkeypatch):
    class ReverseCipher:
        mode = "TEST-REVERSE"
        key_bits = 256
        iv_length = 16

        def encrypt(self, plaintext, key, iv):
            return plaintext[::-1]

        def decrypt(self, ciphertext, key, iv):
            return ciphertext[::-1]

    monkeypatch.setattr(cipher, "_REGISTRY", dict(cipher._REGISTRY))
    register_cipher(ReverseCipher())
    assert cipher.encrypt("abc", KEY, IV, "test-reverse") == "cba"
    assert "TEST-REVERSE" in supported_modes()
