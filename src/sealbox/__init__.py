"""SealBox: password-based AES-GCM encryption of text values."""

import logging

from sealbox.core.exceptions import (
    SealBoxError,
    InvalidArgument,
    EntropyUnavailable,
    KeyDerivationError,
    CipherError,
    DecryptionError,
    AuthenticationFailure,
    MalformedResult,
)
from sealbox.core.models import EncryptionResult
from sealbox.security.aes import AESFacade, encrypt, decrypt, decrypt_result

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    "AESFacade",
    "EncryptionResult",
    "encrypt",
    "decrypt",
    "decrypt_result",
    "SealBoxError",
    "InvalidArgument",
    "EntropyUnavailable",
    "KeyDerivationError",
    "CipherError",
    "DecryptionError",
    "AuthenticationFailure",
    "MalformedResult",
]
