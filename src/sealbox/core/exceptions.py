"""
Exceptions for SealBox
Everything derives from SealBoxError such that there is a general error catcher
"""


class SealBoxError(Exception):
    # general container for errors
    pass


class InvalidArgument(SealBoxError, ValueError):
    # raised on a missing or empty password, value, salt, iv or mode (caller error)
    pass


class EntropyUnavailable(SealBoxError):
    # raised when the OS random source cannot be read
    pass


class KeyDerivationError(SealBoxError):
    # raised on bad KDF inputs, a primitive fault or a derivation timeout
    pass


class CipherError(SealBoxError):
    # raised when the cipher backend rejects its inputs
    pass


class DecryptionError(CipherError):
    # raised on malformed ciphertext or a key/iv length mismatch
    pass


class AuthenticationFailure(DecryptionError):
    # raised when the GCM tag does not verify (tampered data or wrong password)
    pass


class MalformedResult(SealBoxError, ValueError):
    # raised when a serialized EncryptionResult cannot be parsed
    pass
