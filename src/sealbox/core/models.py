"""
Data model for the output of a password-based encryption
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict
import json

from sealbox.config import IV_LENGTH, SALT_LENGTH

from .encoding import bytes_to_hex, bytes_to_list, list_to_bytes
from .exceptions import InvalidArgument, MalformedResult


@dataclass(frozen=True)
class EncryptionResult:
    """
    Ciphertext plus the randomness needed to decrypt it again.

    - value: base64 ciphertext (GCM tag included)
    - salt: KDF salt, 16 random bytes per encryption
    - iv: cipher nonce, 16 random bytes per encryption

    salt and iv are not secret; the password is the only secret input.
    """

    value: str
    salt: bytes
    iv: bytes

    def __post_init__(self):
        # normalise bytearray / list inputs so equality is byte-wise
        for name in ("salt", "iv"):
            raw = getattr(self, name)
            if isinstance(raw, (bytes, bytearray, memoryview)):
                object.__setattr__(self, name, bytes(raw))
            elif isinstance(raw, (list, tuple)):
                object.__setattr__(self, name, list_to_bytes(raw))
            else:
                raise InvalidArgument(f"{name} must be a byte sequence")

    def to_dict(self) -> Dict[str, Any]:
        """
            Convert to the JSON record layout (value, salt, iv)
        """
        return {
            "value": self.value,
            "salt": bytes_to_list(self.salt),
            "iv": bytes_to_list(self.iv),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EncryptionResult":
        if not isinstance(data, dict):
            raise MalformedResult("encryption result must be a JSON object")

        missing = [k for k in ("value", "salt", "iv") if k not in data]
        if missing:
            raise MalformedResult(f"encryption result is missing fields: {', '.join(missing)}")

        value = data["value"]
        if not isinstance(value, str) or not value:
            raise MalformedResult("'value' must be a non-empty string")

        return cls(
            value=value,
            salt=_parse_byte_field(data["salt"], "salt", SALT_LENGTH),
            iv=_parse_byte_field(data["iv"], "iv", IV_LENGTH),
        )

    def serialize(self) -> str:
        """Serialize to a JSON string: {"value": ..., "salt": [...], "iv": [...]}"""
        return json.dumps(self.to_dict())

    @classmethod
    def parse(cls, text: str) -> "EncryptionResult":
        """
        Rebuild an EncryptionResult from :meth:`serialize` output.

        Raises MalformedResult if the text is not a JSON object with the three
        required fields, or if salt/iv are not lists of exactly 16 byte values.
        """
        if isinstance(text, (bytes, bytearray)):
            try:
                text = bytes(text).decode("utf-8", errors="strict")
            except UnicodeDecodeError as exc:
                raise MalformedResult(f"serialized result is not valid UTF-8: {exc}") from exc
        if not isinstance(text, str):
            raise MalformedResult("serialized result must be a string")
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise MalformedResult(f"serialized result is not valid JSON: {exc}") from exc
        return cls.from_dict(data)

    parse_from = parse

    def __str__(self) -> str:
        return self.serialize()

    def __repr__(self) -> str:
        return (
            f"EncryptionResult(value={self.value!r}, "
            f"salt={bytes_to_hex(self.salt)!r}, iv={bytes_to_hex(self.iv)!r})"
        )


def _parse_byte_field(raw: Any, name: str, length: int) -> bytes:
    if not isinstance(raw, list) or not raw:
        raise MalformedResult(f"'{name}' must be a non-empty list of byte values")
    try:
        data = list_to_bytes(raw)
    except InvalidArgument as exc:
        raise MalformedResult(f"'{name}' is not a valid byte sequence: {exc}") from exc
    if len(data) != length:
        raise MalformedResult(f"'{name}' must be {length} bytes, got {len(data)}")
    return data
