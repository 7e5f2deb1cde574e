""" Utilities for converting between hex strings and byte sequences. """

from typing import Iterable, Union

from .exceptions import InvalidArgument


BytesLike = Union[bytes, bytearray, memoryview, str, Iterable[int]]


def bytes_to_hex(data: bytes) -> str:
    return bytes(data).hex()


def hex_to_bytes(text: str) -> bytes:
    """Decode a hex string (optionally ``0x``-prefixed) into bytes."""
    cleaned = text.strip()
    if cleaned[:2].lower() == "0x":
        cleaned = cleaned[2:]
    try:
        return bytes.fromhex(cleaned)
    except ValueError as exc:
        raise InvalidArgument(f"invalid hex string: {exc}") from exc


def bytes_to_list(data: bytes) -> list:
    # JSON-friendly form of a byte sequence
    return list(bytes(data))


def list_to_bytes(values: Iterable[int]) -> bytes:
    """Convert a sequence of ints (0..255) into bytes.

    Booleans are rejected even though they are ints, so ``[True, False]`` does
    not silently turn into ``b"\\x01\\x00"``.
    """
    out = bytearray()
    for v in values:
        if isinstance(v, bool) or not isinstance(v, int):
            raise InvalidArgument(f"byte values must be ints, got {type(v).__name__}")
        if not 0 <= v <= 255:
            raise InvalidArgument(f"byte value out of range: {v}")
        out.append(v)
    return bytes(out)


def coerce_bytes(data: BytesLike, name: str = "value") -> bytes:
    """
    Accept hex text, bytes-like objects or a sequence of ints and return bytes.

    Raises InvalidArgument for anything else.
    """
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)
    if isinstance(data, str):
        return hex_to_bytes(data)
    if isinstance(data, (list, tuple)):
        return list_to_bytes(data)
    raise InvalidArgument(f"{name} must be bytes, a hex string or a list of ints")
