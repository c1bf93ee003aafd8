"""SCALE codec primitives: compact integers, fixed-width integers, vectors and options."""

from __future__ import annotations

from collections.abc import Callable
from typing import TypeVar

T = TypeVar("T")

U32_MAX = (1 << 32) - 1

_SINGLE_BYTE_MAX = (1 << 6) - 1
_TWO_BYTE_MAX = (1 << 14) - 1
_FOUR_BYTE_MAX = (1 << 30) - 1
_BIG_INTEGER_MAX = (1 << (8 * 67)) - 1


class CodecError(ValueError):
    """Raised when a value cannot be encoded or a byte string cannot be decoded."""


def encode_compact(value: int) -> bytes:
    """Encode a non-negative integer in SCALE compact form."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise CodecError(f"compact encoding needs an integer, got {type(value).__name__}")
    if value < 0:
        raise CodecError("compact encoding needs a non-negative integer")
    if value <= _SINGLE_BYTE_MAX:
        return bytes([value << 2])
    if value <= _TWO_BYTE_MAX:
        return ((value << 2) | 0b01).to_bytes(2, "little")
    if value <= _FOUR_BYTE_MAX:
        return ((value << 2) | 0b10).to_bytes(4, "little")
    if value > _BIG_INTEGER_MAX:
        raise CodecError("integer too large for compact encoding")
    size = (value.bit_length() + 7) // 8
    return bytes([((size - 4) << 2) | 0b11]) + value.to_bytes(size, "little")


def encode_u32(value: int) -> bytes:
    """Encode an unsigned 32-bit integer, little endian."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise CodecError(f"u32 encoding needs an integer, got {type(value).__name__}")
    if not 0 <= value <= U32_MAX:
        raise CodecError(f"{value} does not fit into a u32")
    return value.to_bytes(4, "little")


def encode_vec(payload: bytes) -> bytes:
    """Encode a byte sequence as a SCALE vector: compact length, then the bytes."""
    data = bytes(payload)
    return encode_compact(len(data)) + data


def encode_option(value: T | None, encoder: Callable[[T], bytes]) -> bytes:
    """Encode an optional value: a zero byte for None, otherwise one followed by the value."""
    if value is None:
        return b"\x00"
    return b"\x01" + encoder(value)


def encode_with_vec_prefix(payload: bytes) -> bytes:
    """Prefix an already encoded payload with its length so it decodes as a byte vector."""
    return encode_vec(payload)


class ScaleReader:
    """Sequential reader over SCALE encoded bytes."""

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)
        self._pos = 0

    def read_byte(self) -> int:
        """Read a single byte."""
        if self._pos >= len(self._data):
            raise CodecError("Not enough data to fill buffer")
        byte = self._data[self._pos]
        self._pos += 1
        return byte

    def read_bytes(self, count: int) -> bytes:
        """Read exactly ``count`` bytes."""
        if count < 0:
            raise CodecError("cannot read a negative number of bytes")
        end = self._pos + count
        if end > len(self._data):
            raise CodecError("Not enough data to fill buffer")
        chunk = self._data[self._pos:end]
        self._pos = end
        return chunk

    def read_compact(self) -> int:
        """Read a compact encoded integer, rejecting non-canonical encodings."""
        first = self.read_byte()
        mode = first & 0b11
        if mode == 0b00:
            return first >> 2
        if mode == 0b01:
            value = int.from_bytes(bytes([first]) + self.read_bytes(1), "little") >> 2
            if value <= _SINGLE_BYTE_MAX:
                raise CodecError("out of range decoding Compact<u32>")
            return value
        if mode == 0b10:
            value = int.from_bytes(bytes([first]) + self.read_bytes(3), "little") >> 2
            if value <= _TWO_BYTE_MAX:
                raise CodecError("out of range decoding Compact<u32>")
            return value
        size = (first >> 2) + 4
        value = int.from_bytes(self.read_bytes(size), "little")
        lower_bound = _FOUR_BYTE_MAX if size == 4 else (1 << (8 * (size - 1))) - 1
        if value <= lower_bound:
            raise CodecError("out of range decoding Compact")
        return value

    def read_u32(self) -> int:
        """Read an unsigned 32-bit little endian integer."""
        return int.from_bytes(self.read_bytes(4), "little")

    def read_vec(self) -> bytes:
        """Read a length-prefixed byte vector."""
        return self.read_bytes(self.read_compact())

    def remaining(self) -> bytes:
        """Return the bytes that have not been read yet."""
        return self._data[self._pos:]


def decode_compact(data: bytes) -> tuple[int, int]:
    """Decode a compact integer from the start of ``data``; return the value and bytes used."""
    reader = ScaleReader(data)
    value = reader.read_compact()
    return value, len(data) - len(reader.remaining())