"""The version 4 unchecked extrinsic format."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from .scale import CodecError, ScaleReader, encode_with_vec_prefix

_V4 = 4
_SIGNED_BIT = 0b1000_0000
_VERSION_MASK = 0b0111_1111

Decoder = Callable[[ScaleReader], Any]


def _encode_part(value: Any) -> bytes:
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    encode = getattr(value, "encode", None)
    if callable(encode) and not isinstance(value, str):
        return encode()
    raise TypeError(f"cannot encode a value of type {type(value).__name__}")


@dataclass(frozen=True, repr=False)
class UncheckedExtrinsicV4:
    """An extrinsic, optionally signed with (address, signature, extra).

    Parts given as bytes are taken to be SCALE encoded already; other parts
    must provide ``encode()``.
    """

    function: Any
    signature: tuple[Any, Any, Any] | None = None

    @classmethod
    def new_signed(cls, function: Any, signed: Any, signature: Any, extra: Any) -> UncheckedExtrinsicV4:
        return cls(function, (signed, signature, extra))

    @classmethod
    def new_unsigned(cls, function: Any) -> UncheckedExtrinsicV4:
        return cls(function)

    def encode(self) -> bytes:
        """Encode with a length prefix so the result also decodes as a byte vector."""
        if self.signature is None:
            body = bytes([_V4 & _VERSION_MASK])
        else:
            body = bytes([_V4 | _SIGNED_BIT]) + b"".join(
                _encode_part(part) for part in self.signature
            )
        return encode_with_vec_prefix(body + _encode_part(self.function))

    @classmethod
    def decode(
        cls,
        data: bytes | ScaleReader,
        decode_address: Decoder,
        decode_signature: Decoder,
        decode_extra: Decoder,
        decode_call: Decoder,
    ) -> UncheckedExtrinsicV4:
        reader = data if isinstance(data, ScaleReader) else ScaleReader(data)
        reader.read_compact()  # length prefix, not needed
        version = reader.read_byte()
        is_signed = version & _SIGNED_BIT != 0
        if version & _VERSION_MASK != _V4:
            raise CodecError("Invalid transaction version")
        signature = None
        if is_signed:
            address = decode_address(reader)
            sig = decode_signature(reader)
            extra = decode_extra(reader)
            signature = (address, sig, extra)
        return cls(decode_call(reader), signature)

    def __repr__(self) -> str:
        shown = None if self.signature is None else (self.signature[0], self.signature[2])
        return f"UncheckedExtrinsic({shown!r}, {self.function!r})"