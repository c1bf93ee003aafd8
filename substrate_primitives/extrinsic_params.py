"""Signed extra and additional-signed parameters used to build and sign extrinsics."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass, field, replace
from typing import Any, Union

from .scale import (
    U32_MAX,
    CodecError,
    ScaleReader,
    encode_compact,
    encode_option,
    encode_u32,
)

_MIN_PERIOD = 4
_MAX_PERIOD = 1 << 16
_MAX_UNHASHED_PAYLOAD = 256


def _check_unsigned(value: Any, what: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{what} must be an integer, got {type(value).__name__}")
    if value < 0:
        raise ValueError(f"{what} must not be negative")


@dataclass(frozen=True)
class Era:
    """Validity window of a transaction: immortal (period 0) or mortal."""

    period: int = 0
    phase: int = 0

    def __post_init__(self) -> None:
        _check_unsigned(self.period, "period")
        _check_unsigned(self.phase, "phase")
        if self.period == 0:
            if self.phase != 0:
                raise ValueError("an immortal era has no phase")
            return
        if not _MIN_PERIOD <= self.period <= _MAX_PERIOD or self.period & (self.period - 1):
            raise ValueError(f"invalid era period {self.period}")
        if self.phase >= self.period:
            raise ValueError(f"era phase {self.phase} must be below period {self.period}")

    @classmethod
    def immortal(cls) -> Era:
        """An era that never expires."""
        return cls()

    @classmethod
    def mortal(cls, period: int, current: int) -> Era:
        """A mortal era of about ``period`` blocks, starting at block ``current``.

        The period is rounded up to a power of two and clamped to [4, 65536];
        the phase is quantized so that it can be encoded in two bytes.
        """
        _check_unsigned(period, "period")
        _check_unsigned(current, "current")
        power = 1 if period <= 1 else 1 << (period - 1).bit_length()
        period = min(max(power, _MIN_PERIOD), _MAX_PERIOD)
        phase = current % period
        quantize_factor = max(period >> 12, 1)
        return cls(period, phase // quantize_factor * quantize_factor)

    @property
    def is_immortal(self) -> bool:
        return self.period == 0

    def encode(self) -> bytes:
        if self.is_immortal:
            return b"\x00"
        quantize_factor = max(self.period >> 12, 1)
        trailing_zeros = (self.period & -self.period).bit_length() - 1
        encoded = min(15, max(1, trailing_zeros - 1)) | ((self.phase // quantize_factor) << 4)
        return encoded.to_bytes(2, "little")

    @classmethod
    def decode(cls, reader: ScaleReader) -> Era:
        first = reader.read_byte()
        if first == 0:
            return cls.immortal()
        encoded = first | (reader.read_byte() << 8)
        period = 2 << (encoded % (1 << 4))
        quantize_factor = max(period >> 12, 1)
        phase = (encoded >> 4) * quantize_factor
        if period >= _MIN_PERIOD and phase < period:
            return cls(period, phase)
        raise CodecError("Invalid period and phase")


@dataclass(frozen=True)
class PlainTip:
    """Tip paid in the native token."""

    tip: int = 0

    def __post_init__(self) -> None:
        _check_unsigned(self.tip, "tip")

    def __int__(self) -> int:
        return self.tip

    def encode(self) -> bytes:
        return encode_compact(self.tip)

    @classmethod
    def decode(cls, reader: ScaleReader) -> PlainTip:
        return cls(reader.read_compact())


@dataclass(frozen=True)
class AssetTip:
    """Tip that may be paid in a specific asset; the native currency if ``asset`` is None."""

    tip: int = 0
    asset: int | None = None

    def __post_init__(self) -> None:
        _check_unsigned(self.tip, "tip")
        if self.asset is not None:
            _check_unsigned(self.asset, "asset")
            if self.asset > U32_MAX:
                raise ValueError(f"asset id {self.asset} does not fit into a u32")

    def __int__(self) -> int:
        return self.tip

    def of_asset(self, asset: int) -> AssetTip:
        """Return a copy of this tip designated as the given asset class."""
        return replace(self, asset=asset)

    def encode(self) -> bytes:
        return encode_compact(self.tip) + encode_option(self.asset, encode_u32)

    @classmethod
    def decode(cls, reader: ScaleReader) -> AssetTip:
        tip = reader.read_compact()
        flag = reader.read_byte()
        if flag == 0:
            return cls(tip)
        if flag == 1:
            return cls(tip, reader.read_u32())
        raise CodecError("invalid Option discriminant")


Tip = Union[PlainTip, AssetTip]


@dataclass(frozen=True)
class GenericSignedExtra:
    """The signed extra sent along with an extrinsic: era, nonce and tip, in node order."""

    era: Era
    nonce: int
    tip: Tip

    def encode(self) -> bytes:
        return self.era.encode() + encode_compact(self.nonce) + self.tip.encode()

    @classmethod
    def decode(cls, reader: ScaleReader, tip_type: type) -> GenericSignedExtra:
        era = Era.decode(reader)
        nonce = reader.read_compact()
        return cls(era, nonce, tip_type.decode(reader))


@dataclass(frozen=True)
class GenericAdditionalParams:
    """Optional parameters for building extrinsic params: era, checkpoint and tip."""

    selected_era: Era = field(default_factory=Era.immortal)
    mortality_checkpoint: Any = None
    selected_tip: Tip = field(default_factory=PlainTip)

    def era(self, era: Era, checkpoint: Any) -> GenericAdditionalParams:
        """Set the era and the block hash after which the extrinsic becomes valid."""
        return replace(self, selected_era=era, mortality_checkpoint=checkpoint)

    def tip(self, tip: Tip | int) -> GenericAdditionalParams:
        """Set the tip for the block author; a plain integer keeps the current tip type."""
        if isinstance(tip, int) and not isinstance(tip, bool):
            tip = type(self.selected_tip)(tip)
        return replace(self, selected_tip=tip)


@dataclass(frozen=True)
class GenericExtrinsicParams:
    """Signed extra and additional-signed values as expected by a default node."""

    era: Era
    nonce: int
    tip: Tip
    spec_version: int
    transaction_version: int
    genesis_hash: Any
    mortality_checkpoint: Any

    @classmethod
    def new(
        cls,
        spec_version: int,
        transaction_version: int,
        nonce: int,
        genesis_hash: Any,
        additional_params: GenericAdditionalParams,
    ) -> GenericExtrinsicParams:
        checkpoint = additional_params.mortality_checkpoint
        return cls(
            era=additional_params.selected_era,
            nonce=nonce,
            tip=additional_params.selected_tip,
            spec_version=spec_version,
            transaction_version=transaction_version,
            genesis_hash=genesis_hash,
            mortality_checkpoint=genesis_hash if checkpoint is None else checkpoint,
        )

    def signed_extra(self) -> GenericSignedExtra:
        return GenericSignedExtra(self.era, self.nonce, self.tip)

    def additional_signed(self) -> tuple:
        """The additional-signed tuple; unit entries are None."""
        return (
            None,
            self.spec_version,
            self.transaction_version,
            self.genesis_hash,
            self.mortality_checkpoint,
            None,
            None,
            None,
        )

    def encode_additional_signed(self) -> bytes:
        return _encode_part(self.additional_signed())


def _encode_part(value: Any) -> bytes:
    """Encode one part of a payload.

    Bytes are taken as already encoded, None is the empty unit, integers are
    u32, tuples are the concatenation of their parts, and anything else must
    provide ``encode()``.
    """
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    if value is None:
        return b""
    if isinstance(value, tuple):
        return b"".join(_encode_part(item) for item in value)
    if isinstance(value, int) and not isinstance(value, bool):
        return encode_u32(value)
    encode = getattr(value, "encode", None)
    if callable(encode) and not isinstance(value, str):
        return encode()
    raise TypeError(f"cannot encode a value of type {type(value).__name__}")


@dataclass(frozen=True)
class SignedPayload:
    """The data a signer signs: call, signed extra and additional-signed values."""

    call: Any
    extra: Any
    additional_signed: Any

    @classmethod
    def from_raw(cls, call: Any, extra: Any, additional_signed: Any) -> SignedPayload:
        return cls(call, extra, additional_signed)

    def encode(self) -> bytes:
        return (
            _encode_part(self.call)
            + _encode_part(self.extra)
            + _encode_part(self.additional_signed)
        )

    def signing_bytes(self) -> bytes:
        """The bytes to sign: the payload, blake2-256 hashed if longer than 256 bytes."""
        payload = self.encode()
        if len(payload) > _MAX_UNHASHED_PAYLOAD:
            return hashlib.blake2b(payload, digest_size=32).digest()
        return payload