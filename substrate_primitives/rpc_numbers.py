"""A number that serializes either as a JSON number or as a hex string."""

from __future__ import annotations

import string
from dataclasses import dataclass
from typing import Any

U32_MAX = (1 << 32) - 1
U64_MAX = (1 << 64) - 1
U128_MAX = (1 << 128) - 1
U256_MAX = (1 << 256) - 1

_HEX_DIGITS = frozenset(string.hexdigits)


class TryFromIntError(ValueError):
    """Raised when a number does not fit into the requested integer width."""


@dataclass(frozen=True)
class NumberOrHex:
    """Either a u64 number or a U256 value carried as hex.

    The hex form exists so that big integers survive JSON consumers that only
    handle 53-bit numbers.
    """

    value: int = 0
    is_hex: bool = False

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise TypeError(f"NumberOrHex needs an integer, got {type(self.value).__name__}")
        limit = U256_MAX if self.is_hex else U64_MAX
        if not 0 <= self.value <= limit:
            kind = "U256" if self.is_hex else "u64"
            raise ValueError(f"{self.value} does not fit into a {kind}")

    @classmethod
    def number(cls, value: int) -> NumberOrHex:
        """The number represented directly."""
        return cls(value, False)

    @classmethod
    def hex(cls, value: int) -> NumberOrHex:
        """The number represented as hex."""
        return cls(value, True)

    def into_u256(self) -> int:
        """Return the value as an unbounded U256 integer."""
        return self.value

    def _narrow(self, limit: int) -> int:
        if self.value > limit:
            raise TryFromIntError("out of range integral type conversion attempted")
        return self.value

    def to_u32(self) -> int:
        return self._narrow(U32_MAX)

    def to_u64(self) -> int:
        return self._narrow(U64_MAX)

    def to_u128(self) -> int:
        return self._narrow(U128_MAX)

    def __int__(self) -> int:
        return self.value

    def to_json(self) -> int | str:
        """Serialize to a JSON number or a ``0x`` prefixed hex string."""
        if self.is_hex:
            return f"0x{self.value:x}"
        return self.value

    @classmethod
    def from_json(cls, value: Any) -> NumberOrHex:
        """Parse a JSON number (u64) or a ``0x`` prefixed hex string (U256)."""
        if isinstance(value, int) and not isinstance(value, bool):
            if 0 <= value <= U64_MAX:
                return cls.number(value)
        elif isinstance(value, str):
            return cls.hex(_parse_hex(value))
        raise ValueError("data did not match any variant of untagged enum NumberOrHex")


def _parse_hex(text: str) -> int:
    if not text.startswith("0x"):
        raise ValueError(f"invalid hex string {text!r}: missing 0x prefix")
    digits = text[2:]
    if not digits or not set(digits) <= _HEX_DIGITS:
        raise ValueError(f"invalid hex string {text!r}")
    if len(digits) > 64:
        raise ValueError(f"hex string {text!r} is too long for a U256")
    return int(digits, 16)