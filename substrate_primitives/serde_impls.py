"""Storage, block and runtime types with their JSON and SCALE representations."""

from __future__ import annotations

import string
from dataclasses import dataclass, field
from typing import Any

from .scale import encode_compact, encode_vec

_HEX_DIGITS = frozenset(string.hexdigits)
_WHITESPACE = frozenset(" \r\n\t")
_API_ID_LEN = 8
_ENGINE_ID_LEN = 4


class FromHexError(ValueError):
    """Raised when a string is not valid hex."""


def from_hex(text: str) -> bytes:
    """Decode hex with an optional ``0x`` prefix; an odd digit count gets a leading nibble."""
    stripped = text.startswith("0x")
    body = text[2:] if stripped else text
    offset = 2 if stripped else 0
    digits = []
    for index, char in enumerate(body):
        if char in _WHITESPACE:
            continue
        if char not in _HEX_DIGITS:
            raise FromHexError(f"Invalid character '{char}' at position {index + offset}")
        digits.append(char)
    if len(digits) % 2:
        digits.insert(0, "0")
    return bytes.fromhex("".join(digits))


def _to_hex(data: bytes) -> str:
    return "0x" + data.hex()


def _hex_from_json(value: Any, exact_len: int | None = None) -> bytes:
    if not isinstance(value, str):
        raise ValueError(f"expected a 0x-prefixed hex string, got {type(value).__name__}")
    if not value.startswith("0x"):
        raise FromHexError("Missing 0x prefix")
    data = from_hex(value)
    if exact_len is not None and len(data) != exact_len:
        raise ValueError(f"invalid length {len(data)}, expected {exact_len} bytes")
    return data


def _uint(value: Any, bits: int, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name}: expected an integer, got {type(value).__name__}")
    if not 0 <= value < (1 << bits):
        raise ValueError(f"{name}: {value} does not fit into a u{bits}")
    return value


def _as_bytes(value: Any, name: str) -> bytes:
    if isinstance(value, (bytes, bytearray, memoryview, list, tuple)):
        return bytes(value)
    raise TypeError(f"{name} needs bytes, got {type(value).__name__}")


def _byte_list_from_json(value: Any, name: str) -> bytes:
    if not isinstance(value, list):
        raise ValueError(f"{name}: expected an array of bytes")
    return bytes(_uint(item, 8, name) for item in value)


def _require_object(value: Any, name: str) -> dict:
    if not isinstance(value, dict):
        raise ValueError(f"invalid type for {name}: expected a JSON object")
    return value


def _field(obj: dict, key: str) -> Any:
    if key not in obj:
        raise ValueError(f"missing field `{key}`")
    return obj[key]


@dataclass(frozen=True, order=True)
class _ByteWrapper:
    data: bytes = b""

    def __post_init__(self) -> None:
        object.__setattr__(self, "data", _as_bytes(self.data, type(self).__name__))

    def __bytes__(self) -> bytes:
        return self.data

    def __len__(self) -> int:
        return len(self.data)


class Bytes(_ByteWrapper):
    """A byte vector serialized as hex."""

    @classmethod
    def from_str(cls, text: str) -> Bytes:
        """Parse hex, with or without the ``0x`` prefix."""
        return cls(from_hex(text))

    def to_json(self) -> str:
        """Serialize as a ``0x`` prefixed lowercase hex string."""
        return _to_hex(self.data)

    @classmethod
    def from_json(cls, value: Any) -> Bytes:
        """Parse a ``0x`` prefixed hex string."""
        return cls(_hex_from_json(value))


class StorageKey(_ByteWrapper):
    """A storage key."""

    def encode(self) -> bytes:
        return encode_vec(self.data)

    def to_json(self) -> str:
        """Serialize as a ``0x`` prefixed lowercase hex string."""
        return _to_hex(self.data)

    @classmethod
    def from_json(cls, value: Any) -> StorageKey:
        """Parse a ``0x`` prefixed hex string."""
        return cls(_hex_from_json(value))


class StorageData(_ByteWrapper):
    """Storage data associated with a storage key."""

    def encode(self) -> bytes:
        return encode_vec(self.data)

    def to_json(self) -> str:
        """Serialize as a ``0x`` prefixed lowercase hex string."""
        return _to_hex(self.data)

    @classmethod
    def from_json(cls, value: Any) -> StorageData:
        """Parse a ``0x`` prefixed hex string."""
        return cls(_hex_from_json(value))


def _hash_to_json(value: Any) -> Any:
    if isinstance(value, (bytes, bytearray, memoryview)):
        return _to_hex(bytes(value))
    to_json = getattr(value, "to_json", None)
    if callable(to_json):
        return to_json()
    return value


def _hash_from_json(value: Any) -> Any:
    if isinstance(value, str) and value.startswith("0x"):
        return _hex_from_json(value)
    return value


@dataclass
class StorageChangeSet:
    """The storage changes of one block; hashes given as bytes serialize as hex."""

    block: Any
    changes: list[tuple[StorageKey, StorageData | None]] = field(default_factory=list)

    def to_json(self) -> dict:
        return {
            "block": _hash_to_json(self.block),
            "changes": [
                [key.to_json(), None if data is None else data.to_json()]
                for key, data in self.changes
            ],
        }

    @classmethod
    def from_json(cls, value: Any) -> StorageChangeSet:
        obj = _require_object(value, "StorageChangeSet")
        raw_changes = _field(obj, "changes")
        if not isinstance(raw_changes, list):
            raise ValueError("changes: expected an array")
        changes = []
        for entry in raw_changes:
            if not isinstance(entry, list) or len(entry) != 2:
                raise ValueError("changes: expected a [key, data] pair")
            key, data = entry
            changes.append(
                (StorageKey.from_json(key), None if data is None else StorageData.from_json(data))
            )
        return cls(_hash_from_json(_field(obj, "block")), changes)


@dataclass
class RuntimeVersion:
    """Version information of a runtime."""

    spec_name: str = ""
    impl_name: str = ""
    authoring_version: int = 0
    spec_version: int = 0
    impl_version: int = 0
    apis: list[tuple[bytes, int]] = field(default_factory=list)
    transaction_version: int = 0
    state_version: int = 0

    def to_json(self) -> dict:
        return {
            "specName": self.spec_name,
            "implName": self.impl_name,
            "authoringVersion": self.authoring_version,
            "specVersion": self.spec_version,
            "implVersion": self.impl_version,
            "apis": [[_to_hex(bytes(api_id)), version] for api_id, version in self.apis],
            "transactionVersion": self.transaction_version,
            "stateVersion": self.state_version,
        }

    @classmethod
    def from_json(cls, value: Any) -> RuntimeVersion:
        obj = _require_object(value, "RuntimeVersion")
        names = {}
        for key in ("specName", "implName"):
            text = _field(obj, key)
            if not isinstance(text, str):
                raise ValueError(f"{key}: expected a string")
            names[key] = text
        raw_apis = _field(obj, "apis")
        if not isinstance(raw_apis, list):
            raise ValueError("apis: expected a sequence of api id and version tuples")
        apis = []
        for entry in raw_apis:
            if not isinstance(entry, list) or len(entry) != 2:
                raise ValueError("apis: expected an [api id, version] pair")
            apis.append((_hex_from_json(entry[0], _API_ID_LEN), _uint(entry[1], 32, "apis")))
        return cls(
            spec_name=names["specName"],
            impl_name=names["implName"],
            authoring_version=_uint(_field(obj, "authoringVersion"), 32, "authoringVersion"),
            spec_version=_uint(_field(obj, "specVersion"), 32, "specVersion"),
            impl_version=_uint(_field(obj, "implVersion"), 32, "implVersion"),
            apis=apis,
            transaction_version=_uint(
                _field(obj, "transactionVersion"), 32, "transactionVersion"
            ),
            state_version=_uint(_field(obj, "stateVersion"), 8, "stateVersion"),
        )


@dataclass
class Justifications:
    """Justifications of a block, each a (4-byte consensus engine id, encoded data) pair."""

    items: list[tuple[bytes, bytes]] = field(default_factory=list)

    def __post_init__(self) -> None:
        normalized = []
        for engine_id, data in self.items:
            engine_id = _as_bytes(engine_id, "engine id")
            if len(engine_id) != _ENGINE_ID_LEN:
                raise ValueError(f"engine id must be {_ENGINE_ID_LEN} bytes")
            normalized.append((engine_id, _as_bytes(data, "justification")))
        self.items = normalized

    def encode(self) -> bytes:
        return encode_compact(len(self.items)) + b"".join(
            engine_id + encode_vec(data) for engine_id, data in self.items
        )

    def to_json(self) -> list:
        return [[list(engine_id), list(data)] for engine_id, data in self.items]

    @classmethod
    def from_json(cls, value: Any) -> Justifications:
        if not isinstance(value, list):
            raise ValueError("Justifications: expected an array")
        items = []
        for entry in value:
            if not isinstance(entry, list) or len(entry) != 2:
                raise ValueError("Justifications: expected an [engine id, data] pair")
            engine_id = _byte_list_from_json(entry[0], "engine id")
            if len(engine_id) != _ENGINE_ID_LEN:
                raise ValueError(f"engine id must be {_ENGINE_ID_LEN} bytes")
            items.append((engine_id, _byte_list_from_json(entry[1], "justification")))
        return cls(items)


def _value_to_json(value: Any) -> Any:
    to_json = getattr(value, "to_json", None)
    if callable(to_json):
        return to_json()
    if isinstance(value, (bytes, bytearray, memoryview)):
        return list(bytes(value))
    return value


@dataclass
class SignedBlock:
    """A block together with its optional justifications."""

    block: Any
    justifications: Justifications | None = None

    def to_json(self) -> dict:
        return {
            "block": _value_to_json(self.block),
            "justifications": None
            if self.justifications is None
            else self.justifications.to_json(),
        }

    @classmethod
    def from_json(cls, value: Any) -> SignedBlock:
        obj = _require_object(value, "SignedBlock")
        for key in obj:
            if key not in ("block", "justifications"):
                raise ValueError(f"unknown field `{key}`, expected `block` or `justifications`")
        raw = obj.get("justifications")
        return cls(_field(obj, "block"), None if raw is None else Justifications.from_json(raw))


@dataclass(frozen=True, order=True)
class OldWeight:
    """The old u64 weight type."""

    value: int = 0

    def __post_init__(self) -> None:
        _uint(self.value, 64, "OldWeight")

    def __int__(self) -> int:
        return self.value

    def encode(self) -> bytes:
        return self.value.to_bytes(8, "little")

    def to_json(self) -> int:
        return self.value

    @classmethod
    def from_json(cls, value: Any) -> OldWeight:
        return cls(_uint(value, 64, "OldWeight"))