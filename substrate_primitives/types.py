"""Account, fee, dispatch and chain types returned by a node."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass, field
from typing import Any

from .scale import encode_u32
from .serde_impls import OldWeight

#: Upper bound used for saturating balance arithmetic (u128).
BALANCE_MAX = (1 << 128) - 1

#: Arbitrary chain spec properties, a JSON object.
Properties = dict[str, Any]

_UNSIGNED_DECIMAL = re.compile(r"\+?[0-9]+")


def _unsigned(value: Any, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name}: expected an integer, got {type(value).__name__}")
    if value < 0:
        raise ValueError(f"{name}: {value} must not be negative")
    return value


def _require_object(value: Any, name: str) -> dict:
    if not isinstance(value, dict):
        raise ValueError(f"invalid type for {name}: expected a JSON object")
    return value


def _field(obj: dict, key: str) -> Any:
    if key not in obj:
        raise ValueError(f"missing field `{key}`")
    return obj[key]


def _encode_value(value: Any) -> bytes:
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    encode = getattr(value, "encode", None)
    if callable(encode) and not isinstance(value, str):
        return encode()
    raise TypeError(f"cannot encode a value of type {type(value).__name__}")


def _saturating_add(*values: int) -> int:
    return min(sum(values), BALANCE_MAX)


@dataclass
class AccountInfo:
    """Information about an account: nonce, reference counts and account data.

    The nonce and reference counts encode as u32; ``data`` is taken as
    already encoded bytes or must provide ``encode()``.
    """

    nonce: int = 0
    consumers: int = 0
    providers: int = 0
    sufficients: int = 0
    data: Any = b""

    def encode(self) -> bytes:
        return (
            encode_u32(self.nonce)
            + encode_u32(self.consumers)
            + encode_u32(self.providers)
            + encode_u32(self.sufficients)
            + _encode_value(self.data)
        )


@dataclass(frozen=True)
class InclusionFee:
    """Base, length and adjusted weight fees that make up the inclusion fee."""

    base_fee: int
    len_fee: int
    adjusted_weight_fee: int

    def __post_init__(self) -> None:
        _unsigned(self.base_fee, "base_fee")
        _unsigned(self.len_fee, "len_fee")
        _unsigned(self.adjusted_weight_fee, "adjusted_weight_fee")

    def inclusion_fee(self) -> int:
        """Saturating sum of the three fee parts."""
        return _saturating_add(self.base_fee, self.len_fee, self.adjusted_weight_fee)

    def to_json(self) -> dict:
        return {
            "baseFee": self.base_fee,
            "lenFee": self.len_fee,
            "adjustedWeightFee": self.adjusted_weight_fee,
        }

    @classmethod
    def from_json(cls, value: Any) -> InclusionFee:
        obj = _require_object(value, "InclusionFee")
        return cls(
            _unsigned(_field(obj, "baseFee"), "baseFee"),
            _unsigned(_field(obj, "lenFee"), "lenFee"),
            _unsigned(_field(obj, "adjustedWeightFee"), "adjustedWeightFee"),
        )


@dataclass(frozen=True)
class FeeDetails:
    """Optional inclusion fee plus tip; the tip is not part of the JSON form."""

    inclusion_fee: InclusionFee | None = None
    tip: int = 0

    def __post_init__(self) -> None:
        _unsigned(self.tip, "tip")

    def final_fee(self) -> int:
        """Saturating sum of the inclusion fee (zero if absent) and the tip."""
        base = 0 if self.inclusion_fee is None else self.inclusion_fee.inclusion_fee()
        return _saturating_add(base, self.tip)

    def to_json(self) -> dict:
        return {
            "inclusionFee": None
            if self.inclusion_fee is None
            else self.inclusion_fee.to_json()
        }

    @classmethod
    def from_json(cls, value: Any) -> FeeDetails:
        obj = _require_object(value, "FeeDetails")
        raw = obj.get("inclusionFee")
        return cls(None if raw is None else InclusionFee.from_json(raw))


class DispatchClass(enum.Enum):
    """A generalized group of dispatch types."""

    NORMAL = "normal"
    OPERATIONAL = "operational"
    MANDATORY = "mandatory"

    @classmethod
    def all(cls) -> tuple[DispatchClass, ...]:
        """All dispatch classes."""
        return (cls.NORMAL, cls.OPERATIONAL, cls.MANDATORY)

    @classmethod
    def non_mandatory(cls) -> tuple[DispatchClass, ...]:
        """All dispatch classes except ``MANDATORY``."""
        return (cls.NORMAL, cls.OPERATIONAL)

    def to_json(self) -> str:
        return self.value

    @classmethod
    def from_json(cls, value: Any) -> DispatchClass:
        for member in cls:
            if member.value == value:
                return member
        raise ValueError(
            f"unknown variant {value!r}, expected one of `normal`, `operational`, `mandatory`"
        )


@dataclass(frozen=True)
class RuntimeDispatchInfo:
    """Weight, class and partial fee of a dispatchable; the fee serializes as a string."""

    weight: Any = field(default_factory=OldWeight)
    dispatch_class: DispatchClass = DispatchClass.NORMAL
    partial_fee: int = 0

    def __post_init__(self) -> None:
        _unsigned(self.partial_fee, "partial_fee")

    def to_json(self) -> dict:
        to_json = getattr(self.weight, "to_json", None)
        weight = to_json() if callable(to_json) else self.weight
        return {
            "weight": weight,
            "class": self.dispatch_class.to_json(),
            "partialFee": str(self.partial_fee),
        }

    @classmethod
    def from_json(cls, value: Any) -> RuntimeDispatchInfo:
        obj = _require_object(value, "RuntimeDispatchInfo")
        fee_text = _field(obj, "partialFee")
        if not isinstance(fee_text, str):
            raise ValueError("partialFee: expected a string")
        if not _UNSIGNED_DECIMAL.fullmatch(fee_text):
            raise ValueError("Parse from string failed")
        return cls(
            OldWeight.from_json(_field(obj, "weight")),
            DispatchClass.from_json(_field(obj, "class")),
            int(fee_text),
        )


_REWARD_KINDS = ("Staked", "Stash", "Controller", "Account", "None")


@dataclass(frozen=True)
class RewardDestination:
    """A destination for staking rewards; ``Account`` carries an account id."""

    kind: str = "Staked"
    account_id: Any = None

    def __post_init__(self) -> None:
        if self.kind not in _REWARD_KINDS:
            raise ValueError(f"unknown reward destination {self.kind!r}")
        if (self.kind == "Account") != (self.account_id is not None):
            raise ValueError("only the Account destination carries an account id")

    @classmethod
    def account(cls, account_id: Any) -> RewardDestination:
        """Pay into the given account."""
        return cls("Account", account_id)

    def encode(self) -> bytes:
        tag = bytes([_REWARD_KINDS.index(self.kind)])
        if self.account_id is None:
            return tag
        return tag + _encode_value(self.account_id)


RewardDestination.STAKED = RewardDestination("Staked")
RewardDestination.STASH = RewardDestination("Stash")
RewardDestination.CONTROLLER = RewardDestination("Controller")
RewardDestination.NONE = RewardDestination("None")


@dataclass(frozen=True)
class Health:
    """Node health as reported over RPC."""

    peers: int
    is_syncing: bool
    should_have_peers: bool

    def __str__(self) -> str:
        return f"{self.peers} peers ({'syncing' if self.is_syncing else 'idle'})"

    def to_json(self) -> dict:
        return {
            "peers": self.peers,
            "isSyncing": self.is_syncing,
            "shouldHavePeers": self.should_have_peers,
        }

    @classmethod
    def from_json(cls, value: Any) -> Health:
        obj = _require_object(value, "Health")
        flags = {}
        for key in ("isSyncing", "shouldHavePeers"):
            flag = _field(obj, key)
            if not isinstance(flag, bool):
                raise ValueError(f"{key}: expected a boolean")
            flags[key] = flag
        return cls(
            _unsigned(_field(obj, "peers"), "peers"),
            flags["isSyncing"],
            flags["shouldHavePeers"],
        )


_CHAIN_TYPES = ("Development", "Local", "Live")


@dataclass(frozen=True)
class ChainType:
    """The type of a chain: Development, Local, Live or a custom name."""

    name: str
    is_custom: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.name, str):
            raise TypeError("chain type name must be a string")
        if not self.is_custom and self.name not in _CHAIN_TYPES:
            raise ValueError(f"unknown chain type {self.name!r}")

    @classmethod
    def custom(cls, name: str) -> ChainType:
        """A custom chain type with the given name."""
        return cls(name, True)

    def to_json(self) -> str | dict:
        if self.is_custom:
            return {"Custom": self.name}
        return self.name

    @classmethod
    def from_json(cls, value: Any) -> ChainType:
        if isinstance(value, str) and value in _CHAIN_TYPES:
            return cls(value)
        if isinstance(value, dict) and len(value) == 1 and "Custom" in value:
            name = value["Custom"]
            if isinstance(name, str):
                return cls.custom(name)
            raise ValueError("Custom: expected a string")
        raise ValueError(
            f"unknown variant {value!r}, expected one of "
            "`Development`, `Local`, `Live`, `Custom`"
        )


ChainType.DEVELOPMENT = ChainType("Development")
ChainType.LOCAL = ChainType("Local")
ChainType.LIVE = ChainType("Live")