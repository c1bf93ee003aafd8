"""Signer that turns a key pair into an account id, an address and signatures."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol


class SigningPair(Protocol):
    """A key pair that exposes its public key and signs payloads."""

    def public(self) -> Any: ...

    def sign(self, payload: bytes) -> Any: ...


class ExtrinsicSigner:
    """Signs extrinsic payloads with a key pair.

    ``to_account_id`` turns the public key into an account id, ``unlookup``
    turns the account id into the extrinsic address and ``to_signature``
    converts the pair's raw signature; each is skipped when not given.
    """

    def __init__(
        self,
        signer: SigningPair,
        to_account_id: Callable[[Any], Any] | None = None,
        unlookup: Callable[[Any], Any] | None = None,
        to_signature: Callable[[Any], Any] | None = None,
    ) -> None:
        self.signer = signer
        self._to_signature = to_signature
        account_id = signer.public()
        if to_account_id is not None:
            account_id = to_account_id(account_id)
        self._account_id = account_id
        address = account_id
        if unlookup is not None:
            address = unlookup(account_id)
        self._extrinsic_address = address

    def sign(self, payload: bytes) -> Any:
        """Sign ``payload`` and return the converted signature."""
        signature = self.signer.sign(bytes(payload))
        if self._to_signature is None:
            return signature
        return self._to_signature(signature)

    def public_account_id(self) -> Any:
        return self._account_id

    def extrinsic_address(self) -> Any:
        return self._extrinsic_address

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ExtrinsicSigner):
            return NotImplemented
        return (
            self.signer == other.signer
            and self._account_id == other._account_id
            and self._extrinsic_address == other._extrinsic_address
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"ExtrinsicSigner(account_id={self._account_id!r})"