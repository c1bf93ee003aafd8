"""Builder for positional JSON-RPC parameters."""

from __future__ import annotations

import json
from typing import Any


def _to_jsonable(obj: Any) -> Any:
    to_json = getattr(obj, "to_json", None)
    if callable(to_json):
        return to_json()
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def _serialize(value: Any) -> str:
    return json.dumps(
        value,
        separators=(",", ":"),
        ensure_ascii=False,
        allow_nan=False,
        default=_to_jsonable,
    )


class RpcParams:
    """Collects positional parameters and renders them as a JSON array."""

    def __init__(self) -> None:
        self._items: list[str] = []

    def insert(self, value: Any) -> None:
        """Serialize ``value`` and append it to the parameter list.

        Objects with a ``to_json`` method are serialized through it.
        """
        self._items.append(_serialize(value))

    def insert_with_allocation(self, value: Any) -> None:
        """Same as :meth:`insert`."""
        self.insert(value)

    def build(self) -> str | None:
        """Return the parameters as a JSON array string, or None if none were inserted."""
        if not self._items:
            return None
        return "[" + ",".join(self._items) + "]"

    def to_json_value(self) -> Any:
        """Return the parameters as a parsed JSON value; ``[None]`` when empty."""
        built = self.build()
        if built is None:
            return [None]
        return json.loads(built)

    def __repr__(self) -> str:
        return f"RpcParams({self._items!r})"