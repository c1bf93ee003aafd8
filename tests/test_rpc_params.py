import pytest

from substrate_primitives.rpc_numbers import NumberOrHex
from substrate_primitives.rpc_params import RpcParams


def test_default_params_returns_none():
    params = RpcParams()
    assert params.build() is None


def test_insert_single_param_works():
    params = RpcParams()
    params.insert(0)
    assert params.build() == "[0]"


def test_insert_multiple_params_works():
    params = RpcParams()
    params.insert(0)
    params.insert(0)
    assert params.build() == "[0,0]"


def test_insert_with_allocation_multiple_params_works():
    params = RpcParams()
    params.insert_with_allocation(0)
    params.insert_with_allocation(0)
    assert params.build() == "[0,0]"


def test_none_serializes_as_null():
    params = RpcParams()
    params.insert(None)
    assert params.build() == "[null]"


def test_to_json_value_empty():
    assert RpcParams().to_json_value() == [None]


def test_to_json_value_round_trip():
    params = RpcParams()
    values = ["0xab", {"key": [1, 2]}, True, "quote \" inside"]
    for value in values:
        params.insert(value)
    assert params.to_json_value() == values


def test_objects_with_to_json_are_serialized():
    params = RpcParams()
    params.insert(NumberOrHex.hex(255))
    params.insert(NumberOrHex.number(7))
    assert params.to_json_value() == [NumberOrHex.hex(255).to_json(), 7]


def test_unserializable_value_raises():
    params = RpcParams()
    with pytest.raises(TypeError):
        params.insert(object())
    assert params.build() is None


def test_build_is_repeatable():
    params = RpcParams()
    params.insert("a")
    first = params.build()
    second = params.build()
    assert first == '["a"]'
    assert second == '["a"]'