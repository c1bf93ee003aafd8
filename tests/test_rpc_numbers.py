import pytest
from hypothesis import given
from hypothesis import strategies as st

from substrate_primitives.rpc_numbers import NumberOrHex, TryFromIntError


def test_default_is_number_zero():
    assert NumberOrHex() == NumberOrHex.number(0)


def test_into_u256_number_and_hex():
    assert NumberOrHex.number(42).into_u256() == 42
    assert NumberOrHex.hex(2**200).into_u256() == 2**200


def test_narrowing_within_range():
    assert NumberOrHex.hex(2**100).to_u128() == 2**100
    assert NumberOrHex.number(2**40).to_u64() == 2**40
    assert NumberOrHex.number(2**32 - 1).to_u32() == 2**32 - 1


def test_to_u32_out_of_range():
    with pytest.raises(TryFromIntError):
        NumberOrHex.number(2**32).to_u32()


def test_to_u64_out_of_range():
    with pytest.raises(TryFromIntError):
        NumberOrHex.hex(2**64).to_u64()


def test_to_u128_out_of_range():
    with pytest.raises(TryFromIntError):
        NumberOrHex.hex(2**128).to_u128()


@pytest.mark.parametrize("value", [-1, 2**64])
def test_number_bounds(value):
    with pytest.raises(ValueError):
        NumberOrHex.number(value)


def test_hex_bounds():
    with pytest.raises(ValueError):
        NumberOrHex.hex(2**256)


def test_hex_json_pinned():
    assert NumberOrHex.hex(255).to_json() == "0xff"
    assert NumberOrHex.hex(0).to_json() == "0x0"


def test_number_json_is_plain_int():
    assert NumberOrHex.number(12345).to_json() == 12345


@given(st.integers(min_value=0, max_value=2**64 - 1))
def test_number_json_round_trip(value):
    num = NumberOrHex.number(value)
    assert NumberOrHex.from_json(num.to_json()) == num


@given(st.integers(min_value=0, max_value=2**256 - 1))
def test_hex_json_round_trip(value):
    num = NumberOrHex.hex(value)
    assert NumberOrHex.from_json(num.to_json()) == num


def test_from_json_upper_case_hex():
    assert NumberOrHex.from_json("0xFF") == NumberOrHex.hex(255)


@pytest.mark.parametrize("value", ["ff", "0x", "0xzz", "0x" + "1" * 65, True, -5, 2**64, 1.5, None])
def test_from_json_rejects(value):
    with pytest.raises(ValueError):
        NumberOrHex.from_json(value)


def test_int_conversion():
    assert int(NumberOrHex.hex(2**70)) == 2**70