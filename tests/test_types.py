import json

import pytest
from hypothesis import given
from hypothesis import strategies as st

from substrate_primitives.scale import encode_u32
from substrate_primitives.serde_impls import OldWeight
from substrate_primitives.types import (
    BALANCE_MAX,
    AccountInfo,
    ChainType,
    DispatchClass,
    FeeDetails,
    Health,
    InclusionFee,
    RewardDestination,
    RuntimeDispatchInfo,
)

u32s = st.integers(min_value=0, max_value=(1 << 32) - 1)
balances = st.integers(min_value=0, max_value=BALANCE_MAX)


@given(u32s, u32s, u32s, u32s, st.binary(max_size=40))
def test_account_info_encoding_layout(nonce, consumers, providers, sufficients, data):
    info = AccountInfo(nonce, consumers, providers, sufficients, data)
    encoded = info.encode()
    assert len(encoded) == 16 + len(data)
    assert encoded[:4] == encode_u32(nonce)
    assert encoded[12:16] == encode_u32(sufficients)
    assert encoded[16:] == data


def test_account_info_uses_data_encode():
    info = AccountInfo(data=OldWeight(7))
    assert info.encode()[16:] == OldWeight(7).encode()


def test_account_info_rejects_unencodable_data():
    with pytest.raises(TypeError):
        AccountInfo(data="text").encode()


def test_inclusion_fee_saturates():
    fee = InclusionFee(BALANCE_MAX, 5, 5)
    assert fee.inclusion_fee() == BALANCE_MAX


@given(balances, balances, balances)
def test_inclusion_fee_bounds(a, b, c):
    total = InclusionFee(a, b, c).inclusion_fee()
    assert max(a, b, c) <= total <= BALANCE_MAX


@given(balances, balances, balances)
def test_inclusion_fee_json_round_trip(a, b, c):
    fee = InclusionFee(a, b, c)
    assert InclusionFee.from_json(json.loads(json.dumps(fee.to_json()))) == fee


def test_inclusion_fee_json_keys():
    assert set(InclusionFee(1, 2, 3).to_json()) == {"baseFee", "lenFee", "adjustedWeightFee"}


def test_inclusion_fee_missing_field():
    with pytest.raises(ValueError):
        InclusionFee.from_json({"baseFee": 1, "lenFee": 2})


def test_final_fee_without_inclusion_is_tip():
    assert FeeDetails(None, 42).final_fee() == 42


def test_final_fee_adds_tip():
    fee = InclusionFee(10, 20, 30)
    details = FeeDetails(fee, 4)
    assert details.final_fee() == fee.inclusion_fee() + 4
    assert FeeDetails(InclusionFee(BALANCE_MAX, 0, 0), 1).final_fee() == BALANCE_MAX


def test_fee_details_json_skips_tip():
    details = FeeDetails(InclusionFee(1, 2, 3), 99)
    data = details.to_json()
    assert "tip" not in data
    back = FeeDetails.from_json(data)
    assert back.tip == 0
    assert back.inclusion_fee == details.inclusion_fee


def test_fee_details_missing_inclusion_is_none():
    assert FeeDetails.from_json({}).inclusion_fee is None


def test_dispatch_class_sets():
    assert DispatchClass.all() == (
        DispatchClass.NORMAL,
        DispatchClass.OPERATIONAL,
        DispatchClass.MANDATORY,
    )
    assert DispatchClass.MANDATORY not in DispatchClass.non_mandatory()
    assert set(DispatchClass.non_mandatory()) < set(DispatchClass.all())


@pytest.mark.parametrize("member", list(DispatchClass))
def test_dispatch_class_json_round_trip(member):
    assert DispatchClass.from_json(member.to_json()) is member


def test_dispatch_class_camel_case():
    assert DispatchClass.OPERATIONAL.to_json() == "operational"
    with pytest.raises(ValueError):
        DispatchClass.from_json("Normal")


def test_runtime_dispatch_info_defaults():
    info = RuntimeDispatchInfo()
    assert info.dispatch_class is DispatchClass.NORMAL
    assert info.partial_fee == 0
    assert info.weight == OldWeight(0)


@given(st.integers(min_value=0, max_value=(1 << 64) - 1), balances, st.sampled_from(list(DispatchClass)))
def test_runtime_dispatch_info_round_trip(weight, fee, cls):
    info = RuntimeDispatchInfo(OldWeight(weight), cls, fee)
    data = json.loads(json.dumps(info.to_json()))
    assert data["partialFee"] == str(fee)
    assert RuntimeDispatchInfo.from_json(data) == info


@pytest.mark.parametrize("bad", ["abc", "-1", "", 12])
def test_runtime_dispatch_info_bad_fee(bad):
    with pytest.raises(ValueError):
        RuntimeDispatchInfo.from_json({"weight": 1, "class": "normal", "partialFee": bad})


def test_reward_destination_default_and_tags():
    assert RewardDestination() == RewardDestination.STAKED
    assert RewardDestination.STAKED.encode() == b"\x00"
    assert RewardDestination.NONE.encode()[0] == 4


def test_reward_destination_account_encoding():
    account = bytes(range(32))
    encoded = RewardDestination.account(account).encode()
    assert encoded[0] == 3
    assert encoded[1:] == account


def test_reward_destination_validation():
    with pytest.raises(ValueError):
        RewardDestination("Account")
    with pytest.raises(ValueError):
        RewardDestination("Stash", b"\x01")
    with pytest.raises(ValueError):
        RewardDestination("Elsewhere")


def test_health_display():
    assert str(Health(5, True, True)) == "5 peers (syncing)"
    assert str(Health(0, False, False)) == "0 peers (idle)"


@given(st.integers(min_value=0, max_value=10**6), st.booleans(), st.booleans())
def test_health_json_round_trip(peers, syncing, should):
    health = Health(peers, syncing, should)
    data = health.to_json()
    assert data["isSyncing"] is syncing
    assert Health.from_json(data) == health


def test_health_rejects_non_bool():
    with pytest.raises(ValueError):
        Health.from_json({"peers": 1, "isSyncing": 1, "shouldHavePeers": True})


@pytest.mark.parametrize(
    "chain", [ChainType.DEVELOPMENT, ChainType.LOCAL, ChainType.LIVE, ChainType.custom("mine")]
)
def test_chain_type_round_trip(chain):
    assert ChainType.from_json(json.loads(json.dumps(chain.to_json()))) == chain


def test_chain_type_json_forms():
    assert ChainType.LIVE.to_json() == "Live"
    assert ChainType.custom("mine").to_json() == {"Custom": "mine"}


def test_chain_type_errors():
    with pytest.raises(ValueError):
        ChainType.from_json("live")
    with pytest.raises(ValueError):
        ChainType.from_json({"Custom": 3})
    with pytest.raises(ValueError):
        ChainType("Other")