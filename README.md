# substrate_primitives

Building blocks for encoding, signing and exchanging data with Substrate and Polkadot nodes. The package uses only the standard library.

## What is in it

- `substrate_primitives.scale` holds the SCALE codec helpers:
  - `encode_compact`, `decode_compact`, `encode_u32`, `encode_vec`, `encode_option` and `encode_with_vec_prefix`.
  - `ScaleReader`, a sequential decoder.
  - `CodecError`, raised on bad input.
- `substrate_primitives.extrinsic_params` holds the values that go into a transaction's signed extra and additional-signed data:
  - `Era` is immortal or mortal. It is SCALE encoded in one or two bytes.
  - `PlainTip` and `AssetTip`. An `AssetTip` may name an asset id with `of_asset`.
  - `GenericSignedExtra` holds the era, the nonce and the tip.
  - `GenericAdditionalParams` is an immutable builder. Its `era(era, checkpoint)` and `tip(tip)` each return a new copy.
  - `GenericExtrinsicParams.new(...)` builds the params. `signed_extra()`, `additional_signed()` and `encode_additional_signed()` read them back.
  - `SignedPayload` gives the bytes to sign through `signing_bytes()`. A payload longer than 256 bytes is hashed with BLAKE2b-256.
- `substrate_primitives.extrinsics` holds `UncheckedExtrinsicV4`. It is a signed or unsigned extrinsic in the version 4 wire format, and its encoding carries a length prefix. Decoding takes caller-supplied decoders for the address, the signature, the extra and the call.
- `substrate_primitives.signer` holds `ExtrinsicSigner`. It wraps any object that matches the `SigningPair` protocol, that is one with `public()` and `sign(payload)`. Optional conversion functions derive the account id, the extrinsic address and the signature type.
- `substrate_primitives.rpc_params` holds `RpcParams`, which builds a positional JSON-RPC parameter array. Objects with a `to_json()` method are serialized through it.
- `substrate_primitives.rpc_numbers` holds `NumberOrHex`. It is a u64 carried as a JSON number, or a U256 carried as a `0x` hex string. `to_u32`, `to_u64` and `to_u128` raise `TryFromIntError` when the value does not fit.
- `substrate_primitives.serde_impls` holds the storage, block and runtime types:
  - `Bytes`, `StorageKey`, `StorageData` and `StorageChangeSet`.
  - `RuntimeVersion`, `Justifications`, `SignedBlock` and `OldWeight`.
  - `FromHexError`, raised on bad hex.

  The byte types serialize as `0x` hex.
- `substrate_primitives.types` holds further node data types:
  - `AccountInfo`.
  - `InclusionFee` and `FeeDetails`, whose sums saturate at the u128 maximum.
  - `DispatchClass` and `RuntimeDispatchInfo`. The partial fee serializes as a decimal string.
  - `RewardDestination`, `Health` and `ChainType`.

Most types offer `to_json()` and `from_json()`. Types with a SCALE form offer `encode()`, and some also offer `decode()`.

## Installation

```
pip install substrate_primitives
```

## Building a signing payload

```python
from substrate_primitives.extrinsic_params import (
    Era, GenericAdditionalParams, GenericExtrinsicParams, SignedPayload,
)

genesis = bytes(32)
additional = GenericAdditionalParams().era(Era.mortal(8, 0), genesis).tip(10)
params = GenericExtrinsicParams.new(100, 1, 0, genesis, additional)

call = bytes([4, 0, 1, 2, 3])
payload = SignedPayload.from_raw(
    call, params.signed_extra(), params.encode_additional_signed()
)
to_sign = payload.signing_bytes()
```

The mortality checkpoint falls back to the genesis hash when none is given.

## Encoding an extrinsic

```python
from substrate_primitives.extrinsics import UncheckedExtrinsicV4

xt = UncheckedExtrinsicV4.new_unsigned(bytes([1, 1, 1]))
xt.encode()  # b'\x10\x04\x01\x01\x01'
```

A part given as `bytes` is taken to be SCALE encoded already. Any other part must provide `encode()`.

## RPC parameters and numbers

```python
from substrate_primitives.rpc_params import RpcParams
from substrate_primitives.rpc_numbers import NumberOrHex

params = RpcParams()
params.insert(0)
params.insert("0x00")
params.build()            # '[0,"0x00"]'
RpcParams().build()       # None

NumberOrHex.from_json("0xff").to_u32()  # 255
NumberOrHex.number(7).to_json()         # 7
```

## What the package does not do

- It has no RPC client, no network transport and no subscriptions. It only builds and parses the data that such a client sends and receives.
- It does not generate keys and does not implement any signature scheme. `ExtrinsicSigner` delegates signing to the key pair you give it.
- It has no runtime metadata handling and no storage key hashing.

## Running the tests

```
pip install -e ".[test]"
pytest
```