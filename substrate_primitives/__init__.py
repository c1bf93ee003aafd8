"""SCALE codec helpers, extrinsic parameters, extrinsics, signing and RPC data types for Substrate nodes."""

__version__ = "0.1.0"

__all__ = [
    "scale",
    "rpc_numbers",
    "rpc_params",
    "extrinsic_params",
    "extrinsics",
    "signer",
    "serde_impls",
    "types",
]