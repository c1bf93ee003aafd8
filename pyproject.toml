[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "substrate_primitives"
version = "0.1.0"
description = "SCALE-encoded extrinsics, signed extras and RPC data types for Substrate-based chains"
requires-python = ">=3.10"
dependencies = []
keywords = ["substrate", "polkadot", "scale", "extrinsic", "rpc", "blockchain"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest", "hypothesis"]

[tool.hatch.build.targets.wheel]
packages = ["substrate_primitives"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
