[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "web3kit"
version = "0.1.0"
description = "Typed JSON-RPC client, message signers and keystore tools for Ethereum-compatible nodes"
requires-python = ">=3.10"
dependencies = [
    "pycryptodome",
]
keywords = ["ethereum", "json-rpc", "web3", "keystore", "signer", "trace", "parity"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["web3kit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
