"""Typed JSON-RPC client, message signers and keystore tools for Ethereum-compatible nodes."""

__version__ = "0.1.0"