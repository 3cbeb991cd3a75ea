"""Parameters of a message call or gas estimation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .hexutil import (
    decode_big,
    decode_bytes,
    decode_uint64,
    encode_big,
    encode_bytes,
    encode_uint64,
    to_address,
    to_hash,
)

_UINT64_MASK = (1 << 64) - 1
_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1
_DIGITS = frozenset("0123456789abcdefABCDEF_")


def _parse_auto_base(text: str) -> int:
    """Parse a signed 64-bit integer whose base is given by its prefix."""
    if not text:
        raise ValueError("invalid syntax: empty string")
    body = text
    negative = body[0] == "-"
    if body[0] in "+-":
        body = body[1:]
    lowered = body.lower()
    if lowered.startswith("0x"):
        base, digits = 16, body[2:]
    elif lowered.startswith("0b"):
        base, digits = 2, body[2:]
    elif lowered.startswith("0o"):
        base, digits = 8, body[2:]
    elif len(body) > 1 and body[0] == "0":
        base, digits = 8, body[1:]
    else:
        base, digits = 10, body
    if not digits or any(c not in _DIGITS for c in digits):
        raise ValueError(f"invalid syntax: {text!r}")
    try:
        value = int(digits, base)
    except ValueError:
        raise ValueError(f"invalid syntax: {text!r}") from None
    if negative:
        value = -value
    if not _INT64_MIN <= value <= _INT64_MAX:
        raise ValueError(f"value out of range: {text!r}")
    return value


def _decode_type(value: Any) -> int:
    if not isinstance(value, str):
        raise ValueError(f"transaction type must be a string, got {type(value).__name__}")
    return _parse_auto_base(value) & _UINT64_MASK


def _normalise_access_list(value: Any) -> list[dict[str, Any]]:
    if not isinstance(value, list):
        raise ValueError("accessList must be a list")
    entries = []
    for entry in value:
        if not isinstance(entry, dict):
            raise ValueError("access list entry must be an object")
        if entry.get("address") is None:
            raise ValueError("missing required field 'address' for AccessTuple")
        keys = entry.get("storageKeys")
        if keys is None:
            raise ValueError("missing required field 'storageKeys' for AccessTuple")
        if not isinstance(keys, list):
            raise ValueError("storageKeys must be a list")
        entries.append(
            {"address": to_address(entry["address"]), "storageKeys": [to_hash(k) for k in keys]}
        )
    return entries


def _authorizations(value: Any) -> list[dict[str, Any]]:
    if not isinstance(value, list) or not all(isinstance(item, dict) for item in value):
        raise ValueError("authorizationList must be a list of objects")
    return [dict(item) for item in value]


_DECODERS = {
    "from": ("from_address", to_address),
    "to": ("to", to_address),
    "gas": ("gas", decode_uint64),
    "gasPrice": ("gas_price", decode_big),
    "maxFeePerGas": ("max_fee_per_gas", decode_big),
    "maxPriorityFeePerGas": ("max_priority_fee_per_gas", decode_big),
    "value": ("value", decode_big),
    "nonce": ("nonce", decode_uint64),
    "data": ("data", decode_bytes),
    "input": ("input", decode_bytes),
    "accessList": ("access_list", _normalise_access_list),
    "authorizationList": ("authorization_list", _authorizations),
    "chainId": ("chain_id", decode_big),
    "type": ("tx_type", _decode_type),
}


@dataclass
class CallRequest:
    """A call or transaction description; unset fields are left out on the wire."""

    from_address: str | None = None
    to: str | None = None
    gas: int | None = None
    gas_price: int | None = None
    max_fee_per_gas: int | None = None
    max_priority_fee_per_gas: int | None = None
    value: int | None = None
    nonce: int | None = None
    data: bytes | None = None
    input: bytes | None = None
    access_list: list[dict[str, Any]] | None = None
    authorization_list: list[dict[str, Any]] | None = None
    chain_id: int | None = None
    tx_type: int | None = None

    def __post_init__(self) -> None:
        if self.from_address is not None:
            self.from_address = to_address(self.from_address)
        if self.to is not None:
            self.to = to_address(self.to)
        if self.data is not None:
            self.data = bytes(self.data)
        if self.input is not None:
            self.input = bytes(self.input)
        if self.access_list is not None:
            self.access_list = _normalise_access_list(self.access_list)
        if self.authorization_list is not None:
            self.authorization_list = _authorizations(self.authorization_list)

    def to_json(self) -> dict[str, Any]:
        """Return the wire form as a JSON-ready dict."""
        out: dict[str, Any] = {}
        if self.from_address is not None:
            out["from"] = self.from_address
        if self.to is not None:
            out["to"] = self.to
        if self.gas is not None:
            out["gas"] = encode_uint64(self.gas)
        if self.gas_price is not None:
            out["gasPrice"] = encode_big(self.gas_price)
        if self.max_fee_per_gas is not None:
            out["maxFeePerGas"] = encode_big(self.max_fee_per_gas)
        if self.max_priority_fee_per_gas is not None:
            out["maxPriorityFeePerGas"] = encode_big(self.max_priority_fee_per_gas)
        if self.value is not None:
            out["value"] = encode_big(self.value)
        if self.nonce is not None:
            out["nonce"] = encode_uint64(self.nonce)
        if self.data:
            out["data"] = encode_bytes(self.data)
        if self.input:
            out["input"] = encode_bytes(self.input)
        if self.access_list is not None:
            out["accessList"] = [
                {"address": e["address"], "storageKeys": list(e["storageKeys"])}
                for e in self.access_list
            ]
        if self.authorization_list:
            out["authorizationList"] = [dict(a) for a in self.authorization_list]
        if self.chain_id is not None:
            out["chainId"] = encode_big(self.chain_id)
        if self.tx_type is not None:
            out["type"] = encode_uint64(self.tx_type)
        return out

    @classmethod
    def from_json(cls, data: Any) -> CallRequest:
        """Build from the wire form; absent or null fields stay unset."""
        if not isinstance(data, dict):
            raise ValueError(f"expected JSON object, got {type(data).__name__}")
        kwargs = {
            attr: decode(data[key])
            for key, (attr, decode) in _DECODERS.items()
            if data.get(key) is not None
        }
        return cls(**kwargs)