"""Trace actions and their results."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable

from .hexutil import ZERO_ADDRESS, decode_big, decode_bytes, encode_big, encode_bytes, to_address


class CallType(str, Enum):
    NONE = "none"
    CALL = "call"
    CALLCODE = "callCode"
    DELEGATECALL = "delegateCall"
    STATICCALL = "staticCall"

    def __str__(self) -> str:
        return self.value


class CreateType(str, Enum):
    NONE = "none"
    CREATE = "create"
    CREATE2 = "create2"

    def __str__(self) -> str:
        return self.value


class RewardType(str, Enum):
    BLOCK = "block"
    UNCLE = "uncle"
    EMPTYSTEP = "emptyStep"
    EXTERNAL = "external"

    def __str__(self) -> str:
        return self.value


def _coerce(enum_cls: type[Enum], value: Any) -> Any:
    try:
        return enum_cls(value)
    except ValueError:
        return value


def _object(data: Any) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise ValueError(f"expected JSON object, got {type(data).__name__}")
    return data


def _fields(data: Any, decoders: dict[str, tuple[str, Callable[[Any], Any]]]) -> dict[str, Any]:
    """Decode the present, non-null keys of a JSON object into keyword arguments."""
    obj = _object(data)
    return {
        attr: decode(obj[key])
        for key, (attr, decode) in decoders.items()
        if obj.get(key) is not None
    }


def _big_or_none(value: int | None) -> str | None:
    return None if value is None else encode_big(value)


def _text(value: Any) -> str:
    if not isinstance(value, str):
        raise ValueError(f"expected string, got {type(value).__name__}")
    return value


@dataclass
class Call:
    """A message call action."""

    from_address: str = ZERO_ADDRESS
    to: str = ZERO_ADDRESS
    value: int | None = None
    gas: int | None = None
    input: bytes = b""
    call_type: CallType | str = ""

    def __post_init__(self) -> None:
        self.from_address = to_address(self.from_address)
        self.to = to_address(self.to)
        self.call_type = _coerce(CallType, self.call_type)

    def to_json(self) -> dict[str, Any]:
        return {
            "from": self.from_address,
            "to": self.to,
            "value": _big_or_none(self.value),
            "gas": _big_or_none(self.gas),
            "input": encode_bytes(self.input),
            "callType": str(self.call_type),
        }

    @classmethod
    def from_json(cls, data: Any) -> Call:
        return cls(**_fields(data, {
            "from": ("from_address", to_address),
            "to": ("to", to_address),
            "value": ("value", decode_big),
            "gas": ("gas", decode_big),
            "input": ("input", decode_bytes),
            "callType": ("call_type", _text),
        }))


@dataclass
class Create:
    """A contract creation action."""

    from_address: str = ZERO_ADDRESS
    value: int | None = None
    gas: int | None = None
    init: bytes = b""
    create_type: CreateType | str | None = None

    def __post_init__(self) -> None:
        self.from_address = to_address(self.from_address)
        if self.create_type is not None:
            self.create_type = _coerce(CreateType, self.create_type)

    def to_json(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "from": self.from_address,
            "value": _big_or_none(self.value),
            "gas": _big_or_none(self.gas),
            "init": encode_bytes(self.init),
        }
        # Some nodes do not report the creation kind.
        if self.create_type is not None:
            out["createType"] = str(self.create_type)
        return out

    @classmethod
    def from_json(cls, data: Any) -> Create:
        return cls(**_fields(data, {
            "from": ("from_address", to_address),
            "value": ("value", decode_big),
            "gas": ("gas", decode_big),
            "init": ("init", decode_bytes),
            "createType": ("create_type", _text),
        }))


@dataclass
class Suicide:
    """A self-destruct action."""

    address: str = ZERO_ADDRESS
    refund_address: str = ZERO_ADDRESS
    balance: int | None = None

    def __post_init__(self) -> None:
        self.address = to_address(self.address)
        self.refund_address = to_address(self.refund_address)

    def to_json(self) -> dict[str, Any]:
        return {
            "address": self.address,
            "refundAddress": self.refund_address,
            "balance": _big_or_none(self.balance),
        }

    @classmethod
    def from_json(cls, data: Any) -> Suicide:
        return cls(**_fields(data, {
            "address": ("address", to_address),
            "refundAddress": ("refund_address", to_address),
            "balance": ("balance", decode_big),
        }))


@dataclass
class Reward:
    """A block or uncle reward action."""

    author: str = ZERO_ADDRESS
    value: int | None = None
    reward_type: RewardType | str = ""

    def __post_init__(self) -> None:
        self.author = to_address(self.author)
        self.reward_type = _coerce(RewardType, self.reward_type)

    def to_json(self) -> dict[str, Any]:
        return {
            "author": self.author,
            "value": _big_or_none(self.value),
            "rewardType": str(self.reward_type),
        }

    @classmethod
    def from_json(cls, data: Any) -> Reward:
        return cls(**_fields(data, {
            "author": ("author", to_address),
            "value": ("value", decode_big),
            "rewardType": ("reward_type", _text),
        }))


@dataclass
class CallResult:
    """Outcome of a call action."""

    gas_used: int | None = None
    output: bytes = b""

    def to_json(self) -> dict[str, Any]:
        return {"gasUsed": _big_or_none(self.gas_used), "output": encode_bytes(self.output)}

    @classmethod
    def from_json(cls, data: Any) -> CallResult:
        return cls(**_fields(data, {
            "gasUsed": ("gas_used", decode_big),
            "output": ("output", decode_bytes),
        }))


@dataclass
class CreateResult:
    """Outcome of a create action."""

    gas_used: int | None = None
    code: bytes = b""
    address: str = ZERO_ADDRESS

    def __post_init__(self) -> None:
        self.address = to_address(self.address)

    def to_json(self) -> dict[str, Any]:
        return {
            "gasUsed": _big_or_none(self.gas_used),
            "code": encode_bytes(self.code),
            "address": self.address,
        }

    @classmethod
    def from_json(cls, data: Any) -> CreateResult:
        return cls(**_fields(data, {
            "gasUsed": ("gas_used", decode_big),
            "code": ("code", decode_bytes),
            "address": ("address", to_address),
        }))