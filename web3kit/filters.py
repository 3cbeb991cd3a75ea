"""Log filter queries, filter poll results and transaction-pool filters."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .block_ref import BlockNumber
from .hexutil import ZERO_ADDRESS, decode_big, encode_big, to_address, to_hash

MAX_TOPICS = 4


def _decode_addresses(value: Any) -> list[str]:
    if isinstance(value, str):
        return [to_address(value)]
    if isinstance(value, list):
        if not all(isinstance(item, str) for item in value):
            raise ValueError("invalid addresses in query")
        return [to_address(item) for item in value]
    raise ValueError("invalid addresses in query")


def _decode_topics(value: Any) -> list[list[str]]:
    if not isinstance(value, list):
        raise ValueError("invalid topic(s)")
    if len(value) > MAX_TOPICS:
        raise ValueError("exceed max topics")
    topics: list[list[str]] = []
    for entry in value:
        if entry is None:
            topics.append([])
        elif isinstance(entry, str):
            topics.append([to_hash(entry)])
        elif isinstance(entry, list):
            position: list[str] = []
            for item in entry:
                if item is None:
                    # A null alternative matches anything at this position.
                    position = []
                    break
                if not isinstance(item, str):
                    raise ValueError("invalid topic(s)")
                position.append(to_hash(item))
            topics.append(position)
        else:
            raise ValueError("invalid topic(s)")
    return topics


@dataclass
class FilterQuery:
    """Options for log filtering."""

    block_hash: str | None = None
    from_block: BlockNumber | None = None
    to_block: BlockNumber | None = None
    addresses: list[str] = field(default_factory=list)
    topics: list[list[str]] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.block_hash is not None:
            self.block_hash = to_hash(self.block_hash)
        self.addresses = [to_address(a) for a in self.addresses]
        self.topics = [[to_hash(t) for t in position] for position in self.topics]

    def to_json(self) -> dict[str, Any]:
        """Return the wire form; empty fields are left out."""
        out: dict[str, Any] = {}
        if self.block_hash is not None:
            out["blockHash"] = self.block_hash
        if self.from_block is not None:
            out["fromBlock"] = self.from_block.to_json()
        if self.to_block is not None:
            out["toBlock"] = self.to_block.to_json()
        if self.addresses:
            out["address"] = list(self.addresses)
        if self.topics:
            out["topics"] = [list(position) for position in self.topics]
        return out

    @classmethod
    def from_json(cls, data: Any) -> FilterQuery:
        """Parse filter criteria as a node accepts them."""
        try:
            if not isinstance(data, dict):
                raise ValueError(f"expected JSON object, got {type(data).__name__}")
            raw_hash = data.get("blockHash")
            raw_from = data.get("fromBlock")
            raw_to = data.get("toBlock")
            if raw_hash is not None and (raw_from is not None or raw_to is not None):
                raise ValueError(
                    "cannot specify both BlockHash and FromBlock/ToBlock, choose one or the other"
                )
            raw_addresses = data.get("address")
            raw_topics = data.get("topics")
            return cls(
                block_hash=None if raw_hash is None else to_hash(raw_hash),
                from_block=None if raw_from is None else BlockNumber.from_json(raw_from),
                to_block=None if raw_to is None else BlockNumber.from_json(raw_to),
                addresses=[] if raw_addresses is None else _decode_addresses(raw_addresses),
                topics=[] if raw_topics is None else _decode_topics(raw_topics),
            )
        except ValueError as exc:
            raise ValueError(f"failed to unmarshal filter criteria: {exc}") from exc


@dataclass
class FilterChanges:
    """Result of polling a filter: either logs or hashes."""

    logs: list[dict[str, Any]] | None = None
    hashes: list[str] | None = None

    def to_json(self) -> list[Any] | None:
        """Return the logs if set, else the hashes, else null."""
        if self.logs is not None:
            return [dict(log) for log in self.logs]
        if self.hashes is not None:
            return list(self.hashes)
        return None

    @classmethod
    def from_json(cls, data: Any) -> FilterChanges:
        """Parse a list of logs or a list of hashes."""
        if data is None:
            return cls()
        if isinstance(data, list):
            if all(isinstance(item, dict) for item in data):
                return cls(logs=[dict(item) for item in data])
            if all(isinstance(item, str) for item in data):
                try:
                    return cls(hashes=[to_hash(item) for item in data])
                except ValueError:
                    pass
        raise ValueError(f"failed to unmarshal filter changes by {data!r}")


@dataclass
class SenderArgument:
    """Matches transactions by sender."""

    eq: str = ZERO_ADDRESS

    def __post_init__(self) -> None:
        self.eq = to_address(self.eq)

    def to_json(self) -> dict[str, Any]:
        return {"eq": self.eq}


@dataclass
class ActionArgument:
    """Matches transactions by recipient or by action kind."""

    eq: str = ZERO_ADDRESS
    action: str = ""

    def __post_init__(self) -> None:
        self.eq = to_address(self.eq)

    def to_json(self) -> dict[str, Any]:
        out: dict[str, Any] = {"eq": self.eq}
        if self.action:
            out["action"] = self.action
        return out


@dataclass
class ValueFilterArgument:
    """Matches a numeric field by equality or bounds."""

    eq: int | None = None
    lt: int | None = None
    gt: int | None = None

    def to_json(self) -> dict[str, Any]:
        bounds = {"eq": self.eq, "lt": self.lt, "gt": self.gt}
        return {key: encode_big(value) for key, value in bounds.items() if value is not None}

    @classmethod
    def from_json(cls, data: Any) -> ValueFilterArgument:
        if not isinstance(data, dict):
            raise ValueError(f"expected JSON object, got {type(data).__name__}")
        return cls(**{
            key: decode_big(data[key]) for key in ("eq", "lt", "gt") if data.get(key) is not None
        })


def _or_none(argument: Any) -> Any:
    return None if argument is None else argument.to_json()


@dataclass
class TransactionFilter:
    """Criteria for selecting pending transactions."""

    sender: SenderArgument | None = None
    to: ActionArgument | None = None
    gas: ValueFilterArgument | None = None
    gas_price: ValueFilterArgument | None = None
    value: ValueFilterArgument | None = None
    nonce: ValueFilterArgument | None = None

    def to_json(self) -> dict[str, Any]:
        return {
            "from": _or_none(self.sender),
            "to": _or_none(self.to),
            "gas": _or_none(self.gas),
            "gasPrice": _or_none(self.gas_price),
            "value": _or_none(self.value),
            "nonce": _or_none(self.nonce),
        }