"""Block references: heights, block tags and block hashes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar

from .hexutil import decode_uint64, encode_uint64, to_hash

_INT64_MAX = (1 << 63) - 1
_LOWEST_TAG = -5

_TAG_BY_VALUE = {
    -5: "earliest",
    -4: "safe",
    -3: "finalized",
    -2: "latest",
    -1: "pending",
}
_VALUE_BY_TAG = {tag: value for value, tag in _TAG_BY_VALUE.items()}


@dataclass(frozen=True)
class BlockNumber:
    """A block height, or one of the tags that the node resolves itself."""

    number: int

    EARLIEST: ClassVar[BlockNumber]
    SAFE: ClassVar[BlockNumber]
    FINALIZED: ClassVar[BlockNumber]
    LATEST: ClassVar[BlockNumber]
    PENDING: ClassVar[BlockNumber]

    def __post_init__(self) -> None:
        if isinstance(self.number, bool) or not isinstance(self.number, int):
            raise TypeError(f"block number must be int, got {type(self.number).__name__}")
        if not _LOWEST_TAG <= self.number <= _INT64_MAX:
            raise ValueError(f"invalid block number {self.number}")

    @property
    def is_tag(self) -> bool:
        """True when this is a named tag rather than a concrete height."""
        return self.number < 0

    def to_json(self) -> str:
        """Return the wire form: a tag name or a hex quantity."""
        tag = _TAG_BY_VALUE.get(self.number)
        return tag if tag is not None else encode_uint64(self.number)

    @classmethod
    def from_json(cls, value: Any) -> BlockNumber:
        """Parse a tag name or a hex quantity."""
        if not isinstance(value, str):
            raise ValueError(f"invalid block number: {value!r}")
        text = value.strip()
        tagged = _VALUE_BY_TAG.get(text)
        if tagged is not None:
            return cls(tagged)
        number = decode_uint64(text)
        if number > _INT64_MAX:
            raise ValueError("block number larger than int64")
        return cls(number)

    def __str__(self) -> str:
        return self.to_json()


BlockNumber.EARLIEST = BlockNumber(-5)
BlockNumber.SAFE = BlockNumber(-4)
BlockNumber.FINALIZED = BlockNumber(-3)
BlockNumber.LATEST = BlockNumber(-2)
BlockNumber.PENDING = BlockNumber(-1)

_HASH_TEXT_LENGTH = 66


@dataclass(frozen=True)
class BlockNumberOrHash:
    """Refers to a block either by number (or tag) or by hash."""

    block_number: BlockNumber | None = None
    block_hash: str | None = None
    require_canonical: bool = False

    def __post_init__(self) -> None:
        if self.block_hash is not None:
            object.__setattr__(self, "block_hash", to_hash(self.block_hash))
        if self.block_number is not None and self.block_hash is not None:
            raise ValueError(
                "cannot specify both BlockHash and BlockNumber, choose one or the other"
            )
        if self.block_number is None and self.block_hash is None:
            raise ValueError("either BlockNumber or BlockHash must be specified")

    def to_json(self) -> str | dict[str, Any]:
        """Return the wire form."""
        if self.block_number is not None:
            return self.block_number.to_json()
        if self.require_canonical:
            return {"blockHash": self.block_hash, "requireCanonical": True}
        return self.block_hash  # type: ignore[return-value]

    @classmethod
    def from_json(cls, value: Any) -> BlockNumberOrHash:
        """Parse a number, tag, hash, or an object naming one of them."""
        if isinstance(value, str):
            text = value.strip()
            if len(text) == _HASH_TEXT_LENGTH:
                return cls(block_hash=text)
            return cls(block_number=BlockNumber.from_json(text))
        if isinstance(value, dict):
            canonical = value.get("requireCanonical", False)
            if not isinstance(canonical, bool):
                raise ValueError("requireCanonical must be a boolean")
            raw_number = value.get("blockNumber")
            raw_hash = value.get("blockHash")
            number = None if raw_number is None else BlockNumber.from_json(raw_number)
            return cls(block_number=number, block_hash=raw_hash, require_canonical=canonical)
        raise ValueError(f"invalid block number or hash: {value!r}")


def resolve_block(block: BlockNumberOrHash | BlockNumber | None) -> BlockNumberOrHash:
    """Return the given block reference, defaulting to the latest block."""
    if block is None:
        return BlockNumberOrHash(block_number=BlockNumber.LATEST)
    if isinstance(block, BlockNumber):
        return BlockNumberOrHash(block_number=block)
    return block