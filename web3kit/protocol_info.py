"""Information about the eth sub-protocol spoken with a peer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .hexutil import decode_big, encode_big

_UINT32_MAX = (1 << 32) - 1


@dataclass
class EthProtocolInfo:
    """Protocol version, total difficulty and head reported by a peer."""

    version: int = 0
    difficulty: int | None = None
    head: str = ""

    def to_json(self) -> dict[str, Any]:
        return {
            "version": self.version,
            "difficulty": None if self.difficulty is None else encode_big(self.difficulty),
            "head": self.head,
        }

    @classmethod
    def from_json(cls, data: Any) -> EthProtocolInfo:
        """Build from the wire form; absent fields keep their defaults."""
        if not isinstance(data, dict):
            raise ValueError(f"expected JSON object, got {type(data).__name__}")
        info = cls()
        version = data.get("version")
        if version is not None:
            if isinstance(version, bool) or not isinstance(version, int):
                raise ValueError(f"version must be an integer, got {version!r}")
            if not 0 <= version <= _UINT32_MAX:
                raise ValueError(f"version out of range: {version}")
            info.version = version
        difficulty = data.get("difficulty")
        if difficulty is not None:
            info.difficulty = decode_big(difficulty)
        head = data.get("head")
        if head is not None:
            if not isinstance(head, str):
                raise ValueError(f"head must be a string, got {head!r}")
            info.head = head
        return info