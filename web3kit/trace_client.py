"""Typed wrappers for the trace JSON-RPC namespace."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from .block_ref import BlockNumber, BlockNumberOrHash, resolve_block
from .call_request import CallRequest
from .hexutil import to_hash
from .provider import BaseClient

BlockRef = BlockNumberOrHash | BlockNumber | None


def _object(value: Any) -> dict[str, Any] | None:
    if value is not None and not isinstance(value, dict):
        raise ValueError(f"expected object result, got {type(value).__name__}")
    return value


def _list(value: Any) -> list[Any]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f"expected list result, got {type(value).__name__}")
    return value


def _options(options: Any) -> Any:
    if options is None or isinstance(options, Mapping) or hasattr(options, "to_json"):
        return options
    return list(options)


def _required_block(block: BlockNumberOrHash | BlockNumber) -> BlockNumberOrHash:
    if block is None:
        raise TypeError("a block reference is required")
    return resolve_block(block)


def _indexes(indexes: Iterable[int]) -> list[int]:
    values = list(indexes)
    for value in values:
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise ValueError(f"trace index must be a non-negative integer, got {value!r}")
    return values


class TraceClient(BaseClient):
    """Client for transaction and block tracing."""

    def filter(self, trace_filter: Any) -> list[dict[str, Any]]:
        """Traces matching the filter."""
        return _list(self.request("trace_filter", trace_filter))

    def trace(self, transaction_hash: str, indexes: Iterable[int]) -> dict[str, Any] | None:
        """The trace of a transaction at the given position."""
        return _object(self.request("trace_get", to_hash(transaction_hash), _indexes(indexes)))

    def transactions(self, transaction_hash: str) -> list[dict[str, Any]]:
        """All traces of a transaction."""
        return _list(self.request("trace_transaction", to_hash(transaction_hash)))

    def blocks(self, block: BlockNumberOrHash | BlockNumber) -> list[dict[str, Any]]:
        """All traces produced in a block."""
        return _list(self.request("trace_block", _required_block(block)))

    def call(
        self, request: CallRequest, options: Any, block: BlockRef = None
    ) -> dict[str, Any] | None:
        """Execute a call and return the requested kinds of trace."""
        return _object(self.request(
            "trace_call", request, _options(options), resolve_block(block)
        ))

    def raw_transaction(
        self, raw_transaction: bytes, options: Any, block: BlockRef = None
    ) -> dict[str, Any] | None:
        """Execute a signed transaction and return the requested kinds of trace."""
        return _object(self.request(
            "trace_rawTransaction", bytes(raw_transaction), _options(options), resolve_block(block)
        ))

    def replay_transaction(self, transaction_hash: str, options: Any) -> dict[str, Any] | None:
        """Replay a mined transaction and return the requested kinds of trace."""
        return _object(self.request(
            "trace_replayTransaction", to_hash(transaction_hash), _options(options)
        ))

    def replay_block_transactions(
        self, block: BlockNumberOrHash | BlockNumber, options: Any
    ) -> list[dict[str, Any]]:
        """Replay every transaction of a block; one result per transaction."""
        return _list(self.request(
            "trace_replayBlockTransactions", _required_block(block), _options(options)
        ))