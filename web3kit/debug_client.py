"""Typed wrappers for the debug tracing JSON-RPC methods."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from .block_ref import BlockNumber
from .call_request import CallRequest
from .enums import GethTraceType, parse_geth_trace_type
from .hexutil import to_hash
from .provider import BaseClient


@dataclass
class DebugTrace:
    """A trace result together with the shape its tracer produces."""

    trace_type: GethTraceType
    result: Any = None


def trace_type_for(options: Any) -> GethTraceType:
    """The result shape selected by tracing options; the default without options."""
    if options is None:
        return GethTraceType.DEFAULT
    if isinstance(options, Mapping):
        tracer = options.get("tracer", "")
    else:
        tracer = getattr(options, "tracer", "")
    return parse_geth_trace_type(tracer or "")


def _block_number(value: BlockNumber | int) -> BlockNumber:
    if isinstance(value, BlockNumber):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return BlockNumber(value)
    raise TypeError(f"expected BlockNumber or int, got {type(value).__name__}")


def _traces(result: Any, trace_type: GethTraceType) -> list[DebugTrace]:
    if result is None:
        return []
    if not isinstance(result, list):
        raise ValueError(f"expected list result, got {type(result).__name__}")
    return [DebugTrace(trace_type, item) for item in result]


class DebugClient(BaseClient):
    """Client for the debug_trace* methods of geth-compatible nodes."""

    def trace_transaction(self, tx_hash: str, options: Any = None) -> DebugTrace | None:
        """Trace a mined transaction."""
        result = self.request("debug_traceTransaction", to_hash(tx_hash), options)
        return None if result is None else DebugTrace(trace_type_for(options), result)

    def trace_block_by_hash(self, block_hash: str, options: Any = None) -> list[DebugTrace]:
        """Trace every transaction of the block with the given hash."""
        result = self.request("debug_traceBlockByHash", to_hash(block_hash), options)
        return _traces(result, trace_type_for(options))

    def trace_block_by_number(
        self, block_number: BlockNumber | int, options: Any = None
    ) -> list[DebugTrace]:
        """Trace every transaction of the block at the given height."""
        result = self.request("debug_traceBlockByNumber", _block_number(block_number), options)
        return _traces(result, trace_type_for(options))

    def trace_call(
        self,
        request: CallRequest,
        block_number: BlockNumber | int | None = None,
        options: Any = None,
    ) -> DebugTrace | None:
        """Trace a call executed on top of the given block."""
        block = None if block_number is None else _block_number(block_number)
        result = self.request("debug_traceCall", request, block, options)
        return None if result is None else DebugTrace(trace_type_for(options), result)