"""Enumerations used by tracing and transaction-pool responses."""

from __future__ import annotations

from enum import Enum, IntEnum


class GethTraceType(IntEnum):
    """Shape of the result returned by a debug trace call."""

    DEFAULT = 0
    CALL = 1
    FOUR_BYTE = 2
    PRE_STATE = 3
    NOOP = 4
    MUX = 5
    JS = 6


class GethDebugBuiltInTracerType(IntEnum):
    """Tracers built into a geth-compatible node."""

    FOUR_BYTE = 0
    CALL = 1
    PRE_STATE = 2
    NOOP = 3
    MUX = 4

    @property
    def tracer_name(self) -> str:
        """The name the node knows this tracer by."""
        return _TRACER_NAMES[self]

    def __str__(self) -> str:
        # The zero value renders as an empty string.
        if self.value == 0:
            return ""
        return _TRACER_NAMES[self]

    def to_geth_trace_type(self) -> GethTraceType:
        """Return the result shape this tracer produces."""
        return _TRACE_TYPES.get(self, GethTraceType.JS)


_TRACER_NAMES = {
    GethDebugBuiltInTracerType.FOUR_BYTE: "4byteTracer",
    GethDebugBuiltInTracerType.CALL: "callTracer",
    GethDebugBuiltInTracerType.PRE_STATE: "prestateTracer",
    GethDebugBuiltInTracerType.NOOP: "noopTracer",
    GethDebugBuiltInTracerType.MUX: "muxTracer",
}

_TRACER_BY_NAME = {name: tracer for tracer, name in _TRACER_NAMES.items()}

_TRACE_TYPES = {
    GethDebugBuiltInTracerType.FOUR_BYTE: GethTraceType.FOUR_BYTE,
    GethDebugBuiltInTracerType.CALL: GethTraceType.CALL,
    GethDebugBuiltInTracerType.PRE_STATE: GethTraceType.PRE_STATE,
    GethDebugBuiltInTracerType.NOOP: GethTraceType.NOOP,
    GethDebugBuiltInTracerType.MUX: GethTraceType.MUX,
}


def parse_geth_debug_builtin_tracer_type(text: str) -> GethDebugBuiltInTracerType:
    """Look up a built-in tracer by name; raise ValueError if unknown."""
    try:
        return _TRACER_BY_NAME[text]
    except KeyError:
        raise ValueError(f"unknown tracer type {text}") from None


def parse_geth_trace_type(tracer: str) -> GethTraceType:
    """Map a tracer name to its result shape; unknown names are JS tracers."""
    try:
        builtin = parse_geth_debug_builtin_tracer_type(tracer)
    except ValueError:
        return GethTraceType.JS
    return builtin.to_geth_trace_type()


class PendingReason(str, Enum):
    """Why a transaction is held back in the pool."""

    FUTURE_NONCE = "futureNonce"
    NOT_ENOUGH_CASH = "notEnoughCash"
    OLD_EPOCH_HEIGHT = "oldEpochHeight"
    OUTDATED_STATUS = "outdatedStatus"

    def __str__(self) -> str:
        return self.value


class TxPoolStatus(str, Enum):
    """State of a transaction in the pool."""

    PACKED = "packed"
    READY = "ready"
    PENDING = "pending"

    def __str__(self) -> str:
        return self.value