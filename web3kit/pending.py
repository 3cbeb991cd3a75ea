"""Pending-transaction information for a single account."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .enums import PendingReason, TxPoolStatus
from .hexutil import decode_uint64, encode_uint64


def _coerce(enum_cls: type[Enum], value: Any) -> Any:
    try:
        return enum_cls(value)
    except ValueError:
        return value


@dataclass(frozen=True)
class TransactionStatus:
    """Pool status of a transaction, with the reason when it is pending."""

    status: TxPoolStatus | str
    pending_reason: PendingReason | str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "status", _coerce(TxPoolStatus, self.status))
        if self.pending_reason is not None:
            object.__setattr__(
                self, "pending_reason", _coerce(PendingReason, self.pending_reason)
            )

    def to_json(self) -> str | dict[str, str]:
        """Return the wire form: a bare string, or an object for pending transactions."""
        if self.status == TxPoolStatus.PENDING:
            reason = "" if self.pending_reason is None else str(self.pending_reason)
            return {"pending": reason}
        return str(self.status)

    @classmethod
    def from_json(cls, data: Any) -> TransactionStatus:
        """Build from the wire form; raise ValueError if it is neither shape."""
        if isinstance(data, str):
            return cls(status=data)
        if isinstance(data, dict):
            reason = data.get("pending")
            if reason is None:
                reason = ""
            if not isinstance(reason, str):
                raise ValueError(f"invalid pending reason: {reason!r}")
            return cls(status=TxPoolStatus.PENDING, pending_reason=reason)
        raise ValueError(f"invalid transaction status: {data!r}")


@dataclass
class AccountPendingTransactions:
    """Pending transactions of an account, with the status of the first one."""

    pending_transactions: list[dict[str, Any]] = field(default_factory=list)
    first_tx_status: TransactionStatus | None = None
    pending_count: int = 0

    def to_json(self) -> dict[str, Any]:
        """Return the wire form as a JSON-ready dict."""
        out: dict[str, Any] = {"pendingTransactions": list(self.pending_transactions)}
        if self.first_tx_status is not None:
            out["firstTxStatus"] = self.first_tx_status.to_json()
        out["pendingCount"] = encode_uint64(self.pending_count)
        return out

    @classmethod
    def from_json(cls, data: Any) -> AccountPendingTransactions:
        """Build from the wire form; absent fields keep their defaults."""
        if not isinstance(data, dict):
            raise ValueError(f"expected JSON object, got {type(data).__name__}")
        result = cls()
        txs = data.get("pendingTransactions")
        if txs is not None:
            if not isinstance(txs, list):
                raise ValueError("pendingTransactions must be a list")
            result.pending_transactions = list(txs)
        status = data.get("firstTxStatus")
        if status is not None:
            result.first_tx_status = TransactionStatus.from_json(status)
        count = data.get("pendingCount")
        if count is not None:
            result.pending_count = decode_uint64(count)
        return result