"""Gas fee suggestions gathered from a node."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Protocol

from .block_ref import BlockNumber
from .hexutil import decode_big


class _FeeReader(Protocol):
    def gas_price(self) -> int: ...

    def block_by_number(self, block_number: BlockNumber, is_full: bool) -> Any: ...

    def max_priority_fee_per_gas(self) -> int: ...


@dataclass
class GasFeeData:
    """Suggested legacy gas price and, where supported, EIP-1559 fees."""

    gas_price: int | None = None
    max_fee_per_gas: int | None = None
    max_priority_fee_per_gas: int | None = None

    def supports_eip1559(self) -> bool:
        """True when both dynamic-fee values are known."""
        return self.max_priority_fee_per_gas is not None and self.max_fee_per_gas is not None


def _base_fee(block: Any) -> int | None:
    if isinstance(block, Mapping):
        value = block.get("baseFeePerGas")
    else:
        value = getattr(block, "base_fee_per_gas", None)
    if isinstance(value, str):
        return decode_big(value)
    return value


def get_fee_data(reader: _FeeReader) -> GasFeeData:
    """Query gas price, and dynamic fees when the latest block has a base fee."""
    data = GasFeeData(gas_price=reader.gas_price())
    base_fee = _base_fee(reader.block_by_number(BlockNumber.LATEST, False))
    if base_fee is None:
        return data
    priority_fee = reader.max_priority_fee_per_gas()
    data.max_priority_fee_per_gas = priority_fee
    data.max_fee_per_gas = base_fee * 2 + priority_fee
    return data