"""Typed wrappers for the polling filter JSON-RPC methods."""

from __future__ import annotations

from typing import Any

from .filters import FilterChanges, FilterQuery
from .provider import BaseClient


def _filter_id(value: Any) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError(f"expected filter id string, got {type(value).__name__}")
    return value


def _require_id(filter_id: str) -> str:
    if not isinstance(filter_id, str):
        raise TypeError(f"filter id must be a string, got {type(filter_id).__name__}")
    return filter_id


class FilterClient(BaseClient):
    """Client for installing, polling and removing filters on the node."""

    def new_log_filter(self, filter_query: FilterQuery | None) -> str | None:
        """Install a log filter; return its id."""
        return _filter_id(self.request("eth_newFilter", filter_query))

    def new_block_filter(self) -> str | None:
        """Install a filter for new blocks; return its id."""
        return _filter_id(self.request("eth_newBlockFilter"))

    def new_pending_transaction_filter(self) -> str | None:
        """Install a filter for new pending transactions; return its id."""
        return _filter_id(self.request("eth_newPendingTransactionFilter"))

    def get_filter_changes(self, filter_id: str) -> FilterChanges | None:
        """Changes since the last poll: logs or hashes."""
        result = self.request("eth_getFilterChanges", _require_id(filter_id))
        return None if result is None else FilterChanges.from_json(result)

    def get_filter_logs(self, filter_id: str) -> list[dict[str, Any]]:
        """All logs matching a log filter."""
        result = self.request("eth_getFilterLogs", _require_id(filter_id))
        if result is None:
            return []
        if not isinstance(result, list):
            raise ValueError(f"expected list result, got {type(result).__name__}")
        return result

    def uninstall_filter(self, filter_id: str) -> bool:
        """Remove a filter; return whether it existed."""
        result = self.request("eth_uninstallFilter", _require_id(filter_id))
        if result is None:
            return False
        if not isinstance(result, bool):
            raise ValueError(f"expected boolean result, got {type(result).__name__}")
        return result