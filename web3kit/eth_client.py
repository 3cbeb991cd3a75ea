"""Typed wrappers for the eth, net and web3 JSON-RPC namespaces."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from .block_ref import BlockNumber, BlockNumberOrHash, resolve_block
from .call_request import CallRequest
from .filters import FilterQuery
from .hexutil import (
    ZERO_ADDRESS,
    ZERO_HASH,
    decode_big,
    decode_bytes,
    decode_uint64,
    encode_big,
    encode_uint64,
    to_address,
    to_hash,
)
from .pending import AccountPendingTransactions
from .provider import BaseClient

BlockRef = BlockNumberOrHash | BlockNumber | None


def _big(value: Any) -> int | None:
    return None if value is None else decode_big(value)


def _uint64(value: Any) -> int | None:
    return None if value is None else decode_uint64(value)


def _text(value: Any) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"expected string result, got {type(value).__name__}")
    return value


def _flag(value: Any) -> bool:
    if value is None:
        return False
    if not isinstance(value, bool):
        raise ValueError(f"expected boolean result, got {type(value).__name__}")
    return value


def _data(value: Any) -> bytes:
    return b"" if value is None else decode_bytes(value)


def _address(value: Any) -> str:
    return ZERO_ADDRESS if value is None else to_address(value)


def _hash(value: Any) -> str:
    return ZERO_HASH if value is None else to_hash(value)


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


def _block_number(value: BlockNumber | int) -> BlockNumber:
    if isinstance(value, BlockNumber):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return BlockNumber(value)
    raise TypeError(f"expected BlockNumber or int, got {type(value).__name__}")


class EthClient(BaseClient):
    """Client for the eth namespace and the version queries of net and web3."""

    def client_version(self) -> str:
        return _text(self.request("web3_clientVersion"))

    def net_version(self) -> str:
        return _text(self.request("net_version"))

    def protocol_version(self) -> str:
        """Protocol version, encoded as a string."""
        return _text(self.request("eth_protocolVersion"))

    def syncing(self) -> bool | dict[str, Any]:
        """False when in sync, else an object describing the sync progress."""
        result = self.request("eth_syncing")
        if result is None:
            return False
        if isinstance(result, (bool, dict)):
            return result
        raise ValueError(f"unexpected sync status: {result!r}")

    def hashrate(self) -> int | None:
        """Hashes per second the node is mining with."""
        return _big(self.request("eth_hashrate"))

    def author(self) -> str:
        """The block author (coinbase) address."""
        return _address(self.request("eth_coinbase"))

    def is_mining(self) -> bool:
        return _flag(self.request("eth_mining"))

    def chain_id(self) -> int | None:
        """Chain id used for signing at the best block, or None if unavailable."""
        return _uint64(self.request("eth_chainId"))

    def gas_price(self) -> int | None:
        return _big(self.request("eth_gasPrice"))

    def max_priority_fee_per_gas(self) -> int | None:
        return _big(self.request("eth_maxPriorityFeePerGas"))

    def fee_history(
        self,
        block_count: int,
        last_block: BlockNumber | int,
        reward_percentiles: Iterable[float] | None,
    ) -> dict[str, Any] | None:
        percentiles = None if reward_percentiles is None else list(reward_percentiles)
        return _object(self.request(
            "eth_feeHistory", encode_uint64(block_count), _block_number(last_block), percentiles
        ))

    def accounts(self) -> list[str]:
        return [to_address(a) for a in _list(self.request("eth_accounts"))]

    def block_number(self) -> int | None:
        """Height of the highest block."""
        return _big(self.request("eth_blockNumber"))

    def balance(self, address: str, block: BlockRef = None) -> int | None:
        return _big(self.request("eth_getBalance", to_address(address), resolve_block(block)))

    def storage_at(self, address: str, location: int | None, block: BlockRef = None) -> str:
        slot = None if location is None else encode_big(location)
        return _hash(self.request(
            "eth_getStorageAt", to_address(address), slot, resolve_block(block)
        ))

    def block_by_hash(self, block_hash: str, is_full: bool) -> dict[str, Any] | None:
        return _object(self.request("eth_getBlockByHash", to_hash(block_hash), bool(is_full)))

    def block_by_number(
        self, block_number: BlockNumber | int, is_full: bool
    ) -> dict[str, Any] | None:
        return _object(self.request(
            "eth_getBlockByNumber", _block_number(block_number), bool(is_full)
        ))

    def block_receipts(self, block: BlockRef = None) -> list[dict[str, Any] | None]:
        """Receipts of every transaction in a block."""
        return _list(self.request("eth_getBlockReceipts", resolve_block(block)))

    def transaction_count(self, address: str, block: BlockRef = None) -> int | None:
        """Number of transactions sent from address as of the given block."""
        return _big(self.request(
            "eth_getTransactionCount", to_address(address), resolve_block(block)
        ))

    def block_transaction_count_by_hash(self, block_hash: str) -> int | None:
        return _big(self.request("eth_getBlockTransactionCountByHash", to_hash(block_hash)))

    def block_transaction_count_by_number(self, block_number: BlockNumber | int) -> int | None:
        return _big(self.request(
            "eth_getBlockTransactionCountByNumber", _block_number(block_number)
        ))

    def block_uncles_count_by_hash(self, block_hash: str) -> int | None:
        return _big(self.request("eth_getUncleCountByBlockHash", to_hash(block_hash)))

    def block_uncles_count_by_number(self, block_number: BlockNumber | int) -> int | None:
        return _big(self.request("eth_getUncleCountByBlockNumber", _block_number(block_number)))

    def code_at(self, address: str, block: BlockRef = None) -> bytes:
        return _data(self.request("eth_getCode", to_address(address), resolve_block(block)))

    def send_raw_transaction(self, raw_tx: bytes) -> str:
        """Submit a signed transaction; return its hash."""
        return _hash(self.request("eth_sendRawTransaction", bytes(raw_tx)))

    def submit_transaction(self, raw_tx: bytes) -> str:
        """Alias of send_raw_transaction on nodes that offer it."""
        return _hash(self.request("eth_submitTransaction", bytes(raw_tx)))

    def call(self, call_request: CallRequest, block: BlockRef = None) -> bytes:
        """Execute a call without creating a transaction; return its output."""
        return _data(self.request("eth_call", call_request, resolve_block(block)))

    def estimate_gas(self, call_request: CallRequest, block: BlockRef = None) -> int | None:
        return _big(self.request("eth_estimateGas", call_request, resolve_block(block)))

    def transaction_by_hash(self, tx_hash: str) -> dict[str, Any] | None:
        return _object(self.request("eth_getTransactionByHash", to_hash(tx_hash)))

    def transaction_by_block_hash_and_index(
        self, block_hash: str, index: int
    ) -> dict[str, Any] | None:
        return _object(self.request(
            "eth_getTransactionByBlockHashAndIndex", to_hash(block_hash), encode_uint64(index)
        ))

    def transaction_by_block_number_and_index(
        self, block_number: BlockNumber | int, index: int
    ) -> dict[str, Any] | None:
        return _object(self.request(
            "eth_getTransactionByBlockNumberAndIndex",
            _block_number(block_number),
            encode_uint64(index),
        ))

    def transaction_receipt(self, tx_hash: str) -> dict[str, Any] | None:
        return _object(self.request("eth_getTransactionReceipt", to_hash(tx_hash)))

    def account_pending_transactions(
        self, address: str, start_nonce: int | None = None, limit: int | None = None
    ) -> AccountPendingTransactions | None:
        """Pending transactions of an account, on nodes that support it."""
        result = self.request(
            "eth_getAccountPendingTransactions", to_address(address), start_nonce, limit
        )
        return None if result is None else AccountPendingTransactions.from_json(result)

    def uncle_by_block_hash_and_index(
        self, block_hash: str, index: int
    ) -> dict[str, Any] | None:
        return _object(self.request(
            "eth_getUncleByBlockHashAndIndex", to_hash(block_hash), encode_uint64(index)
        ))

    def uncle_by_block_number_and_index(
        self, block_number: BlockNumber | int, index: int
    ) -> dict[str, Any] | None:
        # The index goes out as a plain JSON number here.
        return _object(self.request(
            "eth_getUncleByBlockNumberAndIndex", _block_number(block_number), index
        ))

    def logs(self, log_filter: FilterQuery) -> list[dict[str, Any]]:
        """Logs matching the filter."""
        return _list(self.request("eth_getLogs", log_filter))

    def submit_hashrate(self, rate: int | None, id: str) -> bool:
        """Report a mining hashrate for the given client id."""
        encoded = None if rate is None else encode_big(rate)
        return _flag(self.request("eth_submitHashrate", encoded, to_hash(id)))