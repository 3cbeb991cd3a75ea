"""Typed wrappers for the parity JSON-RPC namespace."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from .block_ref import BlockNumber, BlockNumberOrHash, resolve_block
from .call_request import CallRequest
from .filters import TransactionFilter
from .hexutil import (
    ZERO_ADDRESS,
    ZERO_HASH,
    decode_big,
    decode_bytes,
    encode_uint64,
    to_address,
    to_hash,
)
from .provider import BaseClient

BlockRef = BlockNumberOrHash | BlockNumber | None


def _big(value: Any) -> int | None:
    return None if value is None else decode_big(value)


def _data(value: Any) -> bytes:
    return b"" if value is None else decode_bytes(value)


def _text(value: Any) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"expected string result, got {type(value).__name__}")
    return value


def _address(value: Any) -> str:
    return ZERO_ADDRESS if value is None else to_address(value)


def _hash(value: Any) -> str:
    return ZERO_HASH if value is None else to_hash(value)


def _object(value: Any) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"expected object result, got {type(value).__name__}")
    return value


def _list(value: Any) -> list[Any]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f"expected list result, got {type(value).__name__}")
    return value


def _unsigned(value: Any, bits: int = 64) -> int:
    """Decode a plain JSON number that must fit an unsigned integer of the given width."""
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"expected integer result, got {value!r}")
    if not 0 <= value < (1 << bits):
        raise ValueError(f"integer result out of range: {value}")
    return value


def _hash_map(value: Any) -> dict[str, Any]:
    return {to_hash(key): item for key, item in _object(value).items()}


class ParityClient(BaseClient):
    """Client for the node administration and queue queries of the parity namespace."""

    def transactions_limit(self) -> int:
        """Current transactions limit."""
        return _unsigned(self.request("parity_transactionsLimit"))

    def extra_data(self) -> bytes:
        """Mining extra data."""
        return _data(self.request("parity_extraData"))

    def gas_floor_target(self) -> int | None:
        return _big(self.request("parity_gasFloorTarget"))

    def gas_ceil_target(self) -> int | None:
        return _big(self.request("parity_gasCeilTarget"))

    def min_gas_price(self) -> int | None:
        """Minimal gas price for a transaction to be queued."""
        return _big(self.request("parity_minGasPrice"))

    def dev_logs(self) -> list[str]:
        """Latest log lines of the node."""
        return [_text(line) for line in _list(self.request("parity_devLogs"))]

    def dev_logs_levels(self) -> str:
        return _text(self.request("parity_devLogsLevels"))

    def net_chain(self) -> str:
        """Chain name; deprecated in favour of chain()."""
        return _text(self.request("parity_netChain"))

    def net_peers(self) -> dict[str, Any]:
        return _object(self.request("parity_netPeers"))

    def net_port(self) -> int:
        return _unsigned(self.request("parity_netPort"), 16)

    def rpc_settings(self) -> dict[str, Any]:
        return _object(self.request("parity_rpcSettings"))

    def node_name(self) -> str:
        return _text(self.request("parity_nodeName"))

    def default_extra_data(self) -> bytes:
        return _data(self.request("parity_defaultExtraData"))

    def gas_price_histogram(self) -> dict[str, Any]:
        """Distribution of gas prices in the latest blocks."""
        return _object(self.request("parity_gasPriceHistogram"))

    def unsigned_transactions_count(self) -> int:
        """Transactions waiting in the signer queue; the node errors if the signer is off."""
        return _unsigned(self.request("parity_unsignedTransactionsCount"))

    def generate_secret_phrase(self) -> str:
        return _text(self.request("parity_generateSecretPhrase"))

    def phrase_to_address(self, phrase: str) -> str:
        """Address a brainwallet seeded with phrase would have."""
        return _address(self.request("parity_phraseToAddress", phrase))

    def registry_address(self) -> str | None:
        result = self.request("parity_registryAddress")
        return None if result is None else to_address(result)

    def list_accounts(
        self, count: int, after: str | None = None, block: BlockRef = None
    ) -> list[str] | None:
        """All addresses if Fat DB is enabled, else None."""
        result = self.request(
            "parity_listAccounts",
            _unsigned(count),
            None if after is None else to_address(after),
            resolve_block(block),
        )
        return None if result is None else [to_address(a) for a in _list(result)]

    def list_storage_keys(
        self, address: str, count: int, after: str | None = None, block: BlockRef = None
    ) -> list[str] | None:
        """All storage keys of address if Fat DB is enabled, else None."""
        result = self.request(
            "parity_listStorageKeys",
            to_address(address),
            _unsigned(count),
            None if after is None else to_hash(after),
            resolve_block(block),
        )
        return None if result is None else [to_hash(k) for k in _list(result)]

    def encrypt_message(self, key: str, phrase: bytes) -> bytes:
        """Encrypt phrase under ECIES with the given public key."""
        return _data(self.request("parity_encryptMessage", key, bytes(phrase)))

    def pending_transactions(
        self, limit: int | None = None, transaction_filter: TransactionFilter | None = None
    ) -> list[dict[str, Any]]:
        """Pending transactions from the queue."""
        return _list(self.request("parity_pendingTransactions", limit, transaction_filter))

    def all_transactions(self) -> list[dict[str, Any]]:
        """Every transaction in the queue, ready or not."""
        return _list(self.request("parity_allTransactions"))

    def all_transaction_hashes(self) -> list[str]:
        return [to_hash(h) for h in _list(self.request("parity_allTransactionHashes"))]

    def future_transactions(self) -> list[dict[str, Any]]:
        return _list(self.request("parity_futureTransactions"))

    def pending_transactions_stats(self) -> dict[str, Any]:
        """Propagation statistics keyed by transaction hash."""
        return _hash_map(self.request("parity_pendingTransactionsStats"))

    def local_transactions(self) -> dict[str, Any]:
        """Local transactions with status details, keyed by transaction hash."""
        return _hash_map(self.request("parity_localTransactions"))

    def ws_url(self) -> str:
        return _text(self.request("parity_wsUrl"))

    def next_nonce(self, address: str) -> int | None:
        """Next nonce for address, counting queued transactions."""
        return _big(self.request("parity_nextNonce", to_address(address)))

    def mode(self) -> str:
        """One of active, passive, dark or offline."""
        return _text(self.request("parity_mode"))

    def chain(self) -> str:
        return _text(self.request("parity_chain"))

    def enode(self) -> str:
        return _text(self.request("parity_enode"))

    def chain_status(self) -> dict[str, Any]:
        return _object(self.request("parity_chainStatus"))

    def node_kind(self) -> dict[str, Any]:
        return _object(self.request("parity_nodeKind"))

    def block_header(self, block: BlockRef = None) -> dict[str, Any]:
        """Header of a block, without uncles and transactions."""
        return _object(self.request("parity_getBlockHeaderByNumber", resolve_block(block)))

    def block_receipts(self, block: BlockRef = None) -> list[dict[str, Any]]:
        """Receipts of a whole block, the latest by default."""
        return _list(self.request("parity_getBlockReceipts", resolve_block(block)))

    def call(self, requests: Iterable[CallRequest], block: BlockRef = None) -> list[bytes]:
        """Execute several calls in sequence; return each output."""
        result = self.request("parity_call", list(requests), resolve_block(block))
        return [decode_bytes(item) for item in _list(result)]

    def submit_work_detail(self, nonce: str, pow_hash: str, mix_hash: str) -> str:
        """Submit a proof-of-work solution; return the block hash."""
        return _hash(self.request(
            "parity_submitWorkDetail", nonce, to_hash(pow_hash), to_hash(mix_hash)
        ))

    def status(self) -> None:
        """Health check: returns when the node is healthy, raises otherwise."""
        self.request("parity_nodeStatus")

    def verify_signature(
        self, is_prefixed: bool, message: bytes, r: str, s: str, v: int
    ) -> dict[str, Any]:
        """Recover the signing account from a signature."""
        return _object(self.request(
            "parity_verifySignature",
            bool(is_prefixed),
            bytes(message),
            to_hash(r),
            to_hash(s),
            encode_uint64(v),
        ))