import pytest

from web3kit.block_ref import BlockNumber, BlockNumberOrHash
from web3kit.call_request import CallRequest
from web3kit.enums import PendingReason, TxPoolStatus
from web3kit.eth_client import EthClient
from web3kit.filters import FilterQuery
from web3kit.hexutil import (
    HexError,
    ZERO_ADDRESS,
    encode_big,
    encode_bytes,
    encode_uint64,
)
from web3kit.provider import Provider, RpcError

ADDRESS = "0xe6D148D8398c4cb456196C776D2d9093Dd62C9B0"
TX_HASH = "0x6b9a69106704eec878731c00b251c3a67e1fbb561bda279e92ee3f6071da6500"
BLOCK_HASH = "0x92346af4d942871946186ef86c7136ffa45abf1424a605df2723a9ed5694d1f8"


class FakeProvider(Provider):
    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.calls = []

    def call(self, method, *args):
        self.calls.append((method, args))
        if self.error is not None:
            raise self.error
        return self.result


def make(result=None, error=None):
    provider = FakeProvider(result, error)
    return EthClient(provider), provider


@pytest.mark.parametrize(
    "name,method",
    [
        ("hashrate", "eth_hashrate"),
        ("gas_price", "eth_gasPrice"),
        ("max_priority_fee_per_gas", "eth_maxPriorityFeePerGas"),
        ("block_number", "eth_blockNumber"),
    ],
)
def test_quantity_queries_decode_hex(name, method):
    value = 179904465
    client, provider = make(encode_big(value))
    assert getattr(client, name)() == value
    assert provider.calls == [(method, ())]


def test_chain_id_decodes_and_handles_null():
    client, provider = make(encode_uint64(1030))
    assert client.chain_id() == 1030
    assert provider.calls[0][0] == "eth_chainId"
    provider.result = None
    assert client.chain_id() is None


def test_balance_defaults_to_latest_block():
    client, provider = make(encode_big(10**18))
    assert client.balance(ADDRESS) == 10**18
    assert provider.calls == [("eth_getBalance", (ADDRESS.lower(), "latest"))]


def test_transaction_count_with_pending_block():
    client, provider = make(encode_big(3))
    pending = BlockNumberOrHash(block_number=BlockNumber.PENDING)
    assert client.transaction_count(ADDRESS, pending) == 3
    assert provider.calls[0] == ("eth_getTransactionCount", (ADDRESS.lower(), "pending"))


def test_code_at_accepts_block_hash_and_decodes_bytes():
    code = b"\x60\x80\x60\x40"
    client, provider = make(encode_bytes(code))
    ref = BlockNumberOrHash(block_hash=BLOCK_HASH)
    assert client.code_at(ADDRESS, ref) == code
    assert provider.calls[0] == ("eth_getCode", (ADDRESS.lower(), BLOCK_HASH))


def test_code_at_null_is_empty():
    client, _ = make(None)
    assert client.code_at(ADDRESS) == b""


def test_storage_at_encodes_location():
    client, provider = make(TX_HASH)
    assert client.storage_at(ADDRESS, 256) == TX_HASH
    assert provider.calls[0] == ("eth_getStorageAt", (ADDRESS.lower(), encode_big(256), "latest"))


def test_block_by_number_sends_number_and_flag():
    block = {"number": encode_big(5), "hash": BLOCK_HASH}
    client, provider = make(block)
    assert client.block_by_number(BlockNumber(5), True) == block
    assert provider.calls[0] == ("eth_getBlockByNumber", (BlockNumber(5).to_json(), True))


def test_block_by_hash_null_is_none():
    client, provider = make(None)
    assert client.block_by_hash(BLOCK_HASH, False) is None
    assert provider.calls[0] == ("eth_getBlockByHash", (BLOCK_HASH, False))


def test_accounts_are_normalised():
    client, _ = make([ADDRESS])
    assert client.accounts() == [ADDRESS.lower()]


def test_author_null_is_zero_address():
    client, provider = make(None)
    assert client.author() == ZERO_ADDRESS
    assert provider.calls[0][0] == "eth_coinbase"


def test_syncing_false_and_object():
    client, provider = make(False)
    assert client.syncing() is False
    progress = {"currentBlock": encode_big(1)}
    provider.result = progress
    assert client.syncing() == progress


def test_is_mining_rejects_non_boolean():
    client, _ = make("yes")
    with pytest.raises(ValueError):
        client.is_mining()


def test_send_raw_transaction_encodes_payload():
    raw = b"\x02\xf8\x6b"
    client, provider = make(TX_HASH)
    assert client.send_raw_transaction(raw) == TX_HASH
    assert provider.calls[0] == ("eth_sendRawTransaction", (encode_bytes(raw),))


def test_call_sends_request_wire_form():
    output = b"\x00\x01"
    client, provider = make(encode_bytes(output))
    request = CallRequest(to="0x807da62384be660ded0319d613d8b37cf3892d20", gas=21000)
    assert client.call(request) == output
    assert provider.calls[0] == ("eth_call", (request.to_json(), "latest"))


def test_estimate_gas_decodes_result():
    client, provider = make(encode_big(21000))
    request = CallRequest(to=ADDRESS)
    assert client.estimate_gas(request, BlockNumber.PENDING) == 21000
    assert provider.calls[0][1] == (request.to_json(), "pending")


def test_transaction_by_block_hash_and_index_hex_index():
    client, provider = make(None)
    assert client.transaction_by_block_hash_and_index(BLOCK_HASH, 2) is None
    assert provider.calls[0] == (
        "eth_getTransactionByBlockHashAndIndex",
        (BLOCK_HASH, encode_uint64(2)),
    )


def test_uncle_by_block_number_and_index_sends_plain_index():
    client, provider = make(None)
    client.uncle_by_block_number_and_index(BlockNumber.LATEST, 1)
    assert provider.calls[0] == ("eth_getUncleByBlockNumberAndIndex", ("latest", 1))


def test_account_pending_transactions_parses_status():
    wire = {
        "pendingTransactions": [],
        "firstTxStatus": {"pending": "futureNonce"},
        "pendingCount": encode_uint64(1),
    }
    client, provider = make(wire)
    result = client.account_pending_transactions(ADDRESS)
    assert result.pending_count == 1
    assert result.first_tx_status.status == TxPoolStatus.PENDING
    assert result.first_tx_status.pending_reason == PendingReason.FUTURE_NONCE
    assert provider.calls[0] == (
        "eth_getAccountPendingTransactions",
        (ADDRESS.lower(), None, None),
    )


def test_logs_sends_filter_query():
    topic = "0xddf252ad1be2c89b69c2b068fc378daa952ba7f163c4a11628f55a4df523b3ef"
    query = FilterQuery(topics=[[topic]])
    client, provider = make([{"address": ADDRESS.lower()}])
    assert client.logs(query) == [{"address": ADDRESS.lower()}]
    assert provider.calls[0] == ("eth_getLogs", ({"topics": [[topic]]},))


def test_fee_history_arguments():
    history = {"oldestBlock": encode_big(1)}
    client, provider = make(history)
    assert client.fee_history(4, BlockNumber.LATEST, [25.0, 75.0]) == history
    assert provider.calls[0] == ("eth_feeHistory", (encode_uint64(4), "latest", [25.0, 75.0]))


def test_submit_hashrate():
    client, provider = make(True)
    assert client.submit_hashrate(500, TX_HASH) is True
    assert provider.calls[0] == ("eth_submitHashrate", (encode_big(500), TX_HASH))


def test_rpc_error_propagates():
    client, _ = make(error=RpcError(-32000, "execution reverted"))
    with pytest.raises(RpcError) as info:
        client.gas_price()
    assert info.value.message == "execution reverted"


def test_invalid_hex_result_raises():
    client, _ = make("0xzz")
    with pytest.raises(HexError):
        client.block_number()


def test_invalid_address_argument_raises_before_call():
    client, provider = make(encode_big(1))
    with pytest.raises(HexError):
        client.balance("0x1234")
    assert provider.calls == []