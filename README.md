# web3kit

A client library for Ethereum-compatible JSON-RPC nodes. It provides:

- typed wrappers for the `eth_*` (plus `web3_clientVersion` and
  `net_version`), `parity_*`, `trace_*`, filter and `debug_trace*` RPC
  methods: `EthClient`, `ParityClient`, `TraceClient`, `FilterClient` and
  `DebugClient`;
- a top-level `Client` that bundles all five over one provider, configured
  through `ClientOption`;
- an HTTP(S) transport, `HttpProvider`, with a timeout and retries;
- secp256k1 message signers (`PrivateKeySigner`), a `SignerManager` that
  holds several of them by address, and version 3 keystore import and export;
- data types with `to_json` / `from_json`: `CallRequest`, `FilterQuery`,
  `FilterChanges`, `BlockNumber`, `BlockNumberOrHash`, trace actions and
  their results, pending-transaction status and others.

## Installation

```
pip install web3kit
```

The only runtime dependency is `pycryptodome` (Keccak-256, AES and scrypt).

## Connecting to a node

```python
from web3kit.client import Client, ClientOption

option = ClientOption().with_retry(3, 1.0).with_timeout(10.0)
client = Client.from_url("http://localhost:8545", option)

print(client.eth.chain_id())
print(client.eth.block_number())
```

`Client` exposes `eth`, `trace`, `parity`, `filter` and `debug`, all sharing
one provider; `Client.request(method, *args)` calls any other method.
`Client.from_url` accepts `http` and `https` URLs only.

A single namespace can also be used on its own:

```python
from web3kit.provider import HttpProvider
from web3kit.eth_client import EthClient

provider = HttpProvider("http://localhost:8545", timeout=10.0, retry_count=0, retry_interval=0.0)
eth = EthClient(provider)
print(eth.gas_price())
```

`HttpProvider` retries only transport failures (`OSError`). An error
returned by the node is raised as `RpcError` (from `web3kit.provider`),
carrying `code`, `message` and `data`. Any other transport can be plugged in
by subclassing `Provider` and implementing `call(method, *args)`.

Quantities come back as `int`, byte strings as `bytes`, addresses and hashes
as lower-case `0x` hex. Blocks, transactions, receipts and logs come back as
the node's JSON objects (`dict`).

## Block references, calls and filters

```python
from web3kit.block_ref import BlockNumber, BlockNumberOrHash
from web3kit.call_request import CallRequest
from web3kit.filters import FilterQuery

contract = "0x1111111111111111111111111111111111111111"

eth.balance(contract)                                   # latest block
eth.balance(contract, BlockNumber.PENDING)
eth.code_at(contract, BlockNumberOrHash(block_number=BlockNumber(100)))

output = eth.call(CallRequest(to=contract, data=bytes.fromhex("06fdde03")))

query = FilterQuery(from_block=BlockNumber(100), to_block=BlockNumber.LATEST,
                    addresses=[contract])
logs = eth.logs(query)
```

Methods that take an optional block default to `BlockNumber.LATEST`. The
tags `EARLIEST`, `SAFE`, `FINALIZED`, `LATEST` and `PENDING` are available on
`BlockNumber`.

`FilterClient` installs and polls filters; `get_filter_changes` returns a
`FilterChanges` holding either `logs` or `hashes`.

## Signers

```python
from web3kit.keys import PrivateKeySigner
from web3kit.signer_manager import SignerManager

signer = PrivateKeySigner.random()
print(signer)                       # checksummed address and public key
signature = signer.sign_message(b"hello")   # 65 bytes: r || s || v
```

`sign_message` hashes the text with the `"\x19Ethereum Signed Message:\n"`
prefix (see `text_hash`) and signs deterministically with a low `s` value.
`PrivateKeySigner.from_string` takes 64 hex digits, with or without `0x`.

```python
manager = SignerManager([signer])
assert manager.get(signer.address) is signer
```

`SignerManager.get` and `remove` raise `SignerNotFoundError` for an unknown
address; `add` raises `ValueError` for an address already present.
`SignerManager.from_private_key_strings` builds one from hex keys.

A client configured with a signer manager returns it from
`Client.get_signer_manager()`; without one, `NotFoundError` is raised.

```python
option = ClientOption().with_signer_manager(manager)
client = Client.from_url("http://localhost:8545", option)
```

## Keystores

```python
from web3kit.keystore import to_keystore, from_keystore, save_keystore

password = "password"
keyjson = to_keystore(signer, password)
restored = from_keystore(keyjson, password)
assert restored.address == signer.address

path = save_keystore(signer, "keys", password)
```

`to_keystore` encrypts with AES-128-CTR and scrypt at the standard cost
(n = 2^18), so it takes a noticeable moment. `from_keystore` accepts scrypt
and PBKDF2 (HMAC-SHA256) keystores as bytes, text or a parsed dict;
`from_keystore_file` reads one from disk. `save_keystore` writes a
`UTC--<timestamp>--<address>` file and refuses an address already stored in
that directory. A wrong password, a malformed keystore or a duplicate
account raises `KeystoreError`.

## Debug tracing

`DebugClient` returns each trace as a `DebugTrace`: the node's raw result
together with a `GethTraceType` chosen from the tracer named in the options.
The built-in tracers (`4byteTracer`, `callTracer`, `prestateTracer`,
`noopTracer`, `muxTracer`) map to their own type, no options at all means
`GethTraceType.DEFAULT`, and any other tracer name, including none given in
the options, means `GethTraceType.JS`. `trace_type_for(options)` exposes that
choice. Options may be a dict or any object with a `tracer` attribute.

## What the package does not do

- It does not build, sign or serialise transactions. `PrivateKeySigner`
  signs messages only, and there is no `eth_sendTransaction` method that
  signs locally; send transactions already signed with
  `EthClient.send_raw_transaction`.
- It has no WebSocket or IPC transport and no subscriptions.
- It does not decode blocks, transactions, receipts, logs or trace results
  into typed objects; they are returned as JSON dicts.
- It has no contract bindings and no command-line tool.

## Running the tests

```
pip install -e ".[test]"
pytest
```