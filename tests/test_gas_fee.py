from types import SimpleNamespace

import pytest

from web3kit.block_ref import BlockNumber
from web3kit.gas_fee import GasFeeData, get_fee_data
from web3kit.hexutil import encode_big


class FakeReader:
    def __init__(self, gas_price, block, priority_fee=None, fail_on=None):
        self._gas_price = gas_price
        self._block = block
        self._priority_fee = priority_fee
        self._fail_on = fail_on
        self.block_requests = []
        self.priority_requests = 0

    def gas_price(self):
        if self._fail_on == "gas_price":
            raise RuntimeError("gas price unavailable")
        return self._gas_price

    def block_by_number(self, block_number, is_full):
        self.block_requests.append((block_number, is_full))
        return self._block

    def max_priority_fee_per_gas(self):
        self.priority_requests += 1
        if self._fail_on == "priority":
            raise RuntimeError("priority fee unavailable")
        return self._priority_fee


def test_legacy_chain_has_only_gas_price():
    reader = FakeReader(gas_price=20, block={"number": "0x1"})
    data = get_fee_data(reader)
    assert data == GasFeeData(gas_price=20)
    assert not data.supports_eip1559()
    assert reader.priority_requests == 0


def test_latest_block_is_requested_without_transactions():
    reader = FakeReader(gas_price=20, block={})
    get_fee_data(reader)
    assert reader.block_requests == [(BlockNumber.LATEST, False)]


def test_dynamic_fees_from_hex_base_fee():
    reader = FakeReader(gas_price=20, block={"baseFeePerGas": encode_big(100)}, priority_fee=7)
    data = get_fee_data(reader)
    assert data.supports_eip1559()
    assert data.max_priority_fee_per_gas == 7
    assert data.max_fee_per_gas == 207
    assert data.gas_price == 20


def test_base_fee_from_block_attribute():
    block = SimpleNamespace(base_fee_per_gas=100)
    dict_block = {"baseFeePerGas": encode_big(100)}
    from_attr = get_fee_data(FakeReader(gas_price=1, block=block, priority_fee=7))
    from_dict = get_fee_data(FakeReader(gas_price=1, block=dict_block, priority_fee=7))
    assert from_attr == from_dict


def test_max_fee_exceeds_priority_fee():
    data = get_fee_data(FakeReader(gas_price=1, block={"baseFeePerGas": encode_big(1)}, priority_fee=5))
    assert data.max_fee_per_gas > data.max_priority_fee_per_gas


def test_gas_price_error_propagates():
    with pytest.raises(RuntimeError, match="gas price"):
        get_fee_data(FakeReader(gas_price=1, block={}, fail_on="gas_price"))


def test_priority_fee_error_propagates():
    reader = FakeReader(gas_price=1, block={"baseFeePerGas": encode_big(1)}, fail_on="priority")
    with pytest.raises(RuntimeError, match="priority"):
        get_fee_data(reader)


def test_supports_eip1559_requires_both_values():
    assert not GasFeeData(max_fee_per_gas=10).supports_eip1559()
    assert GasFeeData(max_fee_per_gas=10, max_priority_fee_per_gas=1).supports_eip1559()