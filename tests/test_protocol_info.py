import pytest

from web3kit.hexutil import HexError, encode_big
from web3kit.protocol_info import EthProtocolInfo

HEAD = "0x" + "ab" * 32


def test_round_trip():
    info = EthProtocolInfo(version=68, difficulty=131072, head=HEAD)
    assert EthProtocolInfo.from_json(info.to_json()) == info


def test_difficulty_is_hex_encoded():
    wire = EthProtocolInfo(version=68, difficulty=131072, head=HEAD).to_json()
    assert wire["difficulty"] == encode_big(131072)
    assert wire["version"] == 68


def test_missing_fields_keep_defaults():
    assert EthProtocolInfo.from_json({}) == EthProtocolInfo()


def test_unset_difficulty_is_null():
    assert EthProtocolInfo().to_json()["difficulty"] is None


def test_version_must_be_integer():
    with pytest.raises(ValueError):
        EthProtocolInfo.from_json({"version": "68"})


def test_version_out_of_range():
    with pytest.raises(ValueError, match="range"):
        EthProtocolInfo.from_json({"version": 1 << 32})


def test_bad_difficulty_rejected():
    with pytest.raises(HexError):
        EthProtocolInfo.from_json({"difficulty": "12"})


def test_non_object_rejected():
    with pytest.raises(ValueError):
        EthProtocolInfo.from_json("info")