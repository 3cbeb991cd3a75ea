import pytest

from web3kit.block_ref import BlockNumber, BlockNumberOrHash, resolve_block
from web3kit.hexutil import HexError, encode_uint64

HASH = "0x" + "ab" * 32


@pytest.mark.parametrize(
    "tag",
    [
        BlockNumber.EARLIEST,
        BlockNumber.SAFE,
        BlockNumber.FINALIZED,
        BlockNumber.LATEST,
        BlockNumber.PENDING,
    ],
)
def test_tag_round_trip(tag):
    assert BlockNumber.from_json(tag.to_json()) == tag
    assert tag.is_tag


def test_latest_and_pending_wire_names():
    assert BlockNumber.LATEST.to_json() == "latest"
    assert BlockNumber.from_json("pending") == BlockNumber.PENDING


def test_number_round_trip():
    number = BlockNumber(179904465)
    assert number.to_json() == encode_uint64(179904465)
    assert BlockNumber.from_json(number.to_json()) == number
    assert not number.is_tag


def test_number_without_prefix_rejected():
    with pytest.raises(HexError):
        BlockNumber.from_json("12")


def test_number_larger_than_int64_rejected():
    with pytest.raises(ValueError, match="int64"):
        BlockNumber.from_json(encode_uint64(1 << 63))


def test_non_string_rejected():
    with pytest.raises(ValueError):
        BlockNumber.from_json(12)


def test_invalid_negative_number_rejected():
    with pytest.raises(ValueError):
        BlockNumber(-7)


def test_hash_reference_round_trip():
    ref = BlockNumberOrHash(block_hash=HASH)
    assert ref.to_json() == HASH
    assert BlockNumberOrHash.from_json(HASH) == ref


def test_hash_is_normalised_to_lower_case():
    ref = BlockNumberOrHash.from_json(HASH.upper().replace("0X", "0x"))
    assert ref.block_hash == HASH


def test_require_canonical_object_round_trip():
    ref = BlockNumberOrHash(block_hash=HASH, require_canonical=True)
    wire = ref.to_json()
    assert wire["requireCanonical"] is True
    assert wire["blockHash"] == HASH
    assert BlockNumberOrHash.from_json(wire) == ref


def test_object_with_block_number():
    ref = BlockNumberOrHash.from_json({"blockNumber": "latest"})
    assert ref.block_number == BlockNumber.LATEST
    assert ref.block_hash is None


def test_both_number_and_hash_rejected():
    with pytest.raises(ValueError, match="both"):
        BlockNumberOrHash(block_number=BlockNumber.LATEST, block_hash=HASH)


def test_neither_number_nor_hash_rejected():
    with pytest.raises(ValueError):
        BlockNumberOrHash.from_json({})


def test_resolve_block_defaults_to_latest():
    assert resolve_block(None).block_number == BlockNumber.LATEST


def test_resolve_block_keeps_given_reference():
    ref = BlockNumberOrHash(block_hash=HASH)
    assert resolve_block(ref) is ref


def test_resolve_block_wraps_block_number():
    assert resolve_block(BlockNumber(5)).block_number == BlockNumber(5)