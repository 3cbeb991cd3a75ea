import pytest

from web3kit.hexutil import (
    ZERO_ADDRESS,
    ZERO_HASH,
    HexError,
    decode_big,
    decode_bytes,
    decode_uint64,
    encode_big,
    encode_bytes,
    encode_uint64,
    to_address,
    to_hash,
)


def test_pinned_encodings():
    assert encode_big(255) == "0xff"
    assert encode_uint64(0) == "0x0"
    assert encode_bytes(b"\x01\xab") == "0x01ab"


@pytest.mark.parametrize("value", [0, 1, 255, 4096, 10**18, (1 << 256) - 1])
def test_big_round_trip(value):
    assert decode_big(encode_big(value)) == value


def test_negative_big_has_minus_prefix():
    assert encode_big(-255) == "-" + encode_big(255)


def test_big_accepts_upper_case_prefix_and_digits():
    assert decode_big("0XFF") == decode_big("0xff")


@pytest.mark.parametrize(
    "text",
    ["", "ff", "0x", "0x01", "0xzz", "0x1" + "0" * 64],
)
def test_decode_big_errors(text):
    with pytest.raises(HexError):
        decode_big(text)


def test_decode_big_rejects_non_string():
    with pytest.raises(HexError):
        decode_big(17)


@pytest.mark.parametrize("value", [0, 1, 21000, (1 << 64) - 1])
def test_uint64_round_trip(value):
    assert decode_uint64(encode_uint64(value)) == value


@pytest.mark.parametrize("value", [-1, 1 << 64])
def test_encode_uint64_out_of_range(value):
    with pytest.raises(HexError):
        encode_uint64(value)


def test_decode_uint64_too_large():
    with pytest.raises(HexError):
        decode_uint64("0x1" + "0" * 16)


def test_encode_rejects_bool():
    with pytest.raises(TypeError):
        encode_big(True)


@pytest.mark.parametrize("data", [b"", b"\x00", b"\xde\xad\xbe\xef", bytes(range(256))])
def test_bytes_round_trip(data):
    assert decode_bytes(encode_bytes(data)) == data


@pytest.mark.parametrize("text", ["", "abcd", "0xabc", "0xgg"])
def test_decode_bytes_errors(text):
    with pytest.raises(HexError):
        decode_bytes(text)


def test_to_address_lowercases():
    mixed = "0xe6D148D8398c4cb456196C776D2d9093Dd62C9B0"
    assert to_address(mixed) == mixed.lower()


def test_to_address_from_bytes_round_trip():
    raw = bytes(range(20))
    assert decode_bytes(to_address(raw)) == raw
    assert to_address(bytes(20)) == ZERO_ADDRESS


@pytest.mark.parametrize("value", ["0x1234", "e6D148D8398c4cb456196C776D2d9093Dd62C9B0", bytes(19)])
def test_to_address_errors(value):
    with pytest.raises(HexError):
        to_address(value)


def test_to_hash_round_trip_and_errors():
    raw = bytes(range(32))
    assert decode_bytes(to_hash(raw)) == raw
    assert to_hash(bytes(32)) == ZERO_HASH
    with pytest.raises(HexError):
        to_hash(ZERO_ADDRESS)