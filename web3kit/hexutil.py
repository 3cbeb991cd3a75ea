"""Hex encodings used on the JSON-RPC wire: quantities, byte strings, addresses and hashes."""

from __future__ import annotations

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")

ADDRESS_LENGTH = 20
HASH_LENGTH = 32
ZERO_ADDRESS = "0x" + "00" * ADDRESS_LENGTH
ZERO_HASH = "0x" + "00" * HASH_LENGTH

_UINT64_MAX = (1 << 64) - 1


class HexError(ValueError):
    """Raised when a value is not valid in its hex encoding."""


def _strip_prefix(text: object) -> str:
    if not isinstance(text, str):
        raise HexError(f"expected hex string, got {type(text).__name__}")
    if not text:
        raise HexError("empty hex string")
    if text[:2] not in ("0x", "0X"):
        raise HexError("hex string without 0x prefix")
    body = text[2:]
    if any(c not in _HEX_DIGITS for c in body):
        raise HexError("invalid hex string")
    return body


def _decode_number(text: object, bits: int) -> int:
    digits = _strip_prefix(text)
    if not digits:
        raise HexError('hex string "0x"')
    if len(digits) > 1 and digits[0] == "0":
        raise HexError("hex number with leading zero digits")
    if len(digits) > bits // 4:
        raise HexError(f"hex number > {bits} bits")
    return int(digits, 16)


def _require_int(value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"expected int, got {type(value).__name__}")
    return value


def encode_big(value: int) -> str:
    """Encode an integer as a 0x-prefixed quantity, with a leading minus if negative."""
    value = _require_int(value)
    if value < 0:
        return f"-0x{-value:x}"
    return f"0x{value:x}"


def decode_big(text: str) -> int:
    """Decode a 0x-prefixed quantity of at most 256 bits."""
    return _decode_number(text, 256)


def encode_uint64(value: int) -> str:
    """Encode an unsigned 64-bit integer as a 0x-prefixed quantity."""
    value = _require_int(value)
    if not 0 <= value <= _UINT64_MAX:
        raise HexError("hex number > 64 bits")
    return f"0x{value:x}"


def decode_uint64(text: str) -> int:
    """Decode a 0x-prefixed quantity of at most 64 bits."""
    return _decode_number(text, 64)


def encode_bytes(data: bytes) -> str:
    """Encode bytes as 0x-prefixed hex."""
    return "0x" + bytes(data).hex()


def decode_bytes(text: str) -> bytes:
    """Decode 0x-prefixed hex of even length into bytes."""
    body = _strip_prefix(text)
    if len(body) % 2:
        raise HexError("hex string of odd length")
    return bytes.fromhex(body)


def _fixed(value: object, size: int, kind: str) -> str:
    if isinstance(value, (bytes, bytearray, memoryview)):
        raw = bytes(value)
        if len(raw) != size:
            raise HexError(f"{kind} must be {size} bytes, got {len(raw)}")
        return "0x" + raw.hex()
    body = _strip_prefix(value)
    if len(body) != size * 2:
        raise HexError(f"hex string has length {len(body)}, want {size * 2} for {kind}")
    return "0x" + body.lower()


def to_address(value: str | bytes) -> str:
    """Normalise a 20-byte address to lower-case 0x-prefixed hex."""
    return _fixed(value, ADDRESS_LENGTH, "address")


def to_hash(value: str | bytes) -> str:
    """Normalise a 32-byte hash to lower-case 0x-prefixed hex."""
    return _fixed(value, HASH_LENGTH, "hash")