"""secp256k1 private-key signers and the hashes they rely on."""

from __future__ import annotations

import hashlib
import hmac
import secrets
from collections.abc import Iterator
from typing import Protocol, Union, runtime_checkable

from Crypto.Hash import keccak

from .hexutil import HexError, to_address

_P = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEFFFFFC2F
_N = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141
_G = (
    0x79BE667EF9DCBBAC55A06295CE870B07029BFCDB2DCE28D959F2815B16F81798,
    0x483ADA7726A3C4655DA4FBFC0E1108A8FD17B448A68554199C47D08FFB10D4B8,
)

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")
_BIG = "big"

_Point = Union[tuple[int, int], None]


def keccak256(data: bytes) -> bytes:
    """Return the Keccak-256 digest of data."""
    return keccak.new(digest_bits=256, data=bytes(data)).digest()


def _as_bytes(data: bytes | str) -> bytes:
    if isinstance(data, str):
        return data.encode("utf-8")
    return bytes(data)


def text_hash(data: bytes | str) -> bytes:
    """Hash a message the way personal_sign does, with the signed-message prefix."""
    raw = _as_bytes(data)
    prefix = f"\x19Ethereum Signed Message:\n{len(raw)}".encode()
    return keccak256(prefix + raw)


def _point_add(p: _Point, q: _Point) -> _Point:
    if p is None:
        return q
    if q is None:
        return p
    x1, y1 = p
    x2, y2 = q
    if x1 == x2:
        if (y1 + y2) % _P == 0:
            return None
        slope = 3 * x1 * x1 * pow(2 * y1, -1, _P) % _P
    else:
        slope = (y2 - y1) * pow(x2 - x1, -1, _P) % _P
    x3 = (slope * slope - x1 - x2) % _P
    return x3, (slope * (x1 - x3) - y1) % _P


def _point_mul(k: int, point: _Point = _G) -> _Point:
    result: _Point = None
    addend = point
    while k:
        if k & 1:
            result = _point_add(result, addend)
        addend = _point_add(addend, addend)
        k >>= 1
    return result


def _nonces(scalar: int, digest: bytes) -> Iterator[int]:
    """Deterministic nonce candidates as specified by RFC 6979 with HMAC-SHA256."""
    x = scalar.to_bytes(32, _BIG)
    h1 = (int.from_bytes(digest, _BIG) % _N).to_bytes(32, _BIG)
    v = b"\x01" * 32
    k = b"\x00" * 32
    k = hmac.new(k, v + b"\x00" + x + h1, hashlib.sha256).digest()
    v = hmac.new(k, v, hashlib.sha256).digest()
    k = hmac.new(k, v + b"\x01" + x + h1, hashlib.sha256).digest()
    v = hmac.new(k, v, hashlib.sha256).digest()
    while True:
        v = hmac.new(k, v, hashlib.sha256).digest()
        candidate = int.from_bytes(v, _BIG)
        if 1 <= candidate < _N:
            yield candidate
        k = hmac.new(k, v + b"\x00", hashlib.sha256).digest()
        v = hmac.new(k, v, hashlib.sha256).digest()


def _sign_digest(digest: bytes, scalar: int) -> bytes:
    """Sign a 32-byte digest; return r || s || v with v in {0, 1} and low s."""
    if len(digest) != 32:
        raise ValueError(f"hash is required to be exactly 32 bytes ({len(digest)})")
    z = int.from_bytes(digest, _BIG)
    for k in _nonces(scalar, digest):
        point = _point_mul(k)
        assert point is not None
        r = point[0] % _N
        if r == 0:
            continue
        s = pow(k, -1, _N) * (z + r * scalar) % _N
        if s == 0:
            continue
        recovery = (point[1] & 1) | (2 if point[0] >= _N else 0)
        if s > _N // 2:
            s = _N - s
            recovery ^= 1
        return r.to_bytes(32, _BIG) + s.to_bytes(32, _BIG) + bytes([recovery])
    raise AssertionError("nonce generation ended")  # pragma: no cover


def _checksum_address(address: str) -> str:
    body = address[2:].lower()
    digest = keccak256(body.encode("ascii")).hex()
    return "0x" + "".join(
        c.upper() if c.isalpha() and int(h, 16) >= 8 else c for c, h in zip(body, digest)
    )


@runtime_checkable
class Signer(Protocol):
    """Anything that owns an address and can sign messages for it."""

    @property
    def address(self) -> str: ...

    def sign_message(self, text: bytes) -> bytes: ...


class PrivateKeySigner:
    """Signs with a secp256k1 private key held in memory."""

    __slots__ = ("_scalar", "_public", "_address")

    def __init__(self, private_key: int | bytes) -> None:
        if isinstance(private_key, (bytes, bytearray, memoryview)):
            raw = bytes(private_key)
            if len(raw) != 32:
                raise ValueError(f"invalid length, need 256 bits, got {len(raw) * 8}")
            scalar = int.from_bytes(raw, _BIG)
        elif isinstance(private_key, int) and not isinstance(private_key, bool):
            scalar = private_key
        else:
            raise TypeError(f"private key must be int or bytes, got {type(private_key).__name__}")
        if not 0 < scalar < _N:
            raise ValueError("invalid private key, not in the curve order range")
        point = _point_mul(scalar)
        assert point is not None
        self._scalar = scalar
        self._public = point[0].to_bytes(32, _BIG) + point[1].to_bytes(32, _BIG)
        self._address = to_address(keccak256(self._public)[12:])

    @classmethod
    def from_string(cls, key_string: str) -> PrivateKeySigner:
        """Build from 64 hex digits, with or without a 0x prefix."""
        text = key_string.strip()
        if text[:2] in ("0x", "0X"):
            text = text[2:]
        if len(text) != 64:
            raise HexError(f"invalid private key length {len(text)}, want 64 hex digits")
        if any(c not in _HEX_DIGITS for c in text):
            raise HexError("invalid hex character in private key")
        return cls(bytes.fromhex(text))

    @classmethod
    def random(cls) -> PrivateKeySigner:
        """Build from a freshly generated key."""
        return cls(secrets.randbelow(_N - 1) + 1)

    @property
    def address(self) -> str:
        """Lower-case 0x-prefixed address of the key."""
        return self._address

    @property
    def private_key(self) -> int:
        """The private scalar."""
        return self._scalar

    @property
    def public_key(self) -> bytes:
        """The 64-byte uncompressed public key, without the 0x04 marker."""
        return self._public

    def private_key_string(self) -> str:
        """The private key as 0x-prefixed hex."""
        return "0x" + self._scalar.to_bytes(32, _BIG).hex()

    def public_key_string(self) -> str:
        """The public key as 0x-prefixed hex, without the 0x04 marker."""
        return "0x" + self._public.hex()

    def sign_message(self, text: bytes | str) -> bytes:
        """Sign text with the signed-message prefix; return 65 bytes r || s || v."""
        return _sign_digest(text_hash(text), self._scalar)

    def __str__(self) -> str:
        return f"address: {_checksum_address(self._address)}, publicKey: {self.public_key_string()}"

    def __repr__(self) -> str:
        return f"PrivateKeySigner(address={self._address!r})"