"""Encrypted key files in the version 3 keystore format."""

from __future__ import annotations

import hashlib
import hmac
import json
import os
import secrets
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from Crypto.Cipher import AES
from Crypto.Protocol.KDF import scrypt

from .hexutil import to_address
from .keys import PrivateKeySigner, keccak256

STANDARD_SCRYPT_N = 1 << 18
STANDARD_SCRYPT_P = 1
SCRYPT_R = 8
SCRYPT_DKLEN = 32
KEYSTORE_VERSION = 3
CIPHER = "aes-128-ctr"
_ENCODING = "utf-8"


class KeystoreError(ValueError):
    """Raised when a keystore cannot be read, decrypted or written."""


def _load(keyjson: bytes | str | dict[str, Any]) -> dict[str, Any]:
    if isinstance(keyjson, dict):
        return keyjson
    try:
        doc = json.loads(keyjson)
    except (ValueError, TypeError) as exc:
        raise KeystoreError(f"invalid keystore JSON: {exc}") from exc
    if not isinstance(doc, dict):
        raise KeystoreError("keystore must be a JSON object")
    return doc


def _unhex(value: Any, name: str) -> bytes:
    if not isinstance(value, str):
        raise KeystoreError(f"{name} must be a hex string")
    try:
        return bytes.fromhex(value[2:] if value[:2] in ("0x", "0X") else value)
    except ValueError as exc:
        raise KeystoreError(f"invalid hex in {name}") from exc


def _derive_key(crypto: dict[str, Any], auth: str) -> bytes:
    kdf = crypto.get("kdf")
    params = crypto.get("kdfparams")
    if not isinstance(params, dict):
        raise KeystoreError("missing kdfparams")
    salt = _unhex(params.get("salt"), "salt")
    material = auth.encode(_ENCODING)
    try:
        dklen = int(params["dklen"])
        if kdf == "scrypt":
            return scrypt(material, salt, dklen, int(params["n"]), int(params["r"]), int(params["p"]))
        if kdf == "pbkdf2":
            if params.get("prf") != "hmac-sha256":
                raise KeystoreError(f"unsupported PBKDF2 PRF: {params.get('prf')}")
            return hashlib.pbkdf2_hmac("sha256", material, salt, int(params["c"]), dklen)
    except (KeyError, TypeError, ValueError) as exc:
        if isinstance(exc, KeystoreError):
            raise
        raise KeystoreError(f"invalid kdfparams: {exc}") from exc
    raise KeystoreError(f"unsupported KDF: {kdf}")


def from_keystore(keyjson: bytes | str | dict[str, Any], auth: str) -> PrivateKeySigner:
    """Decrypt a keystore document and return a signer for its key."""
    doc = _load(keyjson)
    if doc.get("version") != KEYSTORE_VERSION:
        raise KeystoreError(f"unsupported keystore version: {doc.get('version')!r}")
    crypto = doc.get("crypto", doc.get("Crypto"))
    if not isinstance(crypto, dict):
        raise KeystoreError("missing crypto section")
    if crypto.get("cipher") != CIPHER:
        raise KeystoreError(f"cipher not supported: {crypto.get('cipher')}")
    mac = _unhex(crypto.get("mac"), "mac")
    params = crypto.get("cipherparams")
    if not isinstance(params, dict):
        raise KeystoreError("missing cipherparams")
    iv = _unhex(params.get("iv"), "iv")
    ciphertext = _unhex(crypto.get("ciphertext"), "ciphertext")

    derived = _derive_key(crypto, auth)
    if len(derived) < 32:
        raise KeystoreError("derived key too short")
    if not hmac.compare_digest(keccak256(derived[16:32] + ciphertext), mac):
        raise KeystoreError("could not decrypt key with given password")
    try:
        cipher = AES.new(derived[:16], AES.MODE_CTR, nonce=b"", initial_value=iv)
    except (ValueError, TypeError) as exc:
        raise KeystoreError(f"invalid cipher parameters: {exc}") from exc
    try:
        return PrivateKeySigner(cipher.decrypt(ciphertext))
    except ValueError as exc:
        raise KeystoreError(f"invalid private key: {exc}") from exc


def from_keystore_file(file_path: str | os.PathLike[str], auth: str) -> PrivateKeySigner:
    """Read and decrypt a keystore file."""
    return from_keystore(Path(file_path).read_bytes(), auth)


def to_keystore(signer: PrivateKeySigner, auth: str) -> bytes:
    """Encrypt the signer's key into a keystore document with standard scrypt cost."""
    salt = secrets.token_bytes(32)
    derived = scrypt(
        auth.encode(_ENCODING), salt, SCRYPT_DKLEN, STANDARD_SCRYPT_N, SCRYPT_R, STANDARD_SCRYPT_P
    )
    iv = secrets.token_bytes(16)
    cipher = AES.new(derived[:16], AES.MODE_CTR, nonce=b"", initial_value=iv)
    ciphertext = cipher.encrypt(signer.private_key.to_bytes(32, "big"))
    doc = {
        "address": signer.address[2:],
        "crypto": {
            "cipher": CIPHER,
            "ciphertext": ciphertext.hex(),
            "cipherparams": {"iv": iv.hex()},
            "kdf": "scrypt",
            "kdfparams": {
                "dklen": SCRYPT_DKLEN,
                "n": STANDARD_SCRYPT_N,
                "p": STANDARD_SCRYPT_P,
                "r": SCRYPT_R,
                "salt": salt.hex(),
            },
            "mac": keccak256(derived[16:32] + ciphertext).hex(),
        },
        "id": str(uuid.uuid4()),
        "version": KEYSTORE_VERSION,
    }
    return json.dumps(doc).encode(_ENCODING)


def _stored_address(path: Path) -> str | None:
    try:
        doc = json.loads(path.read_bytes())
        return to_address("0x" + doc["address"])
    except (OSError, ValueError, TypeError, KeyError):
        return None


def _has_address(directory: Path, address: str) -> bool:
    return any(
        entry.is_file() and not entry.name.startswith(".") and _stored_address(entry) == address
        for entry in directory.iterdir()
    )


def _key_file_name(address: str) -> str:
    now = datetime.now(timezone.utc)
    stamp = f"{now:%Y-%m-%dT%H-%M-%S}.{now.microsecond * 1000:09d}Z"
    return f"UTC--{stamp}--{address[2:]}"


def save_keystore(signer: PrivateKeySigner, dir_path: str | os.PathLike[str], auth: str) -> Path:
    """Write the signer's key into a keystore directory; return the new file's path."""
    directory = Path(dir_path)
    directory.mkdir(mode=0o700, parents=True, exist_ok=True)
    if _has_address(directory, signer.address):
        raise KeystoreError("account already exists")
    data = to_keystore(signer, auth)
    path = directory / _key_file_name(signer.address)
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o600)
    with os.fdopen(fd, "wb") as handle:
        handle.write(data)
    return path