import json

import pytest

from web3kit.keys import PrivateKeySigner
from web3kit.keystore import (
    KeystoreError,
    from_keystore,
    from_keystore_file,
    save_keystore,
    to_keystore,
)

KEY = "0x0d501c86786789f8cb068c3ed04c0c010db2e526d864bedf2f5a68419daa8e90"
password = "password"


@pytest.fixture(scope="module")
def signer():
    return PrivateKeySigner.from_string(KEY)


@pytest.fixture(scope="module")
def keyjson(signer):
    return to_keystore(signer, password)


def test_round_trip(signer, keyjson):
    restored = from_keystore(keyjson, password)
    assert restored.address == signer.address
    assert restored.private_key_string() == KEY


def test_document_layout(signer, keyjson):
    doc = json.loads(keyjson)
    assert doc["version"] == 3
    assert doc["address"] == signer.address[2:]
    assert doc["crypto"]["cipher"] == "aes-128-ctr"
    assert doc["crypto"]["kdf"] == "scrypt"
    assert doc["crypto"]["kdfparams"]["n"] == 262144
    assert doc["crypto"]["kdfparams"]["r"] == 8
    assert doc["crypto"]["kdfparams"]["dklen"] == 32


def test_wrong_password_is_rejected(keyjson):
    wrong_password = "secret"
    with pytest.raises(KeystoreError, match="could not decrypt"):
        from_keystore(keyjson, wrong_password)


def test_tampered_ciphertext_is_rejected(keyjson):
    doc = json.loads(keyjson)
    text = doc["crypto"]["ciphertext"]
    doc["crypto"]["ciphertext"] = ("1" if text[0] != "1" else "2") + text[1:]
    with pytest.raises(KeystoreError):
        from_keystore(json.dumps(doc), password)


def test_unsupported_cipher(keyjson):
    doc = json.loads(keyjson)
    doc["crypto"]["cipher"] = "aes-256-cbc"
    with pytest.raises(KeystoreError, match="cipher not supported"):
        from_keystore(doc, password)


def test_unsupported_version(keyjson):
    doc = json.loads(keyjson)
    doc["version"] = 2
    with pytest.raises(KeystoreError, match="version"):
        from_keystore(doc, password)


def test_invalid_json():
    with pytest.raises(KeystoreError):
        from_keystore(b"not json", password)


def test_from_keystore_file(tmp_path, signer, keyjson):
    path = tmp_path / "key.json"
    path.write_bytes(keyjson)
    assert from_keystore_file(path, password).address == signer.address


def test_save_keystore_twice_fails(tmp_path, signer):
    directory = tmp_path / "keys"
    path = save_keystore(signer, directory, password)
    assert path.parent == directory
    assert path.name.startswith("UTC--")
    assert path.name.endswith(signer.address[2:])
    assert from_keystore_file(path, password).address == signer.address

    with pytest.raises(KeystoreError, match="account already exists"):
        save_keystore(signer, directory, password)

    other = save_keystore(PrivateKeySigner.random(), directory, password)
    assert other.exists()
    assert len(list(directory.iterdir())) == 2