import pytest

from web3kit.hexutil import HexError, to_address
from web3kit.keys import PrivateKeySigner
from web3kit.signer_manager import SignerManager, SignerNotFoundError

KEY_A = "9ec393923a14eeb557600010ea05d635c667a6995418f8a8f4bdecc63dfe0bb9"
KEY_B = "1ab8ec2627e19007d2c62145df6acf51f16b8fd93b0a27c01dae4eb271aadee1"
ADDR_A = "0xe6D148D8398c4cb456196C776D2d9093Dd62C9B0"
ADDR_B = "0x3a3347C42705C5328012dE9a38b030128eee4F83"


def test_new_signer_manager_by_private_keys():
    sm = SignerManager.from_private_key_strings([KEY_A, KEY_B])
    signers = sm.list()
    assert len(signers) == 2
    assert signers[0].address == to_address(ADDR_A)
    assert signers[1].address == to_address(ADDR_B)

    signer = sm.get(ADDR_A)
    assert signer.address == to_address(ADDR_A)


def test_get_accepts_any_case():
    sm = SignerManager.from_private_key_strings([KEY_A])
    assert sm.get(ADDR_A.lower()) is sm.get(ADDR_A)
    assert ADDR_A in sm


def test_get_missing_raises():
    sm = SignerManager.from_private_key_strings([KEY_A])
    with pytest.raises(SignerNotFoundError, match="signer not found"):
        sm.get(ADDR_B)


def test_add_and_duplicate():
    sm = SignerManager([])
    signer = PrivateKeySigner.from_string(KEY_B)
    sm.add(signer)
    assert sm.get(ADDR_B) is signer
    assert len(sm) == 1
    with pytest.raises(ValueError, match="signer already exists"):
        sm.add(PrivateKeySigner.from_string(KEY_B))
    assert len(sm.list()) == 1


def test_remove():
    sm = SignerManager.from_private_key_strings([KEY_A, KEY_B])
    sm.remove(ADDR_A)
    assert [s.address for s in sm.list()] == [to_address(ADDR_B)]
    with pytest.raises(SignerNotFoundError):
        sm.get(ADDR_A)
    with pytest.raises(SignerNotFoundError):
        sm.remove(ADDR_A)


def test_list_is_a_copy():
    sm = SignerManager.from_private_key_strings([KEY_A])
    listed = sm.list()
    listed.clear()
    assert len(sm.list()) == 1


def test_invalid_key_string_raises():
    with pytest.raises(HexError):
        SignerManager.from_private_key_strings([KEY_A, "0x1234"])