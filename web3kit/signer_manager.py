"""A registry of signers looked up by address."""

from __future__ import annotations

import threading
from collections.abc import Iterable, Iterator

from .hexutil import to_address
from .keys import PrivateKeySigner, Signer


class SignerNotFoundError(LookupError):
    """Raised when no signer is registered for an address."""


class SignerManager:
    """Holds signers in insertion order and indexes them by address."""

    def __init__(self, signers: Iterable[Signer] = ()) -> None:
        self._signers: list[Signer] = list(signers)
        self._by_address: dict[str, Signer] = {
            to_address(signer.address): signer for signer in self._signers
        }
        self._lock = threading.Lock()

    @classmethod
    def from_private_key_strings(cls, private_keys: Iterable[str]) -> SignerManager:
        """Build a manager with one private-key signer per hex key string."""
        return cls([PrivateKeySigner.from_string(key) for key in private_keys])

    def add(self, signer: Signer) -> None:
        """Register a signer; raise ValueError if its address is already known."""
        address = to_address(signer.address)
        with self._lock:
            if address in self._by_address:
                raise ValueError("signer already exists")
            self._signers.append(signer)
            self._by_address[address] = signer

    def remove(self, address: str) -> None:
        """Unregister the signer for address; raise SignerNotFoundError if absent."""
        key = to_address(address)
        with self._lock:
            self.get(key)
            del self._by_address[key]
            for position, signer in enumerate(self._signers):
                if to_address(signer.address) == key:
                    del self._signers[position]
                    break

    def get(self, address: str) -> Signer:
        """Return the signer for address; raise SignerNotFoundError if absent."""
        try:
            return self._by_address[to_address(address)]
        except KeyError:
            raise SignerNotFoundError("signer not found") from None

    def list(self) -> list[Signer]:
        """Return the signers in the order they were registered."""
        return list(self._signers)

    def __len__(self) -> int:
        return len(self._signers)

    def __iter__(self) -> Iterator[Signer]:
        return iter(list(self._signers))

    def __contains__(self, address: object) -> bool:
        if not isinstance(address, (str, bytes)):
            return False
        try:
            return to_address(address) in self._by_address
        except ValueError:
            return False