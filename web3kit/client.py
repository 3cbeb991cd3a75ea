"""A client bundling the typed RPC clients over one provider."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any

from .debug_client import DebugClient
from .eth_client import EthClient
from .filter_client import FilterClient
from .parity_client import ParityClient
from .provider import HttpProvider, Provider
from .signer_manager import SignerManager
from .trace_client import TraceClient


class NotFoundError(LookupError):
    """Raised when a requested component is not configured."""

    def __init__(self, message: str = "not found") -> None:
        super().__init__(message)


@dataclass
class ClientOption:
    """Transport settings and an optional signer manager for a client."""

    request_timeout: float = 30.0
    retry_count: int = 0
    retry_interval: float = 1.0
    signer_manager: SignerManager | None = None

    def with_retry(self, retry_count: int, retry_interval: float) -> ClientOption:
        """Set how often and how far apart failed requests are retried."""
        self.retry_count = retry_count
        self.retry_interval = retry_interval
        return self

    def with_timeout(self, request_timeout: float) -> ClientOption:
        """Set the per-request timeout in seconds."""
        self.request_timeout = request_timeout
        return self

    def with_signer_manager(self, signer_manager: SignerManager | None) -> ClientOption:
        """Attach the signer manager that holds the client's accounts."""
        self.signer_manager = signer_manager
        return self


class Client:
    """Typed access to the eth, trace, parity, filter and debug namespaces."""

    def __init__(self, provider: Provider, option: ClientOption | None = None) -> None:
        self.option = option if option is not None else ClientOption()
        self.set_provider(provider)

    @classmethod
    def from_url(cls, url: str, option: ClientOption | None = None) -> Client:
        """Connect over HTTP(S) using the given options."""
        settings = replace(option) if option is not None else ClientOption()
        provider = HttpProvider(
            url,
            timeout=settings.request_timeout,
            retry_count=settings.retry_count,
            retry_interval=settings.retry_interval,
        )
        return cls(provider, settings)

    def set_provider(self, provider: Provider) -> None:
        """Route every namespace client through provider."""
        if not isinstance(provider, Provider):
            raise TypeError(f"provider must be a Provider, got {type(provider).__name__}")
        self.provider = provider
        self.eth = EthClient(provider)
        self.trace = TraceClient(provider)
        self.parity = ParityClient(provider)
        self.filter = FilterClient(provider)
        self.debug = DebugClient(provider)

    def request(self, method: str, *args: Any) -> Any:
        """Call an arbitrary RPC method with arguments converted to their wire form."""
        return self.eth.request(method, *args)

    def get_signer_manager(self) -> SignerManager:
        """Return the configured signer manager; raise NotFoundError if there is none."""
        if self.option.signer_manager is not None:
            return self.option.signer_manager
        raise NotFoundError()

    def __repr__(self) -> str:
        return f"Client(provider={self.provider!r})"