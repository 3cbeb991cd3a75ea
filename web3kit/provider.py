"""JSON-RPC transport and the base shared by the typed RPC clients."""

from __future__ import annotations

import itertools
import json
import threading
import time
from abc import ABC, abstractmethod
from collections.abc import Mapping
from enum import Enum
from typing import Any
from urllib.error import HTTPError
from urllib.parse import urlparse
from urllib.request import Request, urlopen

from .hexutil import encode_bytes

_INVALID_RESPONSE = -32700


class RpcError(Exception):
    """An error reported by the node, or a response that is not valid JSON-RPC."""

    def __init__(self, code: int, message: str, data: Any = None) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.data = data

    def __repr__(self) -> str:
        return f"RpcError(code={self.code!r}, message={self.message!r})"


class Provider(ABC):
    """Sends a single JSON-RPC request and returns its result."""

    @abstractmethod
    def call(self, method: str, *args: Any) -> Any:
        """Invoke method with JSON-ready arguments; raise RpcError on a node error."""


def _to_wire(value: Any) -> Any:
    """Turn an argument into the JSON-ready form the node expects."""
    to_json = getattr(value, "to_json", None)
    if callable(to_json) and not isinstance(value, type):
        return _to_wire(to_json())
    if isinstance(value, Enum):
        return _to_wire(value.value)
    if isinstance(value, (bytes, bytearray, memoryview)):
        return encode_bytes(bytes(value))
    if isinstance(value, Mapping):
        return {str(key): _to_wire(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_wire(item) for item in value]
    return value


def _error_body(body: bytes) -> bool:
    try:
        doc = json.loads(body)
    except ValueError:
        return False
    return isinstance(doc, dict) and "error" in doc


class HttpProvider(Provider):
    """A provider that posts JSON-RPC requests over HTTP(S)."""

    def __init__(
        self,
        url: str,
        timeout: float = 30.0,
        retry_count: int = 0,
        retry_interval: float = 1.0,
    ) -> None:
        scheme = urlparse(url).scheme.lower()
        if scheme not in ("http", "https"):
            raise ValueError(f"unsupported URL scheme {scheme!r} in {url!r}")
        if retry_count < 0:
            raise ValueError("retry_count must not be negative")
        if retry_interval < 0:
            raise ValueError("retry_interval must not be negative")
        self.url = url
        self.timeout = timeout
        self.retry_count = retry_count
        self.retry_interval = retry_interval
        self._ids = itertools.count(1)
        self._id_lock = threading.Lock()

    def _next_id(self) -> int:
        with self._id_lock:
            return next(self._ids)

    def _post(self, payload: bytes) -> bytes:
        request = Request(
            self.url,
            data=payload,
            headers={"Content-Type": "application/json", "Accept": "application/json"},
            method="POST",
        )
        try:
            with urlopen(request, timeout=self.timeout) as response:
                return response.read()
        except HTTPError as exc:
            try:
                body = exc.read()
            except (OSError, AttributeError):
                body = b""
            # Nodes may answer a failed call with a non-2xx status and a JSON-RPC error.
            if body and _error_body(body):
                return body
            raise

    def call(self, method: str, *args: Any) -> Any:
        """Send the request, retrying transport failures; return the result member."""
        payload = json.dumps(
            {"jsonrpc": "2.0", "id": self._next_id(), "method": method, "params": list(args)}
        ).encode("utf-8")
        attempts = self.retry_count + 1
        for attempt in range(attempts):
            try:
                body = self._post(payload)
                break
            except OSError:
                if attempt + 1 >= attempts:
                    raise
                time.sleep(self.retry_interval)
        return _result(body)

    def __repr__(self) -> str:
        return f"HttpProvider(url={self.url!r})"


def _result(body: bytes) -> Any:
    try:
        response = json.loads(body)
    except ValueError as exc:
        raise RpcError(_INVALID_RESPONSE, f"invalid JSON-RPC response: {exc}") from exc
    if not isinstance(response, dict):
        raise RpcError(_INVALID_RESPONSE, "invalid JSON-RPC response: not an object")
    error = response.get("error")
    if error is not None:
        if isinstance(error, dict):
            raise RpcError(error.get("code", 0), str(error.get("message", "")), error.get("data"))
        raise RpcError(0, str(error))
    return response.get("result")


class BaseClient:
    """Shared plumbing of the typed clients: argument encoding and dispatch."""

    def __init__(self, provider: Provider) -> None:
        self.provider = provider

    def request(self, method: str, *args: Any) -> Any:
        """Call method on the provider with arguments converted to their wire form."""
        return self.provider.call(method, *(_to_wire(arg) for arg in args))