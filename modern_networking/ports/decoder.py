"""Decoder port: turns a response body into a value of a requested shape."""
from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


class ResponseDecodeError(Exception):
    """Raised when a body cannot be decoded into the requested shape."""


@runtime_checkable
class ResponseDecoder(Protocol):
    def decode(self, shape: Any, data: bytes) -> Any:
        """Return `data` decoded as `shape`; raise ResponseDecodeError on failure."""
        ...
