"""HTTP client port: contract for sending an OutboundRequest.

Domain and application code depend on this port; infrastructure (e.g. httpx)
implements it. Keeps domain free of infrastructure imports.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from modern_networking.domain.models import OutboundRequest


class HttpClientError(Exception):
    """Base for transport failures (connection, TLS, protocol)."""


class HttpClientTimeoutError(HttpClientError):
    """Raised when the request times out."""


@runtime_checkable
class HttpResponse(Protocol):
    """Minimal read-only view of an HTTP response."""

    @property
    def status_code(self) -> int | None: ...

    @property
    def content(self) -> bytes: ...

    @property
    def url(self) -> str: ...

    @property
    def elapsed_seconds(self) -> float: ...


@dataclass(frozen=True)
class RequestTimeout:
    """Connect and read timeouts in seconds."""

    connect_seconds: float
    read_seconds: float


@runtime_checkable
class AbstractHttpClient(Protocol):
    """Port: send one request, return one response. Implementations live in infrastructure."""

    async def send(
        self,
        request: OutboundRequest,
        *,
        timeout: RequestTimeout | None = None,
    ) -> HttpResponse:
        """Send `request`; raise HttpClientTimeoutError or HttpClientError on transport failure."""
        ...

    async def close(self) -> None:
        """Release resources (e.g. connection pool). No-op allowed if nothing to close."""
        ...
