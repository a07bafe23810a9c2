"""Concrete HTTP client implementation using httpx (injected where AbstractHttpClient is needed)."""
from __future__ import annotations

import httpx

from modern_networking.domain.models import OutboundRequest
from modern_networking.ports.http_client import (
    AbstractHttpClient,
    HttpClientError,
    HttpClientTimeoutError,
    HttpResponse,
    RequestTimeout,
)


class _HttpxResponseAdapter:
    """Adapts httpx.Response to the HttpResponse protocol."""

    def __init__(self, response: httpx.Response) -> None:
        self._response = response

    @property
    def status_code(self) -> int | None:
        return self._response.status_code

    @property
    def content(self) -> bytes:
        return self._response.content

    @property
    def url(self) -> str:
        return str(self._response.url)

    @property
    def elapsed_seconds(self) -> float:
        return self._response.elapsed.total_seconds()


def to_httpx_timeout(timeout: RequestTimeout) -> httpx.Timeout:
    return httpx.Timeout(
        connect=timeout.connect_seconds,
        read=timeout.read_seconds,
        write=timeout.read_seconds,
        pool=timeout.connect_seconds,
    )


class HttpxHttpClient(AbstractHttpClient):
    """AbstractHttpClient implementation using httpx.AsyncClient."""

    def __init__(self, client: httpx.AsyncClient, *, follow_redirects: bool = True) -> None:
        self._client = client
        self._follow_redirects = follow_redirects

    async def send(
        self,
        request: OutboundRequest,
        *,
        timeout: RequestTimeout | None = None,
    ) -> HttpResponse:
        extra = {}
        if timeout is not None:
            extra["timeout"] = to_httpx_timeout(timeout)
        try:
            response = await self._client.request(
                request.method,
                request.url,
                headers=request.headers,
                content=request.body,
                follow_redirects=self._follow_redirects,
                **extra,
            )
            return _HttpxResponseAdapter(response)
        except httpx.TimeoutException as exc:
            raise HttpClientTimeoutError(f"timeout while requesting {request.url}") from exc
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise HttpClientError(f"http request failed for {request.url}: {exc}") from exc

    async def close(self) -> None:
        await self._client.aclose()
