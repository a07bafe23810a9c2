"""Network manager: the single public request entry point.

Builds the request, sends it through the injected AbstractHttpClient and hands the
response to the dispatcher. Transport failures (HttpClientError and subclasses)
pass through untouched; every other failure is a RequestError. An endpoint that
does not form a request yields None.
The manager keeps no per-request state, so one instance can serve concurrent calls.
"""
from __future__ import annotations

from typing import Any, Mapping, TypeVar

from loguru import logger

from modern_networking.core import SERVICE_NAME
from modern_networking.domain.errors import UnknownRequestError
from modern_networking.domain.models import (
    Endpoint,
    HTTPMethod,
    OutboundRequest,
    StatusActionTable,
    StatusClass,
    resolve_endpoint,
)
from modern_networking.domain.request_builder import build_request
from modern_networking.domain.response_dispatcher import handle_response
from modern_networking.ports.decoder import ResponseDecoder
from modern_networking.ports.http_client import AbstractHttpClient, RequestTimeout

T = TypeVar("T")


def _log(event: str, **kwargs: Any) -> None:
    logger.bind(service_name=SERVICE_NAME, event=event, **kwargs).debug("")


def _warn(event: str, **kwargs: Any) -> None:
    logger.bind(service_name=SERVICE_NAME, event=event, **kwargs).warning("")


class NetworkManager:
    """Issues one request per call and decodes the response into a requested shape."""

    def __init__(
        self,
        client: AbstractHttpClient,
        default_decoder: ResponseDecoder,
        *,
        default_headers: Mapping[str, str] | None = None,
        timeout: RequestTimeout | None = None,
    ) -> None:
        self._client = client
        self._default_decoder = default_decoder
        self._default_headers = dict(default_headers) if default_headers else {}
        self._timeout = timeout

    @property
    def default_headers(self) -> dict[str, str]:
        return dict(self._default_headers)

    @property
    def default_decoder(self) -> ResponseDecoder:
        return self._default_decoder

    def build_request(
        self,
        method: HTTPMethod,
        endpoint: Endpoint,
        headers: Mapping[str, str] | None = None,
    ) -> OutboundRequest | None:
        merged = {**self._default_headers, **(headers or {})}
        return build_request(method, endpoint, merged)

    def handle_response(
        self,
        response_type: type[T] | Any,
        data: bytes,
        status_code: int | StatusClass,
        custom_decoder: ResponseDecoder | None = None,
        status_actions: StatusActionTable | None = None,
    ) -> T:
        return handle_response(
            response_type,
            data,
            status_code,
            custom_decoder,
            status_actions,
            default_decoder=self._default_decoder,
        )

    async def request(
        self,
        endpoint: Endpoint,
        method: HTTPMethod,
        response_type: type[T] | Any,
        *,
        custom_decoder: ResponseDecoder | None = None,
        status_actions: StatusActionTable | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> T | None:
        """Send `method` to `endpoint` and decode the body as `response_type`.

        Returns None, without sending anything, when the endpoint/method pair does
        not form a request.

        Raises:
            RequestError: The response status or body could not be turned into a value.
            HttpClientError: Raised by the transport; not reclassified here.
        """
        outbound = self.build_request(method, endpoint, headers)
        if outbound is None:
            _warn("request_build_failed", endpoint=resolve_endpoint(endpoint), method=method.verb)
            return None

        _log("request_sent", url=outbound.url, method=outbound.method)
        response = await self._client.send(outbound, timeout=self._timeout)

        status_code = response.status_code
        if not isinstance(status_code, int) or isinstance(status_code, bool):
            _warn("response_failed", url=response.url, reason="missing_status_code")
            raise UnknownRequestError("response carried no status code")

        status_class = StatusClass.from_code(status_code)
        _log(
            "response_received",
            url=response.url,
            status_code=status_code,
            status_class=status_class.value,
            elapsed_seconds=response.elapsed_seconds,
        )
        if status_class is StatusClass.UNKNOWN:
            _warn("response_failed", url=response.url, status_code=status_code, reason="unclassifiable_status")
            raise UnknownRequestError(f"unclassifiable status code {status_code}")

        return self.handle_response(
            response_type,
            response.content,
            status_class,
            custom_decoder,
            status_actions,
        )

    async def close(self) -> None:
        await self._client.close()

    async def __aenter__(self) -> "NetworkManager":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()
