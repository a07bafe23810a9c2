"""Request builder: turns an endpoint, a method and headers into an OutboundRequest.

Pure function of its inputs. Returns None when the endpoint does not form a usable
absolute http(s) URL (scheme, host and a valid port) or when the query or body
cannot be encoded as UTF-8.
"""
from __future__ import annotations

from typing import Any, Iterable, Mapping
from urllib.parse import SplitResult, quote, urlencode, urlsplit, urlunsplit

from loguru import logger

from modern_networking.constants import ALLOWED_URL_SCHEMES
from modern_networking.core import SERVICE_NAME
from modern_networking.domain.models import (
    Endpoint,
    Get,
    HTTPMethod,
    OutboundRequest,
    Post,
    resolve_endpoint,
)


def _log(event: str, **kwargs: Any) -> None:
    logger.bind(service_name=SERVICE_NAME, event=event, **kwargs).debug("")


def _parse_url(url: str) -> SplitResult | None:
    if not url or any(ch.isspace() for ch in url):
        return None
    try:
        return urlsplit(url)
    except ValueError:
        return None


def _encode_pairs(pairs: Iterable[tuple[str, Any]]) -> str:
    # quote() encodes with UTF-8 in strict mode; unencodable text raises UnicodeEncodeError
    return urlencode(list(pairs), quote_via=quote)


def _encode_query(items: Iterable[tuple[str, Any]]) -> str:
    """Like _encode_pairs, but an item whose value is None is emitted as a bare key."""
    return "&".join(
        quote(key, safe="") if value is None else _encode_pairs([(key, value)])
        for key, value in items
    )


def _final_url(components: SplitResult) -> str | None:
    if components.scheme.lower() not in ALLOWED_URL_SCHEMES or not components.hostname:
        return None
    try:
        components.port
    except ValueError:
        # non-numeric or out of range
        return None
    return urlunsplit(components)


def encode_form_body(body: Mapping[str, Any] | None) -> bytes | None:
    """Serialize a mapping to `key=value&key=value` UTF-8 bytes. Empty or absent -> None."""
    if not body:
        return None
    return _encode_pairs(body.items()).encode("utf-8")


def build_request(
    method: HTTPMethod,
    endpoint: Endpoint,
    headers: Mapping[str, str] | None = None,
) -> OutboundRequest | None:
    url = resolve_endpoint(endpoint)
    components = _parse_url(url)
    if components is None:
        _log("request_build_failed", endpoint=url, reason="unparseable_url")
        return None

    if isinstance(method, Get) and method.query_items:
        try:
            components = components._replace(query=_encode_query(method.query_items))
        except UnicodeEncodeError:
            _log("request_build_failed", endpoint=url, reason="unencodable_query")
            return None

    final_url = _final_url(components)
    if final_url is None:
        _log("request_build_failed", endpoint=url, reason="incomplete_url")
        return None

    body: bytes | None = None
    if isinstance(method, Post):
        try:
            body = encode_form_body(method.body)
        except UnicodeEncodeError:
            _log("request_build_failed", endpoint=url, reason="unencodable_body")
            return None

    return OutboundRequest(
        url=final_url,
        method=method.verb,
        headers=dict(headers) if headers else {},
        body=body,
    )
