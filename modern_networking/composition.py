"""Composition root: build NetworkManager from settings.

Composition may: import concrete classes, call factories, store interface types,
manage high-level lifecycle.
"""
from __future__ import annotations

from typing import Any, Mapping, TypeVar

from loguru import logger

from modern_networking.application.network_manager import NetworkManager
from modern_networking.config.settings import Settings
from modern_networking.constants import USER_AGENT_HEADER
from modern_networking.core import SERVICE_NAME
from modern_networking.domain.models import Endpoint, HTTPMethod, StatusActionTable
from modern_networking.infrastructure.decoding.pydantic_decoder import (
    DEFAULT_DECODER,
    PydanticResponseDecoder,
)
from modern_networking.infrastructure.http.factory import create_http_client
from modern_networking.ports.decoder import ResponseDecoder
from modern_networking.ports.http_client import AbstractHttpClient, RequestTimeout

T = TypeVar("T")


def _log(event: str, **kwargs: Any) -> None:
    logger.bind(service_name=SERVICE_NAME, event=event, **kwargs).info("")


def create_network_manager(
    settings: Settings | None = None,
    *,
    client: AbstractHttpClient | None = None,
) -> NetworkManager:
    """Wire a NetworkManager; `client` overrides the transport chosen by settings."""
    settings = settings or Settings()
    default_headers: dict[str, str] | None = None
    if settings.user_agent:
        default_headers = {USER_AGENT_HEADER: settings.user_agent}

    decoder = PydanticResponseDecoder(strict=True) if settings.decode_strict else DEFAULT_DECODER
    manager = NetworkManager(
        client or create_http_client(settings),
        decoder,
        default_headers=default_headers,
        timeout=RequestTimeout(
            connect_seconds=settings.connect_timeout_seconds,
            read_seconds=settings.read_timeout_seconds,
        ),
    )
    _log("network_manager_created", transport_backend=settings.transport_backend)
    return manager


async def request(
    endpoint: Endpoint,
    method: HTTPMethod,
    response_type: type[T] | Any,
    *,
    custom_decoder: ResponseDecoder | None = None,
    status_actions: StatusActionTable | None = None,
    headers: Mapping[str, str] | None = None,
    settings: Settings | None = None,
) -> T | None:
    """One-shot request: wire a manager, perform a single call, release the transport.

    Returns None when the endpoint does not form a request.
    """
    manager = create_network_manager(settings)
    try:
        return await manager.request(
            endpoint,
            method,
            response_type,
            custom_decoder=custom_decoder,
            status_actions=status_actions,
            headers=headers,
        )
    finally:
        try:
            await manager.close()
        except Exception as exc:
            logger.warning("http client close failed: {}", exc)
