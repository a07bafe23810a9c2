"""Typed HTTP requests: build, send, and decode a response into a requested shape."""
from __future__ import annotations

from modern_networking.application.network_manager import NetworkManager
from modern_networking.composition import create_network_manager, request
from modern_networking.config.settings import Settings
from modern_networking.domain.errors import (
    BadRequestError,
    DecodingError,
    RequestError,
    RequestErrorKind,
    ServerError,
    UnknownRequestError,
)
from modern_networking.domain.models import (
    Get,
    HTTPMethod,
    OutboundRequest,
    Post,
    StatusAction,
    StatusClass,
)
from modern_networking.domain.request_builder import build_request
from modern_networking.domain.response_dispatcher import handle_response
from modern_networking.infrastructure.decoding.pydantic_decoder import (
    KeyDecodingStrategy,
    PydanticResponseDecoder,
)
from modern_networking.ports.http_client import HttpClientError, HttpClientTimeoutError

__all__ = [
    "BadRequestError",
    "DecodingError",
    "Get",
    "HTTPMethod",
    "HttpClientError",
    "HttpClientTimeoutError",
    "KeyDecodingStrategy",
    "NetworkManager",
    "OutboundRequest",
    "Post",
    "PydanticResponseDecoder",
    "RequestError",
    "RequestErrorKind",
    "ServerError",
    "Settings",
    "StatusAction",
    "StatusClass",
    "UnknownRequestError",
    "build_request",
    "create_network_manager",
    "handle_response",
    "request",
]
