"""HTTP client factory: builds AbstractHttpClient from settings (no provider logic in composition)."""
from __future__ import annotations

import httpx

from modern_networking.config.settings import Settings
from modern_networking.infrastructure.http.httpx_client import HttpxHttpClient
from modern_networking.ports.http_client import AbstractHttpClient


def create_http_client(settings: Settings) -> AbstractHttpClient:
    """Select the transport backend from settings. Timeouts are applied per request by the adapter."""
    backend = settings.transport_backend.strip().lower()

    if backend in ("httpx", ):
        return HttpxHttpClient(httpx.AsyncClient(), follow_redirects=settings.follow_redirects)
    raise ValueError(f"Unsupported transport backend: {backend}")
