from __future__ import annotations

import pytest

from modern_networking.application.network_manager import NetworkManager
from modern_networking.infrastructure.decoding.pydantic_decoder import DEFAULT_DECODER
from tests.fakes import FakeHttpClient


@pytest.fixture()
def fake_client() -> FakeHttpClient:
    return FakeHttpClient()


@pytest.fixture()
def manager(fake_client: FakeHttpClient) -> NetworkManager:
    return NetworkManager(fake_client, DEFAULT_DECODER)
