"""Unit tests for NetworkManager.request and its delegating helpers."""
from __future__ import annotations

import asyncio

import pytest
from loguru import logger
from pydantic import BaseModel

from modern_networking.application.network_manager import NetworkManager
from modern_networking.domain.errors import (
    BadRequestError,
    DecodingError,
    ServerError,
    UnknownRequestError,
)
from modern_networking.domain.models import Get, Post, StatusAction, StatusClass
from modern_networking.domain.sample_responses import CatFact, DummyEndpoint
from modern_networking.infrastructure.decoding.pydantic_decoder import DEFAULT_DECODER
from modern_networking.ports.http_client import (
    HttpClientError,
    HttpClientTimeoutError,
    RequestTimeout,
)
from tests.fakes import CapturingDecoder, FakeHttpClient, FakeResponse
from tests.test_data import CAT_FACT_JSON, CAT_FACT_PAYLOAD, CAT_FACTS_JSON, ITEMS_ENDPOINT


class Item(BaseModel):
    id: int
    name: str


def test_request_end_to_end_decodes_cat_fact():
    client = FakeHttpClient(FakeResponse(200, CAT_FACT_JSON))
    manager = NetworkManager(client, DEFAULT_DECODER)
    expected = CatFact.model_validate(CAT_FACT_PAYLOAD)

    result = asyncio.run(manager.request(DummyEndpoint.CAT_FACTS, Get(), CatFact))

    assert result == expected
    assert client.sent[0].url == "https://cat-fact.herokuapp.com/facts"
    assert client.sent[0].method == "GET"


@pytest.mark.asyncio
async def test_request_decodes_list_shape():
    manager = NetworkManager(FakeHttpClient(FakeResponse(200, CAT_FACTS_JSON)), DEFAULT_DECODER)

    facts = await manager.request(DummyEndpoint.CAT_FACTS, Get(None), list[CatFact])

    assert facts is not None
    assert [fact.id for fact in facts] == [CAT_FACT_PAYLOAD["_id"]]


@pytest.mark.asyncio
async def test_request_sends_built_get_request(fake_client, manager):
    await manager.request(ITEMS_ENDPOINT, Get([("a", "1"), ("b", "2")]), dict)

    sent = fake_client.sent[0]
    assert sent.url == "https://example.test/items?a=1&b=2"
    assert sent.method == "GET"
    assert sent.body is None


@pytest.mark.asyncio
async def test_request_sends_post_body(fake_client, manager):
    await manager.request(ITEMS_ENDPOINT, Post({"x": "1"}), dict)

    assert fake_client.sent[0].method == "POST"
    assert fake_client.sent[0].body == b"x=1"


@pytest.mark.asyncio
async def test_malformed_endpoint_returns_none_without_sending(fake_client, manager):
    assert await manager.request("not a url", Get(), dict) is None
    assert await manager.request("https://example.test:99999/items", Post({"x": "1"}), dict) is None
    assert fake_client.sent == []


@pytest.mark.asyncio
async def test_response_url_and_elapsed_time_are_logged():
    client = FakeHttpClient(
        FakeResponse(200, b"{}", url="https://example.test/items?final=1", elapsed_seconds=1.5)
    )
    manager = NetworkManager(client, DEFAULT_DECODER)
    records: list[dict] = []
    sink_id = logger.add(lambda message: records.append(message.record), level="DEBUG")
    try:
        await manager.request(ITEMS_ENDPOINT, Get(), dict)
    finally:
        logger.remove(sink_id)

    received = [r["extra"] for r in records if r["extra"].get("event") == "response_received"]
    assert received == [
        {
            "service_name": "modern_networking",
            "event": "response_received",
            "url": "https://example.test/items?final=1",
            "status_code": 200,
            "status_class": "success",
            "elapsed_seconds": 1.5,
        }
    ]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "status,error_type",
    [(404, BadRequestError), (500, ServerError), (301, UnknownRequestError), (700, UnknownRequestError)],
)
async def test_request_propagates_dispatcher_failures(status, error_type):
    manager = NetworkManager(FakeHttpClient(FakeResponse(status, b'{"id": 1, "name": "x"}')), DEFAULT_DECODER)

    with pytest.raises(error_type):
        await manager.request(ITEMS_ENDPOINT, Get(), Item)


@pytest.mark.asyncio
async def test_missing_status_code_raises_unknown():
    manager = NetworkManager(FakeHttpClient(FakeResponse(None, b'{"id": 1, "name": "x"}')), DEFAULT_DECODER)

    with pytest.raises(UnknownRequestError):
        await manager.request(ITEMS_ENDPOINT, Get(), Item)


@pytest.mark.asyncio
async def test_decoding_failure_surfaces_as_decoding_error():
    manager = NetworkManager(FakeHttpClient(FakeResponse(200, b'{"id": "x"}')), DEFAULT_DECODER)

    with pytest.raises(DecodingError):
        await manager.request(ITEMS_ENDPOINT, Get(), Item)


@pytest.mark.asyncio
async def test_status_actions_are_honoured():
    manager = NetworkManager(FakeHttpClient(FakeResponse(422, b'{"id": 0, "name": "invalid"}')), DEFAULT_DECODER)

    result = await manager.request(
        ITEMS_ENDPOINT,
        Post({"name": ""}),
        Item,
        status_actions={StatusClass.CLIENT_ERROR: StatusAction.DECODE},
    )
    assert result == Item(id=0, name="invalid")

    with pytest.raises(DecodingError):
        await manager.request(
            ITEMS_ENDPOINT,
            Post({"name": ""}),
            Item,
            status_actions={StatusClass.CLIENT_ERROR: StatusAction.FAIL},
        )


@pytest.mark.asyncio
async def test_custom_decoder_overrides_default():
    decoder = CapturingDecoder(Item(id=5, name="custom"))
    manager = NetworkManager(FakeHttpClient(FakeResponse(200, b"payload")), DEFAULT_DECODER)

    result = await manager.request(ITEMS_ENDPOINT, Get(), Item, custom_decoder=decoder)

    assert result == Item(id=5, name="custom")
    assert decoder.calls == [(Item, b"payload")]


@pytest.mark.asyncio
async def test_manager_default_decoder_used_when_no_custom_decoder():
    decoder = CapturingDecoder({"from": "default"})
    manager = NetworkManager(FakeHttpClient(FakeResponse(200, b"payload")), default_decoder=decoder)

    assert await manager.request(ITEMS_ENDPOINT, Get(), dict) == {"from": "default"}


@pytest.mark.asyncio
@pytest.mark.parametrize("exc", [HttpClientError("refused"), HttpClientTimeoutError("slow")])
async def test_transport_errors_pass_through_unmodified(exc):
    manager = NetworkManager(FakeHttpClient(raise_on_send=exc), DEFAULT_DECODER)

    with pytest.raises(HttpClientError) as exc_info:
        await manager.request(ITEMS_ENDPOINT, Get(), Item)

    assert exc_info.value is exc


@pytest.mark.asyncio
async def test_default_headers_merge_with_call_headers():
    client = FakeHttpClient()
    manager = NetworkManager(client, DEFAULT_DECODER, default_headers={"User-Agent": "ua/1", "Accept": "text/plain"})

    await manager.request(ITEMS_ENDPOINT, Get(), dict, headers={"Accept": "application/json"})

    assert client.sent[0].headers == {"User-Agent": "ua/1", "Accept": "application/json"}


@pytest.mark.asyncio
async def test_timeout_is_handed_to_transport():
    client = FakeHttpClient()
    timeout = RequestTimeout(connect_seconds=1.0, read_seconds=2.0)
    manager = NetworkManager(client, DEFAULT_DECODER, timeout=timeout)

    await manager.request(ITEMS_ENDPOINT, Get(), dict)

    assert client.timeouts == [timeout]


@pytest.mark.asyncio
async def test_concurrent_calls_do_not_share_requests():
    client = FakeHttpClient(FakeResponse(200, b'{"id": 1, "name": "x"}'))
    manager = NetworkManager(client, DEFAULT_DECODER)

    results = await asyncio.gather(
        *(manager.request(ITEMS_ENDPOINT, Get([("page", str(n))]), Item) for n in range(5))
    )

    assert len(results) == 5
    assert sorted(r.url for r in client.sent) == sorted(
        f"https://example.test/items?page={n}" for n in range(5)
    )


def test_build_request_and_handle_response_delegate():
    manager = NetworkManager(FakeHttpClient(), DEFAULT_DECODER, default_headers={"User-Agent": "ua/1"})

    outbound = manager.build_request(Get(), ITEMS_ENDPOINT, {"X-Trace": "1"})
    assert outbound is not None
    assert outbound.headers == {"User-Agent": "ua/1", "X-Trace": "1"}
    assert manager.build_request(Get(), "not a url") is None

    assert manager.handle_response(Item, b'{"id": 2, "name": "y"}', 200) == Item(id=2, name="y")
    with pytest.raises(BadRequestError):
        manager.handle_response(Item, b"{}", 400)


@pytest.mark.asyncio
async def test_async_context_manager_closes_transport():
    client = FakeHttpClient()

    async with NetworkManager(client, DEFAULT_DECODER) as manager:
        await manager.request(ITEMS_ENDPOINT, Get(), dict)

    assert client.closed is True
