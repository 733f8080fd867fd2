"""
Unit tests for ExternalApiClient retry behaviour.

System role: Verification of retry on transient failures via httpx.MockTransport
"""

import json

import httpx
import pytest

from backoffice.boundary.http import ExternalApiClient


class RecordingHandler:
    """MockTransport handler replaying queued responses and counting calls."""

    def __init__(self, *responses) -> None:
        self.responses = list(responses)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        outcome = self.responses.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


def make_client(handler, attempts: int = 3) -> ExternalApiClient:
    return ExternalApiClient(
        timeout=5.0,
        retry_attempts=attempts,
        retry_max_wait=0,
        retry_initial_wait=0,
        transport=httpx.MockTransport(handler),
    )


@pytest.mark.asyncio
async def test_returns_json_and_sends_params_and_headers():
    handler = RecordingHandler(httpx.Response(200, json={"total": 3}))
    client = make_client(handler)

    data = await client.request_json(
        "GET",
        "https://api.example.com/search",
        headers={"Authorization": "Bearer abc"},
        params={"q": "open"},
    )

    assert data == {"total": 3}
    request = handler.requests[0]
    assert request.url.params["q"] == "open"
    assert request.headers["Authorization"] == "Bearer abc"


@pytest.mark.asyncio
async def test_server_errors_are_retried():
    handler = RecordingHandler(
        httpx.Response(503),
        httpx.Response(502),
        httpx.Response(200, json={"ok": True}),
    )

    data = await make_client(handler).request_json("GET", "https://api.example.com/health")

    assert data == {"ok": True}
    assert len(handler.requests) == 3


@pytest.mark.asyncio
async def test_transport_errors_are_retried():
    handler = RecordingHandler(
        httpx.ConnectError("connection refused"),
        httpx.Response(200, json=[1, 2]),
    )

    assert await make_client(handler).request_json("GET", "https://api.example.com/items") == [1, 2]
    assert len(handler.requests) == 2


@pytest.mark.asyncio
async def test_client_errors_are_not_retried():
    handler = RecordingHandler(httpx.Response(404), httpx.Response(200))

    with pytest.raises(httpx.HTTPStatusError):
        await make_client(handler).request("GET", "https://api.example.com/missing")

    assert len(handler.requests) == 1


@pytest.mark.asyncio
async def test_gives_up_after_configured_attempts():
    handler = RecordingHandler(httpx.Response(500), httpx.Response(500))

    with pytest.raises(httpx.HTTPStatusError):
        await make_client(handler, attempts=2).request("GET", "https://api.example.com/flaky")

    assert len(handler.requests) == 2


@pytest.mark.asyncio
async def test_retry_can_be_disabled():
    handler = RecordingHandler(httpx.Response(500), httpx.Response(200))

    with pytest.raises(httpx.HTTPStatusError):
        await make_client(handler).request("GET", "https://api.example.com/flaky", retry=False)

    assert len(handler.requests) == 1


@pytest.mark.asyncio
async def test_post_sends_json_body():
    handler = RecordingHandler(httpx.Response(200, json={"id": 1}))

    await make_client(handler).request_json("POST", "https://api.example.com/query", json_body={"jql": "x"})

    assert handler.requests[0].method == "POST"
    assert json.loads(handler.requests[0].read()) == {"jql": "x"}
