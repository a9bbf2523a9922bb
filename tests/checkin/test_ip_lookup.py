from __future__ import annotations

import asyncio

import httpx
import pytest

from src.checkin_engine.checkin_engine.checkin.ip_lookup import HttpxPublicIpLookup
from src.checkin_engine.checkin_engine.core.exceptions import NetworkError

URL = "https://ip.example.test/?format=json"


def _lookup(handler) -> HttpxPublicIpLookup:
    return HttpxPublicIpLookup(URL, transport=httpx.MockTransport(handler))


def test_returns_ip_from_json_body():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(str(request.url))
        return httpx.Response(200, json={"ip": " 203.0.113.7 "})

    assert asyncio.run(_lookup(handler).get_public_ip()) == "203.0.113.7"
    assert seen == [URL]


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(500, text="boom"),
        httpx.Response(200, text="not json"),
        httpx.Response(200, json={"address": "203.0.113.7"}),
        httpx.Response(200, json={"ip": ""}),
        httpx.Response(200, json=["203.0.113.7"]),
    ],
)
def test_bad_responses_raise_network_error(response):
    with pytest.raises(NetworkError):
        asyncio.run(_lookup(lambda request: response).get_public_ip())


def test_connection_failure_raises_network_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("unreachable", request=request)

    with pytest.raises(NetworkError):
        asyncio.run(_lookup(handler).get_public_ip())
