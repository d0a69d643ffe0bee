"""Tests for HTTP-based adapters."""

import asyncio
import json

import httpx
import pytest

from diet_assistant.adapters.fdc_client import HttpxFdcClient


def test_fdc_client_search() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"foods": []})

    transport = httpx.MockTransport(handler)
    async_client = httpx.AsyncClient(transport=transport)
    client = HttpxFdcClient(
        api_key="key",
        base_url="https://api.test/fdc/v1/",
        http_client=async_client,
    )

    search = asyncio.run(client.search_foods("rice"))

    assert search == {"foods": []}
    assert seen[0].method == "POST"
    assert seen[0].url.path == "/fdc/v1/foods/search"
    assert seen[0].url.params["api_key"] == "key"
    assert json.loads(seen[0].content) == {"query": "rice", "pageSize": 1}


def test_fdc_client_raises_on_http_error() -> None:
    transport = httpx.MockTransport(lambda request: httpx.Response(403))
    client = HttpxFdcClient(
        api_key="bad",
        base_url="https://api.test",
        http_client=httpx.AsyncClient(transport=transport),
    )

    with pytest.raises(httpx.HTTPStatusError):
        asyncio.run(client.search_foods("rice"))
