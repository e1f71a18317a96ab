from __future__ import annotations

import json

import httpx
import pytest

from azchat.client import AzureChatClient, AzureChatError, InvalidArgument
from azchat.config import AzureConfig, DecoderOptions
from azchat.errors import DuplicateField
from tests.utils import CONCRETE_DOCUMENT

CONFIG = AzureConfig(endpoint="https://unit.openai.azure.com", deployment="gpt4o", api_key="secret")


def _transport(status_code: int, body: str, seen: list[httpx.Request]) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(status_code, content=body.encode("utf-8"), headers={"x-request-id": "req-1"})

    return httpx.MockTransport(handler)


@pytest.mark.asyncio
async def test_create_decodes_merged_response() -> None:
    seen: list[httpx.Request] = []
    async with AzureChatClient(CONFIG, transport=_transport(200, CONCRETE_DOCUMENT, seen)) as client:
        record = await client.create({"messages": [{"role": "user", "content": "hello"}]})

    assert record.choices[0].content_filter_results is not None
    request = seen[0]
    assert request.url.path == "/openai/deployments/gpt4o/chat/completions"
    assert request.url.params["api-version"] == CONFIG.api_version
    assert request.headers["api-key"] == "secret"
    assert json.loads(request.content)["messages"][0]["content"] == "hello"


@pytest.mark.asyncio
async def test_create_rejects_streaming_requests() -> None:
    seen: list[httpx.Request] = []
    async with AzureChatClient(CONFIG, transport=_transport(200, CONCRETE_DOCUMENT, seen)) as client:
        with pytest.raises(InvalidArgument):
            await client.create({"messages": [], "stream": True})
    assert seen == []


@pytest.mark.asyncio
async def test_create_raises_on_error_status() -> None:
    seen: list[httpx.Request] = []
    async with AzureChatClient(CONFIG, transport=_transport(429, '{"error": "busy"}', seen)) as client:
        with pytest.raises(AzureChatError) as excinfo:
            await client.create({"messages": []})
    assert excinfo.value.status_code == 429
    assert excinfo.value.request_id == "req-1"


@pytest.mark.asyncio
async def test_create_propagates_decode_errors() -> None:
    seen: list[httpx.Request] = []
    body = '{"id":"a","id":"b"}'
    transport = _transport(200, body, seen)
    async with AzureChatClient(CONFIG, options=DecoderOptions(strategy="streaming"), transport=transport) as client:
        with pytest.raises(DuplicateField):
            await client.create({"messages": []})
