"""Chat proxy error mapping, with the upstream replaced by httpx.MockTransport."""

import asyncio
import json

import httpx
import pytest
from fastapi import HTTPException

from sales_dashboard.core.config import Settings
from sales_dashboard.service.chat_service import FALLBACK_ANSWER, ChatService


def ask(handler, key="test-key", message="hi", context="ctx"):
    async def go():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            service = ChatService(Settings(NVIDIA_API_KEY=key), client=client)
            return await service.ask(message, context)

    return asyncio.run(go())


class TestChatService:
    def test_request_shape(self):
        captured = {}

        def handler(request):
            captured["auth"] = request.headers["Authorization"]
            captured["url"] = str(request.url)
            captured["body"] = json.loads(request.content)
            return httpx.Response(200, json={"choices": [{"message": {"content": "ok"}}]})

        assert ask(handler, message="What sells best?", context="Business data") == "ok"

        body = captured["body"]
        assert captured["auth"] == "Bearer test-key"
        assert captured["url"] == "https://integrate.api.nvidia.com/v1/chat/completions"
        assert body["model"] == "meta/llama-3.1-8b-instruct"
        assert body["temperature"] == 0.7
        assert body["max_tokens"] == 1024
        assert body["messages"][0]["role"] == "system"
        assert "Business data" in body["messages"][0]["content"]
        assert body["messages"][1] == {"role": "user", "content": "What sells best?"}

    def test_missing_key(self):
        with pytest.raises(HTTPException) as exc:
            ask(lambda r: httpx.Response(200), key=None)
        assert exc.value.status_code == 500

    @pytest.mark.parametrize("upstream, expected", [(401, 401), (429, 429), (503, 503), (400, 400)])
    def test_upstream_status(self, upstream, expected):
        with pytest.raises(HTTPException) as exc:
            ask(lambda r: httpx.Response(upstream, text="nope"))
        assert exc.value.status_code == expected

    def test_transport_error(self):
        def handler(request):
            raise httpx.ConnectError("boom", request=request)

        with pytest.raises(HTTPException) as exc:
            ask(handler)
        assert exc.value.status_code == 500

    def test_malformed_payload(self):
        assert ask(lambda r: httpx.Response(200, json={"choices": []})) == FALLBACK_ANSWER
