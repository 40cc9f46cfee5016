"""Tests for the OpenAI client, mocking the HTTP API with respx."""

import json

import httpx
import openai
import pytest
import respx

from yt_transcript_chat.errors import ConfigurationMissing
from yt_transcript_chat.llm import OpenAIClient

BASE = "https://llm.test/v1"


def _completion(content):
    return {
        "id": "chatcmpl-1",
        "object": "chat.completion",
        "created": 1700000000,
        "model": "gpt-4o",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": content},
                "finish_reason": "stop",
            }
        ],
        "usage": {"prompt_tokens": 10, "completion_tokens": 5, "total_tokens": 15},
    }


class TestOpenAIClient:
    @respx.mock
    @pytest.mark.asyncio
    async def test_complete(self):
        route = respx.post(f"{BASE}/chat/completions").mock(
            return_value=httpx.Response(200, json=_completion("A summary."))
        )
        client = OpenAIClient(api_key="test-key", model="gpt-4o", base_url=BASE)
        result = await client.complete(
            [{"role": "user", "content": "hi"}], max_tokens=500, temperature=0.5
        )
        assert result == "A summary."

        body = json.loads(route.calls.last.request.content)
        assert body["model"] == "gpt-4o"
        assert body["max_tokens"] == 500
        assert body["temperature"] == 0.5
        assert route.calls.last.request.headers["Authorization"] == "Bearer test-key"
        await client.close()

    @respx.mock
    @pytest.mark.asyncio
    async def test_empty_content(self):
        respx.post(f"{BASE}/chat/completions").mock(
            return_value=httpx.Response(200, json=_completion(None))
        )
        client = OpenAIClient(api_key="test-key", base_url=BASE)
        assert await client.complete([], max_tokens=10, temperature=0.0) is None
        await client.close()

    @respx.mock
    @pytest.mark.asyncio
    async def test_api_error_propagates(self):
        respx.post(f"{BASE}/chat/completions").mock(
            return_value=httpx.Response(500, json={"error": {"message": "boom"}})
        )
        client = OpenAIClient(api_key="test-key", base_url=BASE)
        with pytest.raises(openai.APIError):
            await client.complete([], max_tokens=10, temperature=0.0)
        await client.close()

    @pytest.mark.asyncio
    async def test_missing_key(self):
        client = OpenAIClient(api_key="")
        with pytest.raises(ConfigurationMissing, match="OPENAI_API_KEY"):
            await client.complete([], max_tokens=10, temperature=0.0)
        await client.close()  # Never opened, should not raise
