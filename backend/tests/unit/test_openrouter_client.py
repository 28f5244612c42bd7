"""Unit tests for the OpenRouterClient."""

import json

import httpx
import pytest

from blog_api.infrastructure.openrouter.openrouter_client import OpenRouterClient
from blog_api.domain.entities import ChatMessage
from blog_api.domain.exceptions import ChatProviderError


# ── Helpers ──


def _mock_openrouter_response(
    content: str = "Hello!",
    model: str = "google/gemini-2.5-flash",
    prompt_tokens: int = 10,
    completion_tokens: int = 5,
    total_tokens: int = 15,
) -> dict:
    """Build a mock OpenRouter JSON response."""
    return {
        "id": "chatcmpl-test123",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": content},
                "finish_reason": "stop",
            }
        ],
        "model": model,
        "usage": {
            "prompt_tokens": prompt_tokens,
            "completion_tokens": completion_tokens,
            "total_tokens": total_tokens,
        },
    }


def _make_mock_transport(
    response_data: dict | None = None,
    status_code: int = 200,
    error_data: dict | None = None,
    captured: list[httpx.Request] | None = None,
) -> httpx.MockTransport:
    """Create a mock transport that returns a fixed response."""

    def handler(request: httpx.Request) -> httpx.Response:
        if captured is not None:
            captured.append(request)
        if error_data:
            return httpx.Response(status_code, json=error_data)
        return httpx.Response(status_code, json=response_data or {})

    return httpx.MockTransport(handler)


def _client(transport: httpx.MockTransport, api_key: str = "test-key") -> OpenRouterClient:
    return OpenRouterClient(
        api_key=api_key,
        http_client=httpx.AsyncClient(transport=transport),
    )


# ── Tests ──


@pytest.mark.asyncio
async def test_complete_parses_response():
    """Non-streaming call correctly parses OpenRouter JSON response."""
    response_data = _mock_openrouter_response(content="# Title\nBody")
    client = _client(_make_mock_transport(response_data))

    result = await client.complete(
        messages=[ChatMessage(role="user", content="Write an article")],
        model="google/gemini-2.5-flash",
    )

    assert result.content == "# Title\nBody"
    assert result.model == "google/gemini-2.5-flash"
    assert result.usage.prompt_tokens == 10
    assert result.usage.completion_tokens == 5
    assert result.usage.total_tokens == 15
    assert result.provider == "openrouter"


@pytest.mark.asyncio
async def test_complete_sends_bearer_token_and_messages():
    captured: list[httpx.Request] = []
    client = _client(_make_mock_transport(_mock_openrouter_response(), captured=captured))

    await client.complete(
        messages=[ChatMessage(role="user", content="Hi")],
        model="google/gemini-2.5-flash",
    )

    request = captured[0]
    assert request.url.path.endswith("/chat/completions")
    assert request.headers["Authorization"] == "Bearer test-key"
    body = json.loads(request.content)
    assert body["model"] == "google/gemini-2.5-flash"
    assert body["messages"] == [{"role": "user", "content": "Hi"}]


@pytest.mark.asyncio
async def test_complete_error_handling():
    """Non-streaming call raises ChatProviderError on 4xx/5xx."""
    error_data = {"error": {"code": 429, "message": "Rate limit exceeded"}}
    client = _client(_make_mock_transport(error_data=error_data, status_code=429))

    with pytest.raises(ChatProviderError) as exc_info:
        await client.complete(
            messages=[ChatMessage(role="user", content="Hi")],
            model="google/gemini-2.5-flash",
        )

    assert exc_info.value.status_code == 429
    assert "Rate limit" in exc_info.value.message


@pytest.mark.asyncio
async def test_complete_error_in_200_body():
    error_data = {"error": {"code": 402, "message": "Insufficient credits"}}
    client = _client(_make_mock_transport(error_data=error_data, status_code=200))

    with pytest.raises(ChatProviderError) as exc_info:
        await client.complete(
            messages=[ChatMessage(role="user", content="Hi")],
            model="google/gemini-2.5-flash",
        )

    assert exc_info.value.status_code == 402


@pytest.mark.asyncio
async def test_complete_without_choices():
    client = _client(_make_mock_transport({"choices": []}))

    with pytest.raises(ChatProviderError, match="No choices"):
        await client.complete(
            messages=[ChatMessage(role="user", content="Hi")],
            model="google/gemini-2.5-flash",
        )


@pytest.mark.asyncio
async def test_complete_without_api_key_does_not_call_api():
    captured: list[httpx.Request] = []
    client = _client(_make_mock_transport(_mock_openrouter_response(), captured=captured), api_key="")

    with pytest.raises(ChatProviderError) as exc_info:
        await client.complete(
            messages=[ChatMessage(role="user", content="Hi")],
            model="google/gemini-2.5-flash",
        )

    assert exc_info.value.status_code == 401
    assert captured == []


@pytest.mark.parametrize(
    "body",
    [
        ["unexpected"],
        {"choices": ["not-an-object"]},
        {"choices": [{"message": "plain text"}]},
        {"choices": [{"message": {"role": "assistant", "content": [{"type": "text", "text": "Hi"}]}}]},
    ],
)
@pytest.mark.asyncio
async def test_complete_rejects_unexpected_response_shape(body):
    client = _client(httpx.MockTransport(lambda request: httpx.Response(200, json=body)))

    with pytest.raises(ChatProviderError) as exc_info:
        await client.complete(
            messages=[ChatMessage(role="user", content="Hi")],
            model="google/gemini-2.5-flash",
        )

    assert exc_info.value.status_code == 502
    assert exc_info.value.message.startswith("Malformed provider response")


@pytest.mark.asyncio
async def test_complete_string_error_in_200_body():
    client = _client(httpx.MockTransport(lambda request: httpx.Response(200, json={"error": "overloaded"})))

    with pytest.raises(ChatProviderError) as exc_info:
        await client.complete(
            messages=[ChatMessage(role="user", content="Hi")],
            model="google/gemini-2.5-flash",
        )

    assert exc_info.value.status_code == 500
    assert exc_info.value.message == "overloaded"
