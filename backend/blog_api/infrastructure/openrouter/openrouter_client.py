"""OpenRouter API client — implements the ChatProvider interface.

Communicates with the OpenRouter chat-completions endpoint
(https://openrouter.ai/api/v1) using httpx.
"""

import logging
from typing import Any

import httpx

from blog_api.application.interfaces.chat_provider import ChatProvider
from blog_api.domain.entities import ChatMessage, ChatCompletionResult, TokenUsage
from blog_api.domain.exceptions import ChatProviderError

logger = logging.getLogger(__name__)


class OpenRouterClient(ChatProvider):
    """Infrastructure adapter — connects to the OpenRouter API."""

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://openrouter.ai/api/v1",
        app_name: str = "Blog Article Generator",
        timeout: float | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._app_name = app_name
        self._timeout = timeout
        self._http_client = http_client

    @property
    def provider_name(self) -> str:
        return "openrouter"

    def _get_headers(self) -> dict[str, str]:
        """Standard headers for OpenRouter requests."""
        return {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
            "X-Title": self._app_name,
        }

    def _build_payload(
        self,
        messages: list[ChatMessage],
        model: str,
        *,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> dict:
        """Build the request payload for the OpenRouter API."""
        payload: dict = {
            "model": model,
            "messages": [{"role": m.role, "content": m.content} for m in messages],
        }
        if temperature is not None:
            payload["temperature"] = temperature
        if max_tokens is not None:
            payload["max_tokens"] = max_tokens
        return payload

    async def _get_client(self) -> httpx.AsyncClient:
        """Return the injected client or create a new one."""
        if self._http_client is not None:
            return self._http_client
        return httpx.AsyncClient(timeout=self._timeout)

    async def complete(
        self,
        messages: list[ChatMessage],
        model: str,
        *,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> ChatCompletionResult:
        """Send a non-streaming chat completion to OpenRouter."""
        if not self._api_key:
            raise ChatProviderError(
                provider=self.provider_name,
                status_code=401,
                message="OPENROUTER_API_KEY is not configured",
            )

        payload = self._build_payload(
            messages, model, temperature=temperature, max_tokens=max_tokens
        )
        url = f"{self._base_url}/chat/completions"

        client = await self._get_client()
        should_close = self._http_client is None

        try:
            response = await client.post(
                url, headers=self._get_headers(), json=payload
            )

            if response.status_code != 200:
                self._raise_provider_error(response)

            try:
                data = response.json()
            except ValueError:
                raise ChatProviderError(
                    provider=self.provider_name,
                    status_code=502,
                    message="Malformed JSON in provider response",
                )
            return self._parse_completion_response(data)

        finally:
            if should_close:
                await client.aclose()

    def _malformed(self, detail: str) -> ChatProviderError:
        return ChatProviderError(
            provider=self.provider_name,
            status_code=502,
            message=f"Malformed provider response: {detail}",
        )

    def _parse_completion_response(self, data: Any) -> ChatCompletionResult:
        """Parse the OpenRouter JSON response into a domain entity."""
        if not isinstance(data, dict):
            raise self._malformed(f"expected an object, got {type(data).__name__}")

        # OpenRouter can report errors inside a 200 body
        if "error" in data:
            error = data["error"]
            if not isinstance(error, dict):
                error = {"message": str(error)}
            code = error.get("code")
            raise ChatProviderError(
                provider=self.provider_name,
                status_code=code if isinstance(code, int) else 500,
                message=str(error.get("message", "Unknown error")),
            )

        choices = data.get("choices", [])
        if not choices:
            raise ChatProviderError(
                provider=self.provider_name,
                status_code=500,
                message="No choices in response",
            )
        if not isinstance(choices, list) or not isinstance(choices[0], dict):
            raise self._malformed("choices must be a list of objects")

        choice = choices[0]
        message = choice.get("message") or {}
        if not isinstance(message, dict):
            raise self._malformed("choice message must be an object")
        content = message.get("content") or ""
        if not isinstance(content, str):
            raise self._malformed(f"message content must be a string, got {type(content).__name__}")
        usage_data = data.get("usage")
        if not isinstance(usage_data, dict):
            usage_data = {}

        return ChatCompletionResult(
            model=data.get("model", ""),
            content=content,
            finish_reason=choice.get("finish_reason", "stop") or "stop",
            usage=TokenUsage(
                prompt_tokens=usage_data.get("prompt_tokens", 0),
                completion_tokens=usage_data.get("completion_tokens", 0),
                total_tokens=usage_data.get("total_tokens", 0),
            ),
            provider=self.provider_name,
        )

    def _raise_provider_error(self, response: httpx.Response) -> None:
        """Raise ChatProviderError from a non-200 httpx Response."""
        try:
            data = response.json()
            error = data.get("error", {})
            message = error.get("message", response.text)
        except (ValueError, AttributeError):
            message = response.text

        raise ChatProviderError(
            provider=self.provider_name,
            status_code=response.status_code,
            message=message,
        )
