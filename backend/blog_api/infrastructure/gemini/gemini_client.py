"""Google Gemini API client — implements the ChatProvider interface.

Calls the ``models/{model}:generateContent`` REST endpoint of the
Generative Language API with httpx.
"""

import logging
from typing import Any

import httpx

from blog_api.application.interfaces.chat_provider import ChatProvider
from blog_api.domain.entities import ChatMessage, ChatCompletionResult, TokenUsage
from blog_api.domain.exceptions import ChatProviderError

logger = logging.getLogger(__name__)


class GeminiClient(ChatProvider):
    """Infrastructure adapter — connects to the Google Gemini API."""

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://generativelanguage.googleapis.com",
        timeout: float | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._http_client = http_client

    @property
    def provider_name(self) -> str:
        return "gemini"

    def _build_payload(
        self,
        messages: list[ChatMessage],
        *,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> dict[str, Any]:
        """Map chat messages onto Gemini ``contents`` and ``systemInstruction``."""
        system_parts = [{"text": m.content} for m in messages if m.role == "system"]
        contents = [
            {
                "role": "model" if m.role == "assistant" else "user",
                "parts": [{"text": m.content}],
            }
            for m in messages
            if m.role != "system"
        ]
        payload: dict[str, Any] = {"contents": contents}
        if system_parts:
            payload["systemInstruction"] = {"parts": system_parts}

        generation_config: dict[str, Any] = {}
        if temperature is not None:
            generation_config["temperature"] = temperature
        if max_tokens is not None:
            generation_config["maxOutputTokens"] = max_tokens
        if generation_config:
            payload["generationConfig"] = generation_config
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
        """Send a single generateContent request to Gemini."""
        if not self._api_key:
            raise ChatProviderError(
                provider=self.provider_name,
                status_code=401,
                message="GEMINI_API_KEY is not configured",
            )

        payload = self._build_payload(
            messages, temperature=temperature, max_tokens=max_tokens
        )
        url = f"{self._base_url}/v1beta/models/{model}:generateContent"

        client = await self._get_client()
        should_close = self._http_client is None

        try:
            response = await client.post(
                url, params={"key": self._api_key}, json=payload
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
            return self._parse_response(data, model)

        finally:
            if should_close:
                await client.aclose()

    def _malformed(self, detail: str) -> ChatProviderError:
        return ChatProviderError(
            provider=self.provider_name,
            status_code=502,
            message=f"Malformed provider response: {detail}",
        )

    def _parse_response(self, data: Any, model: str) -> ChatCompletionResult:
        """Parse the generateContent JSON body into a domain entity."""
        if not isinstance(data, dict):
            raise self._malformed(f"expected an object, got {type(data).__name__}")

        candidates = data.get("candidates") or []
        if not candidates:
            feedback = data.get("promptFeedback")
            block_reason = feedback.get("blockReason") if isinstance(feedback, dict) else None
            raise ChatProviderError(
                provider=self.provider_name,
                status_code=500,
                message=(
                    f"Prompt blocked: {block_reason}" if block_reason
                    else "No candidates in response"
                ),
            )
        if not isinstance(candidates, list) or not isinstance(candidates[0], dict):
            raise self._malformed("candidates must be a list of objects")

        candidate = candidates[0]
        content = candidate.get("content") or {}
        if not isinstance(content, dict):
            raise self._malformed("candidate content must be an object")
        parts = content.get("parts") or []
        if not isinstance(parts, list) or not all(
            isinstance(part, dict) and isinstance(part.get("text", ""), str)
            for part in parts
        ):
            raise self._malformed("candidate parts must be objects with text")

        text = "".join(part.get("text", "") for part in parts)
        usage = data.get("usageMetadata")
        if not isinstance(usage, dict):
            usage = {}

        logger.debug(
            "Gemini response: model=%s finish=%s chars=%d",
            model,
            candidate.get("finishReason"),
            len(text),
        )

        return ChatCompletionResult(
            model=data.get("modelVersion", model),
            content=text,
            finish_reason=str(candidate.get("finishReason", "STOP")).lower(),
            usage=TokenUsage(
                prompt_tokens=usage.get("promptTokenCount", 0),
                completion_tokens=usage.get("candidatesTokenCount", 0),
                total_tokens=usage.get("totalTokenCount", 0),
            ),
            provider=self.provider_name,
        )

    def _raise_provider_error(self, response: httpx.Response) -> None:
        """Raise ChatProviderError from a non-200 httpx Response."""
        try:
            error = response.json().get("error", {})
            message = error.get("message", response.text)
        except (ValueError, AttributeError):
            message = response.text

        raise ChatProviderError(
            provider=self.provider_name,
            status_code=response.status_code,
            message=message,
        )
