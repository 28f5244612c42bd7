"""Abstract chat provider interface — port for AI provider adapters.

This interface enables multi-provider support. Each AI provider
(Gemini, OpenRouter, etc.) implements this interface.
"""

from abc import ABC, abstractmethod

from blog_api.domain.entities import ChatMessage, ChatCompletionResult


class ChatProvider(ABC):
    """Port — defines what the application layer needs from any chat provider."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Unique name identifying this provider (e.g. 'gemini', 'openrouter')."""
        ...

    @abstractmethod
    async def complete(
        self,
        messages: list[ChatMessage],
        model: str,
        *,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> ChatCompletionResult:
        """Send a non-streaming chat completion request.

        Args:
            messages: The conversation history.
            model: The model identifier (e.g. 'gemini-2.5-flash').
            temperature: Sampling temperature (0.0–2.0).
            max_tokens: Maximum tokens in the response.

        Returns:
            A ChatCompletionResult with content and usage.

        Raises:
            ChatProviderError: If the provider returns an error.
        """
        ...
