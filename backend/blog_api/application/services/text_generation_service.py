"""Text generation use case — the single entry point to the language model."""

import logging
import time

import httpx

from blog_api.application.interfaces.chat_provider import ChatProvider
from blog_api.application.services.rate_limiter import TokenBucketRateLimiter
from blog_api.domain.entities import ChatMessage
from blog_api.domain.exceptions import ChatProviderError, GenerationError

logger = logging.getLogger(__name__)


class TextGenerationService:
    """Turns a prompt into generated text through the configured ChatProvider.

    This service is provider-agnostic: it receives a ChatProvider via
    dependency injection. Every call is paced by the shared rate limiter.
    Failures of any kind surface as GenerationError; nothing is retried.
    """

    def __init__(
        self,
        provider: ChatProvider,
        model: str,
        rate_limiter: TokenBucketRateLimiter | None = None,
    ):
        self._provider = provider
        self._model = model
        self._rate_limiter = rate_limiter

    @property
    def provider_name(self) -> str:
        return self._provider.provider_name

    @property
    def model(self) -> str:
        return self._model

    async def generate(self, prompt: str) -> str:
        """Send ``prompt`` as one user message and return the plain response text."""
        if not prompt or not prompt.strip():
            raise ValueError("prompt must be a non-empty string")

        if self._rate_limiter is not None:
            await self._rate_limiter.acquire()

        start = time.monotonic()
        try:
            result = await self._provider.complete(
                messages=[ChatMessage(role="user", content=prompt)],
                model=self._model,
            )
        except ChatProviderError as e:
            raise GenerationError(e.message) from e
        except httpx.HTTPError as e:
            raise GenerationError(str(e) or type(e).__name__) from e
        except (KeyError, TypeError, AttributeError) as e:
            raise GenerationError(f"Malformed provider response: {e}") from e

        if not isinstance(result.content, str):
            raise GenerationError(
                f"Malformed provider response: content is {type(result.content).__name__}"
            )

        duration_ms = int((time.monotonic() - start) * 1000)
        logger.info(
            "Generated %d chars with %s/%s in %dms (tokens=%d)",
            len(result.content),
            result.provider or self._provider.provider_name,
            result.model or self._model,
            duration_ms,
            result.usage.total_tokens,
        )

        if not result.content.strip():
            raise GenerationError("Model returned an empty response")
        return result.content
