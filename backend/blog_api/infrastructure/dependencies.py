"""FastAPI dependency injection — wires infrastructure to application layer."""

from functools import lru_cache

from fastapi import Depends

from blog_api.config import get_settings
from blog_api.application.interfaces import ArticleRepository, ChatProvider
from blog_api.application.services import (
    ArticleService,
    TextGenerationService,
    TokenBucketRateLimiter,
)
from blog_api.infrastructure.llm import create_chat_provider, resolve_model
from blog_api.infrastructure.repositories import InMemoryArticleRepository


@lru_cache
def get_article_repository() -> ArticleRepository:
    """The process-wide article store — one instance for the app's lifetime."""
    return InMemoryArticleRepository()


@lru_cache
def get_rate_limiter() -> TokenBucketRateLimiter:
    """Shared limiter so concurrent requests pace the provider together."""
    settings = get_settings()
    return TokenBucketRateLimiter(
        rate=settings.generation_rate_per_second,
        capacity=settings.generation_burst,
    )


@lru_cache
def get_chat_provider() -> ChatProvider:
    """Provider selected by ``LLM_PROVIDER`` (Gemini by default)."""
    return create_chat_provider(get_settings())


def get_text_generation_service(
    provider: ChatProvider = Depends(get_chat_provider),
    rate_limiter: TokenBucketRateLimiter = Depends(get_rate_limiter),
) -> TextGenerationService:
    """Provides a TextGenerationService bound to the configured model."""
    return TextGenerationService(
        provider=provider,
        model=resolve_model(get_settings()),
        rate_limiter=rate_limiter,
    )


def get_article_service(
    repository: ArticleRepository = Depends(get_article_repository),
    generator: TextGenerationService = Depends(get_text_generation_service),
) -> ArticleService:
    """Provides an ArticleService with its repository and generator wired up."""
    return ArticleService(repository, generator)
