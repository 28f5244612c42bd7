"""Provider factory and registry for swappable chat backends."""

from collections.abc import Callable

from blog_api.application.interfaces import ChatProvider
from blog_api.config import Settings
from blog_api.infrastructure.gemini import GeminiClient
from blog_api.infrastructure.openrouter import OpenRouterClient


def _build_gemini(settings: Settings) -> ChatProvider:
    return GeminiClient(
        api_key=settings.gemini_api_key.strip(),
        base_url=settings.gemini_base_url,
        timeout=settings.llm_timeout_seconds,
    )


def _build_openrouter(settings: Settings) -> ChatProvider:
    return OpenRouterClient(
        api_key=settings.openrouter_api_key.strip(),
        base_url=settings.openrouter_base_url,
        app_name=settings.openrouter_app_name,
        timeout=settings.llm_timeout_seconds,
    )


_PROVIDER_REGISTRY: dict[str, tuple[Callable[[Settings], ChatProvider], str]] = {
    "gemini": (_build_gemini, "gemini_model"),
    "openrouter": (_build_openrouter, "openrouter_model"),
}


def available_providers() -> list[str]:
    """Return the set of registered provider names."""
    return sorted(_PROVIDER_REGISTRY.keys())


def _lookup(settings: Settings) -> tuple[Callable[[Settings], ChatProvider], str]:
    name = settings.llm_provider.lower().strip()
    entry = _PROVIDER_REGISTRY.get(name)
    if entry is None:
        supported = ", ".join(available_providers())
        raise ValueError(f"Unsupported provider: {settings.llm_provider}. Supported: {supported}")
    return entry


def create_chat_provider(settings: Settings) -> ChatProvider:
    """Build the configured chat provider from runtime settings."""
    builder, _ = _lookup(settings)
    return builder(settings)


def resolve_model(settings: Settings) -> str:
    """Return the model identifier configured for the selected provider."""
    _, model_field = _lookup(settings)
    return getattr(settings, model_field)
