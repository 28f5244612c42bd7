"""LLM infrastructure module — provider registry and factory."""

from .provider_factory import available_providers, create_chat_provider, resolve_model

__all__ = [
    "available_providers",
    "create_chat_provider",
    "resolve_model",
]
