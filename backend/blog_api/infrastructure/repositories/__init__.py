from .in_memory_article_repository import InMemoryArticleRepository

__all__ = [
    "InMemoryArticleRepository",
]
