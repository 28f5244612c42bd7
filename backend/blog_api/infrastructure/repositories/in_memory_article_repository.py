"""Process-local repository implementation backed by a Python list."""

import asyncio
import uuid
from collections.abc import Callable
from dataclasses import replace

from blog_api.application.interfaces import ArticleRepository
from blog_api.domain.entities import Article


class InMemoryArticleRepository(ArticleRepository):
    """Implements the ArticleRepository port in process memory.

    Articles are kept in insertion order. Every operation holds an
    ``asyncio.Lock`` so concurrent requests never interleave a read with
    a partially applied write. Contents are lost on restart.
    """

    def __init__(self, id_factory: Callable[[], str] | None = None):
        self._articles: list[Article] = []
        self._lock = asyncio.Lock()
        self._id_factory = id_factory or (lambda: uuid.uuid4().hex)

    async def add(self, article: Article) -> Article:
        async with self._lock:
            stored = replace(article, id=self._id_factory())
            self._articles.append(stored)
            return stored

    async def list_all(self) -> list[Article]:
        # Reversed view; stored order stays chronological.
        async with self._lock:
            return list(reversed(self._articles))

    async def get_by_slug(self, slug: str) -> Article | None:
        async with self._lock:
            return next((a for a in self._articles if a.slug == slug), None)

    async def clear(self) -> int:
        async with self._lock:
            removed = len(self._articles)
            self._articles = []
            return removed

    async def count(self) -> int:
        async with self._lock:
            return len(self._articles)
