"""Abstract repository interfaces (ports) — define the contract, not the implementation."""

from abc import ABC, abstractmethod

from blog_api.domain.entities import Article


class ArticleRepository(ABC):
    """Port for article storage — implemented in the infrastructure layer.

    Implementations own the article collection and assign identifiers;
    callers never set ``Article.id`` themselves.
    """

    @abstractmethod
    async def add(self, article: Article) -> Article:
        """Append an article, assign its ID and return it."""
        ...

    @abstractmethod
    async def list_all(self) -> list[Article]:
        """Return every stored article, most recently added first."""
        ...

    @abstractmethod
    async def get_by_slug(self, slug: str) -> Article | None:
        """Return the first article (in insertion order) with the given slug."""
        ...

    @abstractmethod
    async def clear(self) -> int:
        """Remove every article. Returns the number of articles removed."""
        ...

    @abstractmethod
    async def count(self) -> int:
        """Return the number of stored articles."""
        ...
