"""Domain entities — pure Python business objects, no framework dependencies."""

from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass
class Article:
    """Core domain entity representing a generated blog article.

    Articles are immutable once stored; the identifier is assigned by the
    repository when the article is added.
    """

    title: str
    content: str
    slug: str
    details: str = ""
    id: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
