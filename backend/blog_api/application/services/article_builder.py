"""Derives Article records from titles and generated markdown."""

import re
from collections.abc import Callable
from datetime import datetime, timezone

from blog_api.domain.entities import Article

DEFAULT_TITLE = "Generated Article"

_SLUG_SEPARATOR = re.compile(r"[^a-z0-9]+")
_FIRST_HEADING = re.compile(r"^#\s+(.+)$", re.MULTILINE)


def slugify(title: str) -> str:
    """Lowercase ``title`` and collapse every run of non ``[a-z0-9]`` chars to ``-``.

    Leading and trailing hyphens are kept, so ``"Hello!"`` becomes ``"hello-"``.
    """
    return _SLUG_SEPARATOR.sub("-", title.lower())


def extract_title(content: str, default: str = DEFAULT_TITLE) -> str:
    """Return the text of the first ``# heading`` line in ``content``."""
    match = _FIRST_HEADING.search(content)
    if match is None:
        return default
    return match.group(1).strip() or default


class ArticleBuilder:
    """Builds unsaved Article entities; the repository assigns the ID."""

    def __init__(self, clock: Callable[[], datetime] | None = None):
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def build(self, title: str, details: str | None, content: str) -> Article:
        return Article(
            title=title,
            content=content,
            slug=slugify(title),
            details=details or "",
            created_at=self._clock(),
        )

    def build_from_content(self, prompt: str, content: str) -> Article:
        """Build an article whose title comes from the generated markdown."""
        return self.build(extract_title(content), prompt, content)
