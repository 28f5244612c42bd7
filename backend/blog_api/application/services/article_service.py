"""Application service (use case) for article generation and retrieval."""

import logging
import time

from blog_api.application.interfaces import ArticleRepository
from blog_api.application.prompts import build_article_prompt, build_single_prompt
from blog_api.application.schemas import TitleEntry
from blog_api.application.services.article_builder import ArticleBuilder
from blog_api.application.services.text_generation_service import TextGenerationService
from blog_api.domain.entities import Article
from blog_api.domain.exceptions import EntityNotFoundError
from blog_api.infrastructure.logging.colored_logger import PipelineLogger, PipelineStage

logger = logging.getLogger(__name__)
plog = PipelineLogger("ArticleGeneration")


class ArticleService:
    """Orchestrates article generation and the article collection.

    Depends on the repository port and the text generation service (DI).
    """

    def __init__(
        self,
        repository: ArticleRepository,
        generator: TextGenerationService,
        builder: ArticleBuilder | None = None,
    ):
        self._repository = repository
        self._generator = generator
        self._builder = builder or ArticleBuilder()

    async def generate_articles(self, entries: list[TitleEntry]) -> list[Article]:
        """Generate one article per entry, in order.

        A failure aborts the remaining entries; articles stored before the
        failure stay in the repository.
        """
        plog.step_start(PipelineStage.BATCH, f"Generating {len(entries)} article(s)")
        start = time.perf_counter()
        generated: list[Article] = []

        for index, entry in enumerate(entries, start=1):
            prompt = build_article_prompt(entry.title, entry.details)
            with plog.timed_step(
                PipelineStage.GENERATE, f"[{index}/{len(entries)}] {entry.title}"
            ):
                content = await self._generator.generate(prompt)

            article = self._builder.build(entry.title, entry.details, content)
            plog.step_complete(PipelineStage.BUILD, f"Built '{article.slug}'", chars=len(content))
            article = await self._repository.add(article)
            plog.detail(f"Stored '{article.slug}'", id=article.id)
            generated.append(article)

        plog.step_complete(PipelineStage.COMPLETE, f"Batch finished: {len(generated)} article(s)")
        plog.stats(elapsed=f"{time.perf_counter() - start:.2f}s", count=len(generated))
        return generated

    async def generate_single(self, prompt: str) -> Article:
        """Generate one article from a free-form prompt; the title comes from its heading."""
        with plog.timed_step(PipelineStage.GENERATE, "Single prompt"):
            content = await self._generator.generate(build_single_prompt(prompt))

        article = self._builder.build_from_content(prompt, content)
        plog.step_complete(PipelineStage.BUILD, f"Built '{article.slug}'", title=article.title)
        article = await self._repository.add(article)
        plog.step_complete(PipelineStage.STORE, f"Stored '{article.slug}'", id=article.id)
        return article

    async def list_articles(self) -> list[Article]:
        return await self._repository.list_all()

    async def get_article(self, slug: str) -> Article:
        article = await self._repository.get_by_slug(slug)
        if article is None:
            raise EntityNotFoundError("Article", slug)
        return article

    async def clear_articles(self) -> int:
        removed = await self._repository.clear()
        logger.info("Cleared %d article(s)", removed)
        return removed