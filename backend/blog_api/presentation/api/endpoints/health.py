"""Health check endpoint — reports configuration and store size."""

from fastapi import APIRouter, Depends

from blog_api.application.interfaces import ArticleRepository
from blog_api.config import get_settings
from blog_api.infrastructure.dependencies import get_article_repository

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check(
    repository: ArticleRepository = Depends(get_article_repository),
) -> dict:
    """Returns the current application health status."""
    settings = get_settings()
    return {
        "status": "healthy",
        "version": settings.app_version,
        "environment": settings.app_env,
        "provider": settings.llm_provider,
        "articles": await repository.count(),
    }
