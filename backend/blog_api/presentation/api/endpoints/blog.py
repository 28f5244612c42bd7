"""Blog read and clear endpoints over the in-memory article store."""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from blog_api.application.schemas import (
    ArticleDetailResponse,
    ArticleListResponse,
    ArticleResponse,
    ClearArticlesResponse,
    ErrorResponse,
)
from blog_api.application.services import ArticleService
from blog_api.domain.exceptions import EntityNotFoundError
from blog_api.infrastructure.dependencies import get_article_service

router = APIRouter(prefix="/blog", tags=["Blog"])


@router.get("", response_model=ArticleListResponse)
async def list_articles(
    service: ArticleService = Depends(get_article_service),
) -> ArticleListResponse:
    """Retrieve every article, newest first."""
    articles = await service.list_articles()
    return ArticleListResponse(
        articles=[ArticleResponse.model_validate(a, from_attributes=True) for a in articles]
    )


@router.get(
    "/{slug}",
    response_model=ArticleDetailResponse,
    responses={status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}},
)
async def get_article(
    slug: str,
    service: ArticleService = Depends(get_article_service),
):
    """Retrieve the first article with the given slug."""
    try:
        article = await service.get_article(slug)
    except EntityNotFoundError:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"error": "Article not found"},
        )
    return ArticleDetailResponse(
        article=ArticleResponse.model_validate(article, from_attributes=True)
    )


@router.delete("", response_model=ClearArticlesResponse)
async def clear_articles(
    service: ArticleService = Depends(get_article_service),
) -> ClearArticlesResponse:
    """Delete every stored article."""
    await service.clear_articles()
    return ClearArticlesResponse(message="All articles deleted")
