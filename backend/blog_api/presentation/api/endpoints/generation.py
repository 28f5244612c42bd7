"""Article generation endpoints — batch by title and single by prompt."""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from blog_api.application.schemas import (
    ArticleResponse,
    ErrorResponse,
    GenerateArticlesRequest,
    GenerateArticlesResponse,
    GenerateSingleRequest,
    GenerateSingleResponse,
)
from blog_api.application.services import ArticleService
from blog_api.domain.exceptions import GenerationError
from blog_api.infrastructure.dependencies import get_article_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Generation"])

_ERROR_RESPONSES = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
}


@router.post(
    "/generate-articles",
    response_model=GenerateArticlesResponse,
    responses=_ERROR_RESPONSES,
)
async def generate_articles(
    payload: GenerateArticlesRequest,
    service: ArticleService = Depends(get_article_service),
):
    """Generate one article per requested title, pacing calls to the model.

    Articles generated before a failing title stay stored.
    """
    if payload.titles is None:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Please provide an array of titles"},
        )

    try:
        articles = await service.generate_articles(payload.titles)
    except GenerationError as e:
        logger.exception("Error generating articles")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Failed to generate articles", "message": e.message},
        )

    return GenerateArticlesResponse(
        articles=[ArticleResponse.model_validate(a, from_attributes=True) for a in articles],
        count=len(articles),
    )


@router.post(
    "/generate-single",
    response_model=GenerateSingleResponse,
    responses=_ERROR_RESPONSES,
)
async def generate_single(
    payload: GenerateSingleRequest,
    service: ArticleService = Depends(get_article_service),
):
    """Generate one article from a free-form prompt."""
    try:
        article = await service.generate_single(payload.prompt)
    except GenerationError as e:
        logger.exception("Error generating article")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Failed to generate article", "message": e.message},
        )

    return GenerateSingleResponse(
        article=ArticleResponse.model_validate(article, from_attributes=True),
    )
