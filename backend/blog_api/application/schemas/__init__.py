from .article import (
    TitleEntry,
    GenerateArticlesRequest,
    GenerateSingleRequest,
    ArticleResponse,
    GenerateArticlesResponse,
    GenerateSingleResponse,
    ArticleListResponse,
    ArticleDetailResponse,
    ClearArticlesResponse,
    ErrorResponse,
)

__all__ = [
    "TitleEntry",
    "GenerateArticlesRequest",
    "GenerateSingleRequest",
    "ArticleResponse",
    "GenerateArticlesResponse",
    "GenerateSingleResponse",
    "ArticleListResponse",
    "ArticleDetailResponse",
    "ClearArticlesResponse",
    "ErrorResponse",
]
