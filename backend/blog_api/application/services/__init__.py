from .article_builder import ArticleBuilder, extract_title, slugify
from .article_service import ArticleService
from .rate_limiter import TokenBucketRateLimiter
from .text_generation_service import TextGenerationService

__all__ = [
    "ArticleBuilder",
    "ArticleService",
    "TextGenerationService",
    "TokenBucketRateLimiter",
    "extract_title",
    "slugify",
]
