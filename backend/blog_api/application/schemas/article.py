"""Pydantic DTOs (Data Transfer Objects) for the Article feature."""

from datetime import datetime

from pydantic import BaseModel, Field


class TitleEntry(BaseModel):
    """One requested article in a batch."""

    title: str = Field(..., examples=["Understanding Python Decorators"])
    details: str | None = Field(None, examples=["Focus on functools.wraps"])


class GenerateArticlesRequest(BaseModel):
    """Batch generation payload — ``titles`` is checked by the endpoint."""

    titles: list[TitleEntry] | None = None


class GenerateSingleRequest(BaseModel):
    """Free-form generation payload."""

    prompt: str = Field(..., min_length=1, examples=["Explain Python's asyncio event loop"])


class ArticleResponse(BaseModel):
    """Schema returned to the client."""

    id: str
    title: str
    content: str
    details: str
    created_at: datetime = Field(..., alias="createdAt")
    slug: str

    model_config = {"from_attributes": True, "populate_by_name": True}


class GenerateArticlesResponse(BaseModel):
    success: bool = True
    articles: list[ArticleResponse]
    count: int


class GenerateSingleResponse(BaseModel):
    success: bool = True
    article: ArticleResponse


class ArticleListResponse(BaseModel):
    articles: list[ArticleResponse]


class ArticleDetailResponse(BaseModel):
    article: ArticleResponse


class ClearArticlesResponse(BaseModel):
    success: bool = True
    message: str


class ErrorResponse(BaseModel):
    """Error body: ``error`` always, ``message`` for upstream failures."""

    error: str
    message: str | None = None
