# Article schemas
from .article import (
    ArticleCreate,
    ArticleUpdate,
    ArticleQuery,
    Article,
    ArticleResponse,
    ArticleMutationResponse,
    ArticleListResponse,
    CategoryListResponse,
    FeaturedListResponse,
    MessageResponse,
    HealthResponse,
    ErrorResponse
)

__all__ = [
    # Article schemas
    "ArticleCreate",
    "ArticleUpdate",
    "ArticleQuery",
    "Article",

    # Envelope schemas
    "ArticleResponse",
    "ArticleMutationResponse",
    "ArticleListResponse",
    "CategoryListResponse",
    "FeaturedListResponse",
    "MessageResponse",
    "HealthResponse",
    "ErrorResponse"
]
