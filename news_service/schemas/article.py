from pydantic import BaseModel, Field, field_validator
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from news_service.core.config import settings


# Article関連のスキーマ
class ArticleCreate(BaseModel):
    """記事作成リクエスト

    必須項目の欠落は 422 ではなく業務エラーとして返すため、スキーマ上はすべて任意とする。
    """
    title: Optional[str] = None
    content: Optional[str] = None
    author: Optional[str] = None
    category: Optional[str] = None
    featured: Optional[bool] = None
    image: Optional[str] = None


class ArticleUpdate(BaseModel):
    """記事更新リクエスト（送信された項目のみ反映）"""
    title: Optional[str] = None
    content: Optional[str] = None
    author: Optional[str] = None
    category: Optional[str] = None
    featured: Optional[bool] = None
    image: Optional[str] = None


class ArticleQuery(BaseModel):
    """記事一覧の検索・ページネーション条件"""
    category: Optional[str] = None
    featured: Optional[str] = None
    search: Optional[str] = None
    page: int = 1
    limit: int = Field(default_factory=lambda: settings.DEFAULT_PAGE_SIZE)

    @field_validator("page", "limit")
    @classmethod
    def clamp_to_one(cls, v: int) -> int:
        # 0以下のページ番号・件数は1として扱う
        return max(v, 1)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class Article(BaseModel):
    id: UUID
    title: str
    content: str
    author: str
    category: str
    featured: bool
    image: Optional[str] = None
    published_date: datetime = Field(alias="publishedDate")
    views: int

    class Config:
        from_attributes = True
        populate_by_name = True


# レスポンスエンベロープ
class ArticleResponse(BaseModel):
    success: bool = True
    data: Article


class ArticleMutationResponse(BaseModel):
    success: bool = True
    message: str
    data: Article


class ArticleListResponse(BaseModel):
    success: bool = True
    data: List[Article]
    total: int
    page: int
    total_pages: int = Field(alias="totalPages")

    class Config:
        populate_by_name = True


class FeaturedListResponse(BaseModel):
    success: bool = True
    data: List[Article]


class CategoryListResponse(BaseModel):
    success: bool = True
    data: List[str]


class MessageResponse(BaseModel):
    success: bool = True
    message: str


class HealthResponse(MessageResponse):
    timestamp: datetime


class ErrorResponse(BaseModel):
    success: bool = False
    message: str
    error_code: Optional[str] = None
    details: dict = {}
