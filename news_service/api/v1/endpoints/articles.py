from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional

from news_service.core.config import settings
from news_service.core.logging import get_request_logger
from news_service.crud.article import article_crud
from news_service.db.session import get_async_session
from news_service.schemas import (
    Article as ArticleSchema,
    ArticleCreate,
    ArticleListResponse,
    ArticleMutationResponse,
    ArticleQuery,
    ArticleResponse,
    ArticleUpdate,
    CategoryListResponse,
    ErrorResponse,
    FeaturedListResponse,
    MessageResponse
)

router = APIRouter()

# 記事ID指定のエンドポイントで共通のエラーレスポンス
ID_ERROR_RESPONSES = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
    status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
}


@router.get("/articles", response_model=ArticleListResponse)
async def read_articles(
    request: Request,
    category: Optional[str] = None,
    featured: Optional[str] = None,
    search: Optional[str] = None,
    page: int = 1,
    limit: int = settings.DEFAULT_PAGE_SIZE,
    db: AsyncSession = Depends(get_async_session, scope="function")
):
    """記事一覧を取得（カテゴリ・注目・検索で絞り込み、ページ単位）"""
    logger = get_request_logger(request)
    query = ArticleQuery(category=category, featured=featured, search=search, page=page, limit=limit)
    logger.info(f"記事一覧取得リクエスト: {query.model_dump()}")

    result = await article_crud.get_multi(db, query)
    logger.info(f"記事一覧取得成功: {len(result.items)}件 / 全{result.total}件")
    return ArticleListResponse(
        data=[ArticleSchema.model_validate(article) for article in result.items],
        total=result.total,
        page=result.page,
        total_pages=result.total_pages
    )


@router.get("/articles/{article_id}", response_model=ArticleResponse, responses=ID_ERROR_RESPONSES)
async def read_article(
    request: Request,
    article_id: str,
    db: AsyncSession = Depends(get_async_session, scope="function")
):
    """記事を取得し、閲覧数を1増やす"""
    logger = get_request_logger(request)
    logger.info(f"記事詳細取得リクエスト: article_id={article_id}")

    article = await article_crud.get_and_increment_views(db, article_id)
    return ArticleResponse(data=ArticleSchema.model_validate(article))


@router.post(
    "/articles",
    response_model=ArticleMutationResponse,
    status_code=status.HTTP_201_CREATED,
    responses={status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse}}
)
async def create_article(
    request: Request,
    article_in: Optional[ArticleCreate] = None,
    db: AsyncSession = Depends(get_async_session, scope="function")
):
    """記事を作成"""
    logger = get_request_logger(request)
    # 本文なしのリクエストも必須項目不足として扱う
    if article_in is None:
        article_in = ArticleCreate()
    logger.info(f"記事作成リクエスト: title={article_in.title}")

    article = await article_crud.create(db, article_in)
    logger.info(f"記事作成成功: article_id={article.id}")
    return ArticleMutationResponse(
        message="記事を作成しました",
        data=ArticleSchema.model_validate(article)
    )


@router.put("/articles/{article_id}", response_model=ArticleMutationResponse, responses=ID_ERROR_RESPONSES)
async def update_article(
    request: Request,
    article_id: str,
    article_in: ArticleUpdate,
    db: AsyncSession = Depends(get_async_session, scope="function")
):
    """記事を更新（送信された項目のみ）"""
    logger = get_request_logger(request)
    logger.info(f"記事更新リクエスト: article_id={article_id}")

    article = await article_crud.update(db, article_id, article_in)
    return ArticleMutationResponse(
        message="記事を更新しました",
        data=ArticleSchema.model_validate(article)
    )


@router.delete("/articles/{article_id}", response_model=MessageResponse, responses=ID_ERROR_RESPONSES)
async def delete_article(
    request: Request,
    article_id: str,
    db: AsyncSession = Depends(get_async_session, scope="function")
):
    """記事を削除"""
    logger = get_request_logger(request)
    logger.info(f"記事削除リクエスト: article_id={article_id}")

    await article_crud.remove(db, article_id)
    return MessageResponse(message="記事を削除しました")


@router.get("/categories", response_model=CategoryListResponse)
async def read_categories(db: AsyncSession = Depends(get_async_session, scope="function")):
    """カテゴリ一覧を取得"""
    categories = await article_crud.get_categories(db)
    return CategoryListResponse(data=categories)


@router.get("/featured", response_model=FeaturedListResponse)
async def read_featured(db: AsyncSession = Depends(get_async_session, scope="function")):
    """注目記事を取得"""
    articles = await article_crud.get_featured(db)
    return FeaturedListResponse(data=[ArticleSchema.model_validate(article) for article in articles])
