from fastapi import APIRouter

from news_service.api.v1.endpoints import articles, health

api_router = APIRouter()

# 各エンドポイントのルーターを登録
api_router.include_router(articles.router, tags=["記事"])
api_router.include_router(health.router, tags=["ヘルスチェック"])
