"""
リクエスト単位のデータベースセッション（get_async_session）のテスト
"""
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from news_service.core.config import settings
from news_service.core.exceptions import DatabaseQueryError
from news_service.crud.article import ArticleCRUD, article_crud
from news_service.db import session as session_module
from news_service.main import app
from news_service.models import Article


API = settings.API_V1_PREFIX

ARTICLE_DATA = {
    "title": "Committed Article",
    "content": "Stored through the request session",
    "author": "Reporter",
    "category": "world"
}


@pytest_asyncio.fixture
async def session_factory(test_engine):
    """テスト用エンジンに接続するセッションファクトリ"""
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def app_client(session_factory, monkeypatch):
    """依存性をオーバーライドせずにセッションファクトリのみ差し替えたクライアント"""
    monkeypatch.setattr(session_module, "AsyncSessionLocal", session_factory)
    app.dependency_overrides.clear()

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


async def count_articles(session_factory) -> int:
    async with session_factory() as session:
        return (await session.execute(select(func.count()).select_from(Article))).scalar_one()


class TestRequestSession:
    """get_async_session のコミット・ロールバックのテスト"""

    async def test_commit_on_success(self, app_client: AsyncClient, session_factory):
        """正常終了時はコミットされる"""
        response = await app_client.post(f"{API}/articles", json=ARTICLE_DATA)

        assert response.status_code == 201
        assert await count_articles(session_factory) == 1

        # 別リクエストからも閲覧数の加算が永続化されている
        article_id = response.json()["data"]["id"]
        await app_client.get(f"{API}/articles/{article_id}")
        fetched = await app_client.get(f"{API}/articles/{article_id}")
        assert fetched.json()["data"]["views"] == 2

    async def test_commit_failure_returns_error(self, app_client: AsyncClient, session_factory, monkeypatch):
        """コミット失敗時は500エラーとなり、記事は保存されない"""
        async def failing_commit(self):
            raise OperationalError("COMMIT", {}, Exception("database is locked"))

        monkeypatch.setattr(AsyncSession, "commit", failing_commit)

        response = await app_client.post(f"{API}/articles", json=ARTICLE_DATA)

        assert response.status_code == 500
        result = response.json()
        assert result["success"] is False
        assert result["error_code"] == "DATABASE_QUERY_ERROR"
        assert "database is locked" in result["details"]["error"]

        monkeypatch.undo()
        assert await count_articles(session_factory) == 0

    async def test_rollback_on_handler_error(self, app_client: AsyncClient, session_factory, monkeypatch):
        """ハンドラーでエラーが発生した場合はロールバックされる"""
        async def create_then_fail(db, obj_in):
            await ArticleCRUD.create(article_crud, db, obj_in)
            raise DatabaseQueryError("記事の作成中にデータベースエラーが発生しました", details={"error": "boom"})

        monkeypatch.setattr(article_crud, "create", create_then_fail)

        response = await app_client.post(f"{API}/articles", json=ARTICLE_DATA)

        assert response.status_code == 500
        assert response.json()["details"]["error"] == "boom"
        assert await count_articles(session_factory) == 0
