"""
テスト用の共通フィクスチャとセットアップ
"""
import pytest
import pytest_asyncio
from datetime import datetime, timedelta, timezone
from typing import AsyncGenerator
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from news_service.db.base import Base
from news_service.models import Article
from news_service.schemas import ArticleCreate


# テスト用のインメモリSQLiteデータベース設定
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

BASE_PUBLISHED_DATE = datetime(2025, 1, 15, 9, 0, tzinfo=timezone.utc)


@pytest_asyncio.fixture
async def test_engine():
    """テスト用データベースエンジン"""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={
            "check_same_thread": False,
        },
    )

    # テーブル作成
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    # クリーンアップ
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """テスト用データベースセッション（各テストでロールバック）"""
    async_session = async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False
    )

    async with async_session() as session:
        # トランザクション開始
        transaction = await session.begin()

        try:
            yield session
        finally:
            # テスト後にロールバック
            await transaction.rollback()


def make_article(index: int = 0, **kwargs) -> Article:
    """公開日時が index 時間ずつ古くなる記事を生成"""
    defaults = {
        "title": f"Article {index}",
        "content": f"Content for article {index}",
        "author": "Test Author",
        "category": "technology",
        "featured": False,
        "image": None,
        "published_date": BASE_PUBLISHED_DATE - timedelta(hours=index),
        "views": 0
    }
    defaults.update(kwargs)
    return Article(**defaults)


async def add_articles(db_session: AsyncSession, articles: list[Article]) -> list[Article]:
    db_session.add_all(articles)
    await db_session.flush()
    for article in articles:
        await db_session.refresh(article)
    return articles


@pytest_asyncio.fixture
async def sample_article(db_session: AsyncSession) -> Article:
    """サンプル記事"""
    article = make_article(
        title="Sample Article",
        content="This is a sample article content.",
        featured=True,
        image="/images/sample.jpg",
        views=5
    )
    db_session.add(article)
    await db_session.flush()
    await db_session.refresh(article)
    return article


@pytest_asyncio.fixture
async def mixed_articles(db_session: AsyncSession) -> list[Article]:
    """カテゴリ・注目フラグ・本文が異なる記事群"""
    articles = [
        make_article(0, title="Microsoft Announces New AI Features", category="technology", featured=True),
        make_article(1, title="Global Climate Summit Reaches Agreement", category="world",
                     content="Leaders agreed on carbon reduction targets."),
        make_article(2, title="Stock Markets Hit Record Highs", category="business", featured=True),
        make_article(3, title="Heatwave Hits Europe", category="world",
                     content="Scientists link the CLIMATE crisis to record temperatures."),
        make_article(4, title="Major Sports Trade Shakes Up League", category="sports"),
        make_article(5, title="Chip Shortage Eases", category="Technology",
                     content="Supply chains recover as 100% of fabs reopen."),
    ]
    return await add_articles(db_session, articles)


@pytest_asyncio.fixture
async def many_articles(db_session: AsyncSession) -> list[Article]:
    """ページネーション確認用の25件の記事"""
    articles = [make_article(i) for i in range(25)]
    return await add_articles(db_session, articles)


# テストデータ作成用のヘルパー関数
class TestDataFactory:
    """テストデータ作成用ファクトリー"""

    @staticmethod
    def create_article_data(**kwargs) -> ArticleCreate:
        """記事作成データ"""
        defaults = {
            "title": "Test Article",
            "content": "Test content",
            "author": "Test Author",
            "category": "technology"
        }
        defaults.update(kwargs)
        return ArticleCreate(**defaults)


@pytest.fixture
def test_data_factory():
    """テストデータファクトリーのフィクスチャ"""
    return TestDataFactory
