from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from news_service.core.config import settings
from news_service.core.logging import get_logger
from news_service.db.base import Base
from news_service.db.sample_data import SAMPLE_ARTICLES
from news_service.db.session import async_engine
from news_service.models import Article

# このモジュール用のロガーを取得
logger = get_logger(__name__)


class Database:
    """データベース初期化クラス"""

    def __init__(self, engine: AsyncEngine = async_engine):
        self.engine = engine

    async def init(self):
        """データベースの初期化"""
        try:
            logger.info("Initializing database...")

            # テーブルの作成
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)

            if settings.SEED_SAMPLE_DATA:
                await self.seed_sample_data()

            logger.info("Database initialized successfully")

        except Exception as e:
            logger.error(f"Database initialization failed: {str(e)}")
            raise

    async def seed_sample_data(self) -> int:
        """記事が1件もない場合にサンプル記事を投入する"""
        session_factory = async_sessionmaker(self.engine, class_=AsyncSession, expire_on_commit=False)
        async with session_factory() as session:
            count = (await session.execute(select(func.count()).select_from(Article))).scalar_one()
            if count > 0:
                logger.info(f"Skipping sample data: {count} articles already exist")
                return 0

            session.add_all([Article(**data) for data in SAMPLE_ARTICLES])
            await session.commit()

        logger.info(f"Sample data initialized: {len(SAMPLE_ARTICLES)} articles")
        return len(SAMPLE_ARTICLES)

    async def close(self):
        """データベース接続のクローズ"""
        try:
            logger.info("Closing database connections...")
            await self.engine.dispose()
            logger.info("Database connections closed successfully")
        except Exception as e:
            logger.error(f"Error closing database connections: {str(e)}")
            raise
