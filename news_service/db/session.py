from typing import AsyncGenerator

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from news_service.core.config import settings
from news_service.core.exceptions import DatabaseQueryError
from news_service.core.logging import get_logger

logger = get_logger(__name__)


def _engine_options(database_url: str) -> dict:
    options = {"echo": settings.SQLALCHEMY_ECHO}
    if database_url.startswith("sqlite"):
        options["connect_args"] = {"check_same_thread": False}
    else:
        options.update(pool_pre_ping=True, pool_recycle=3600)
    return options


# アプリケーション全体で共有するエンジン
async_engine = create_async_engine(settings.DATABASE_URL, **_engine_options(settings.DATABASE_URL))

AsyncSessionLocal = async_sessionmaker(
    async_engine, class_=AsyncSession, expire_on_commit=False
)


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """リクエストごとのデータベースセッションを提供する依存性

    ハンドラーが正常に終了した場合にコミットし、例外時はロールバックする。
    コミットの失敗はレスポンス送信前に DatabaseQueryError として通知するため、
    エンドポイントでは `Depends(get_async_session, scope="function")` で利用する。
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except Exception:
            logger.warning("Rolling back database session")
            await session.rollback()
            raise

        try:
            await session.commit()
        except SQLAlchemyError as e:
            logger.error(f"Database error committing session: {str(e)}")
            await session.rollback()
            raise DatabaseQueryError(
                "変更の保存中にデータベースエラーが発生しました", details={"error": str(e)}
            ) from e
