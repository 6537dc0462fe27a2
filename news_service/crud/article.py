import math
from datetime import datetime, timezone
from typing import Any, List, NamedTuple
from uuid import UUID

from sqlalchemy import delete, func, or_, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from news_service.core.config import settings
from news_service.core.exceptions import (
    ArticleNotFoundError,
    DatabaseConnectionError,
    DatabaseQueryError,
    InvalidIdentifierError,
    MissingFieldsError
)
from news_service.core.logging import get_logger
from news_service.models import Article
from news_service.schemas import ArticleCreate, ArticleQuery, ArticleUpdate


# 作成時に必須となる項目
REQUIRED_FIELDS = ("title", "content", "author", "category")

# 更新時に偽値（false / null / 空文字）でも反映する項目
FALSY_UPDATABLE_FIELDS = ("featured", "image")

# カテゴリ絞り込みを行わない指定値
ALL_CATEGORIES = "all"


class ArticlePage(NamedTuple):
    """一覧取得の結果（1ページ分の記事とページネーション情報）"""
    items: List[Article]
    total: int
    page: int
    total_pages: int


class ArticleCRUD:
    """記事関連のCRUD操作"""
    logger = get_logger(__name__)

    def parse_id(self, article_id: Any) -> UUID:
        """記事IDを検証してUUIDに変換する（データベースにはアクセスしない）"""
        if isinstance(article_id, UUID):
            return article_id
        try:
            return UUID(str(article_id))
        except ValueError:
            self.logger.warning(f"Invalid article id: {article_id}")
            raise InvalidIdentifierError(article_id) from None

    def _check_session(self, db: AsyncSession) -> None:
        if not db.is_active:
            self.logger.error("Database session is not active")
            raise DatabaseConnectionError("データベースセッションがアクティブではありません")

    def build_filters(self, query: ArticleQuery) -> list:
        """一覧条件から絞り込み条件を組み立てる

        各条件はAND結合される。検索語はタイトルまたは本文への
        大文字小文字を区別しない部分一致（OR結合）として扱う。
        """
        conditions = []

        if query.category and query.category != ALL_CATEGORIES:
            conditions.append(Article.category == query.category)

        if query.featured == "true":
            conditions.append(Article.featured == True)

        if query.search:
            conditions.append(
                or_(
                    Article.title.icontains(query.search, autoescape=True),
                    Article.content.icontains(query.search, autoescape=True)
                )
            )

        return conditions

    async def get_multi(self, db: AsyncSession, query: ArticleQuery) -> ArticlePage:
        """条件に一致する記事を公開日時の新しい順にページ単位で取得"""
        conditions = self.build_filters(query)
        self.logger.info(
            f"Retrieving articles: category={query.category}, featured={query.featured}, "
            f"search={query.search}, page={query.page}, limit={query.limit}"
        )

        try:
            self._check_session(db)

            total_result = await db.execute(
                select(func.count()).select_from(Article).where(*conditions)
            )
            total = total_result.scalar_one()

            result = await db.execute(
                select(Article)
                .where(*conditions)
                .order_by(Article.published_date.desc(), Article.id.desc())
                .offset(query.offset)
                .limit(query.limit)
            )
            items = list(result.scalars().all())
        except DatabaseConnectionError:
            raise
        except (SQLAlchemyError, OverflowError) as e:
            # 巨大な page / limit はドライバーでの整数変換時に OverflowError となる
            self.logger.error(f"Database error retrieving articles: {str(e)}")
            raise DatabaseQueryError(
                "記事一覧の取得中にデータベースエラーが発生しました", details={"error": str(e)}
            ) from e

        total_pages = math.ceil(total / query.limit)
        self.logger.info(f"Retrieved {len(items)} of {total} articles")
        return ArticlePage(items=items, total=total, page=query.page, total_pages=total_pages)

    async def get(self, db: AsyncSession, article_id: Any) -> Article:
        """IDで記事を取得"""
        article_uuid = self.parse_id(article_id)

        try:
            self.logger.info(f"Retrieving article by id: {article_uuid}")
            self._check_session(db)

            result = await db.execute(select(Article).where(Article.id == article_uuid))
            article = result.scalar_one_or_none()
        except DatabaseConnectionError:
            raise
        except SQLAlchemyError as e:
            self.logger.error(f"Database error retrieving article by id {article_uuid}: {str(e)}")
            raise DatabaseQueryError(
                "記事の取得中にデータベースエラーが発生しました", details={"error": str(e)}
            ) from e

        if article is None:
            self.logger.info(f"Article with id {article_uuid} not found")
            raise ArticleNotFoundError(str(article_uuid))

        return article

    async def get_and_increment_views(self, db: AsyncSession, article_id: Any) -> Article:
        """閲覧数を1増やした上で記事を取得

        加算はデータベース側で原子的に行い、同一トランザクション内で読み直した値を返す。
        """
        article_uuid = self.parse_id(article_id)

        try:
            self.logger.info(f"Incrementing views for article: {article_uuid}")
            self._check_session(db)

            result = await db.execute(
                update(Article)
                .where(Article.id == article_uuid)
                .values(views=Article.views + 1)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                self.logger.info(f"Article with id {article_uuid} not found")
                raise ArticleNotFoundError(str(article_uuid))

            result = await db.execute(
                select(Article)
                .where(Article.id == article_uuid)
                .execution_options(populate_existing=True)
            )
            return result.scalar_one()
        except (ArticleNotFoundError, DatabaseConnectionError):
            raise
        except SQLAlchemyError as e:
            self.logger.error(f"Database error fetching article {article_uuid}: {str(e)}")
            raise DatabaseQueryError(
                "記事の取得中にデータベースエラーが発生しました", details={"error": str(e)}
            ) from e

    async def create(self, db: AsyncSession, obj_in: ArticleCreate) -> Article:
        """新しい記事を作成"""
        missing = [
            field for field in REQUIRED_FIELDS
            if not (getattr(obj_in, field) or "").strip()
        ]
        if missing:
            self.logger.warning(f"Missing required fields: {missing}")
            raise MissingFieldsError(missing)

        self.logger.info(f"Creating new article: {obj_in.title}")
        db_obj = Article(
            title=obj_in.title,
            content=obj_in.content,
            author=obj_in.author,
            category=obj_in.category,
            featured=obj_in.featured or False,
            image=obj_in.image or None,
            published_date=datetime.now(timezone.utc),
            views=0
        )

        try:
            db.add(db_obj)
            await db.flush()
            await db.refresh(db_obj)
        except SQLAlchemyError as e:
            self.logger.error(f"Database error creating article: {str(e)}")
            raise DatabaseQueryError(
                "記事の作成中にデータベースエラーが発生しました", details={"error": str(e)}
            ) from e

        self.logger.info(f"Created article with id: {db_obj.id}")
        return db_obj

    async def update(self, db: AsyncSession, article_id: Any, obj_in: ArticleUpdate) -> Article:
        """送信された項目のみ記事に反映する"""
        article = await self.get(db, article_id)

        update_data = {}
        for field, value in obj_in.model_dump(exclude_unset=True).items():
            if field in FALSY_UPDATABLE_FIELDS:
                update_data[field] = bool(value) if field == "featured" else value
            elif value:
                update_data[field] = value

        self.logger.info(f"Updating article {article.id}: fields={sorted(update_data)}")
        for field, value in update_data.items():
            setattr(article, field, value)

        try:
            await db.flush()
            await db.refresh(article)
        except SQLAlchemyError as e:
            self.logger.error(f"Database error updating article {article.id}: {str(e)}")
            raise DatabaseQueryError(
                "記事の更新中にデータベースエラーが発生しました", details={"error": str(e)}
            ) from e

        return article

    async def remove(self, db: AsyncSession, article_id: Any) -> None:
        """記事を削除"""
        article_uuid = self.parse_id(article_id)

        try:
            self.logger.info(f"Deleting article: {article_uuid}")
            self._check_session(db)

            result = await db.execute(delete(Article).where(Article.id == article_uuid))
        except DatabaseConnectionError:
            raise
        except SQLAlchemyError as e:
            self.logger.error(f"Database error deleting article {article_uuid}: {str(e)}")
            raise DatabaseQueryError(
                "記事の削除中にデータベースエラーが発生しました", details={"error": str(e)}
            ) from e

        if result.rowcount == 0:
            self.logger.info(f"Article with id {article_uuid} not found")
            raise ArticleNotFoundError(str(article_uuid))

    async def get_categories(self, db: AsyncSession) -> List[str]:
        """登録されているカテゴリの一覧を取得"""
        try:
            result = await db.execute(
                select(Article.category).distinct().order_by(Article.category)
            )
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            self.logger.error(f"Error retrieving categories: {str(e)}")
            raise DatabaseQueryError(
                "カテゴリの取得中にエラーが発生しました", details={"error": str(e)}
            ) from e

    async def get_featured(self, db: AsyncSession, limit: int = settings.FEATURED_LIMIT) -> List[Article]:
        """注目記事を新しい順に取得"""
        try:
            result = await db.execute(
                select(Article)
                .where(Article.featured == True)
                .order_by(Article.published_date.desc(), Article.id.desc())
                .limit(limit)
            )
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            self.logger.error(f"Error retrieving featured articles: {str(e)}")
            raise DatabaseQueryError(
                "注目記事の取得中にエラーが発生しました", details={"error": str(e)}
            ) from e


# シングルトンインスタンス
article_crud = ArticleCRUD()
