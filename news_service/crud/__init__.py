# CRUD操作のインポート
from news_service.crud.article import article_crud, ArticlePage

# すべてのCRUDをエクスポート
__all__ = [
    "article_crud",
    "ArticlePage"
]
