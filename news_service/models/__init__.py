# モデルのインポート
from news_service.models.article import Article

# すべてのモデルをエクスポート
__all__ = [
    "Article"
]
