from typing import Any, Dict, List, Optional


class NewsServiceException(Exception):
    """ニュース記事サービスの基底例外クラス"""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        error_code: Optional[str] = None
    ):
        self.message = message
        self.details = details or {}
        self.error_code = error_code
        super().__init__(self.message)


class ValidationError(NewsServiceException):
    """バリデーションエラー"""
    pass


class NotFoundError(NewsServiceException):
    """リソースが見つからないエラー"""
    pass


class DatabaseError(NewsServiceException):
    """データベースエラー"""
    pass


# 具体的な例外クラス
class ArticleNotFoundError(NotFoundError):
    """記事が見つからないエラー"""

    def __init__(self, article_id: Optional[str] = None):
        if article_id:
            message = f"記事ID '{article_id}' が見つかりません"
            details = {"article_id": str(article_id)}
        else:
            message = "記事が見つかりません"
            details = {}

        super().__init__(message=message, details=details, error_code="ARTICLE_NOT_FOUND")


class InvalidIdentifierError(ValidationError):
    """識別子の形式が無効なエラー"""

    def __init__(self, identifier: Any):
        message = f"記事ID '{identifier}' の形式が無効です"
        details = {"article_id": str(identifier)}
        super().__init__(message=message, details=details, error_code="INVALID_IDENTIFIER")


class MissingFieldsError(ValidationError):
    """必須フィールド不足エラー"""

    def __init__(self, fields: List[str]):
        message = f"必須フィールドが不足しています: {', '.join(fields)}"
        details = {"missing_fields": fields}
        super().__init__(message=message, details=details, error_code="MISSING_REQUIRED_FIELDS")


class DatabaseQueryError(DatabaseError):
    """データベースクエリ実行エラー"""
    def __init__(self, message: str = "Database query execution error", details: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, details=details, error_code="DATABASE_QUERY_ERROR")


class DatabaseConnectionError(DatabaseError):
    """データベース接続エラー"""
    def __init__(self, message: str = "Database connection error"):
        super().__init__(message=message, error_code="DATABASE_CONNECTION_ERROR")
