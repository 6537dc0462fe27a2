from pydantic import ConfigDict
from pydantic_settings import BaseSettings
from typing import Literal


class Settings(BaseSettings):
    # 環境設定
    ENVIRONMENT: Literal["development", "testing", "production"] = "development"

    # アプリケーション設定
    APP_NAME: str = "News Article Service"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = True
    API_V1_PREFIX: str = "/api/v1"

    # ロギング設定
    LOG_LEVEL: str = "INFO"
    LOG_TO_FILE: bool = False
    LOG_FILE_PATH: str = "logs/news_service.log"

    # データベース設定
    DATABASE_URL: str = "sqlite+aiosqlite:///./news.db"
    SQLALCHEMY_ECHO: bool = False
    SEED_SAMPLE_DATA: bool = True

    # 静的ファイル設定
    STATIC_DIR: str = "public"

    # CORS設定
    CORS_ORIGINS: list[str] = ["*"]
    CORS_ALLOW_CREDENTIALS: bool = True
    CORS_ALLOW_METHODS: list[str] = ["*"]
    CORS_ALLOW_HEADERS: list[str] = ["*"]

    # ページネーション設定
    DEFAULT_PAGE_SIZE: int = 10
    FEATURED_LIMIT: int = 5

    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True
    )


settings = Settings()
