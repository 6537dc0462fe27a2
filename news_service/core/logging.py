import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Any, MutableMapping, Tuple

from fastapi import Request

from news_service.core.config import settings


LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

ROOT_LOGGER_NAME = "news_service"


def setup_logging() -> logging.Logger:
    """アプリケーション全体のロガーを設定する"""
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))

    # 重複登録を避ける
    if logger.handlers:
        return logger

    formatter = logging.Formatter(LOG_FORMAT, DATE_FORMAT)

    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)

    if settings.LOG_TO_FILE:
        log_dir = os.path.dirname(settings.LOG_FILE_PATH)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        file_handler = RotatingFileHandler(
            settings.LOG_FILE_PATH,
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8"
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.propagate = False
    return logger


def get_logger(name: str) -> logging.Logger:
    """モジュール用のロガーを取得する

    ``news_service`` 配下のロガーはアプリケーションロガーのハンドラーを共有する。
    """
    if not name.startswith(ROOT_LOGGER_NAME):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


class RequestLoggerAdapter(logging.LoggerAdapter):
    """リクエストIDをメッセージの先頭に付与するアダプター"""

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> Tuple[Any, MutableMapping[str, Any]]:
        return f"[{self.extra['request_id']}] {msg}", kwargs


def get_request_logger(request: Request) -> RequestLoggerAdapter:
    """リクエスト単位のロガーを取得"""
    request_id = getattr(request.state, "request_id", "no-request-id")
    return RequestLoggerAdapter(get_logger("request"), {"request_id": request_id})


app_logger = setup_logging()
