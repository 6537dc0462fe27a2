from contextlib import asynccontextmanager
import os
import time
import uuid

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.encoders import jsonable_encoder
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles

from news_service.api.v1.api import api_router
from news_service.api.v1.endpoints import health
from news_service.core.config import settings
from news_service.core.logging import app_logger, get_request_logger
from news_service.core.exceptions import (
    DatabaseError,
    NewsServiceException,
    NotFoundError
)
from news_service.db.init import Database


@asynccontextmanager
async def lifespan(app: FastAPI):
    """アプリケーションのライフサイクルを管理"""
    # 起動の処理
    db = Database()
    try:
        # データベース初期化
        await db.init()
        app_logger.info("Database initialized successfully")

    except Exception as e:
        app_logger.error(f"Initialization failed: {str(e)}")
        raise

    yield  # アプリケーションの実行中

    # シャットダウンの処理
    app_logger.info("Shutting down application...")

    try:
        await db.close()
        app_logger.info("Database connections closed")
    except Exception as e:
        app_logger.error(f"Error closing database connections: {str(e)}")


# FastAPIアプリケーションの作成
app = FastAPI(
    title=settings.APP_NAME,
    description="ニュース記事管理API",
    version=settings.APP_VERSION,
    lifespan=lifespan
)

# CORSミドルウェアの設定
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
    allow_methods=settings.CORS_ALLOW_METHODS,
    allow_headers=settings.CORS_ALLOW_HEADERS,
)


# リクエストIDとロギングミドルウェア
@app.middleware("http")
async def request_middleware(request: Request, call_next):
    # リクエストIDを生成
    request_id = str(uuid.uuid4())
    request.state.request_id = request_id

    # リクエストロガーの取得
    logger = get_request_logger(request)

    # リクエスト情報のロギング
    logger.info(
        f"Request started: {request.method} {request.url.path} "
        f"(Client: {request.client.host if request.client else 'unknown'})"
    )

    # 処理時間の計測
    start_time = time.time()

    try:
        # リクエスト処理
        response = await call_next(request)
        process_time = time.time() - start_time

        # レスポンスヘッダーの設定
        response.headers["X-Request-ID"] = request_id
        response.headers["X-Process-Time"] = str(process_time)

        # レスポンス情報のロギング
        logger.info(
            f"Request completed: {request.method} {request.url.path} "
            f"Status: {response.status_code} "
            f"Process time: {process_time:.3f}s"
        )

        return response
    except Exception as e:
        # 例外発生時のロギング
        process_time = time.time() - start_time
        logger.error(
            f"Request failed: {request.method} {request.url.path} "
            f"Error: {str(e)} "
            f"Process time: {process_time:.3f}s",
            exc_info=True
        )
        raise


def status_code_for(exc: NewsServiceException) -> int:
    """例外の種類からHTTPステータスコードを決定"""
    if isinstance(exc, NotFoundError):
        return status.HTTP_404_NOT_FOUND
    if isinstance(exc, DatabaseError):
        return status.HTTP_500_INTERNAL_SERVER_ERROR
    return status.HTTP_400_BAD_REQUEST


# カスタム例外ハンドラー
@app.exception_handler(NewsServiceException)
async def news_service_exception_handler(request: Request, exc: NewsServiceException):
    logger = get_request_logger(request)
    status_code = status_code_for(exc)
    if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error(f"Database error: {exc.message} {exc.details}", exc_info=exc)
    else:
        logger.warning(f"Business logic error: {exc.message}")

    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder({
            "success": False,
            "message": exc.message,
            "error_code": exc.error_code,
            "details": exc.details
        }),
    )


# バリデーションエラーハンドラー
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger = get_request_logger(request)

    # エラー情報の処理
    errors = []
    for error in exc.errors():
        processed_error = error.copy()
        if 'ctx' in processed_error and 'error' in processed_error['ctx']:
            if isinstance(processed_error['ctx']['error'], ValueError):
                processed_error['ctx']['error'] = str(processed_error['ctx']['error'])
        errors.append(processed_error)

    logger.warning(f"Validation error: {request.method} {request.url.path} Errors: {errors}")

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=jsonable_encoder({
            "success": False,
            "message": "リクエストの形式が正しくありません",
            "errors": errors
        }),
    )


# 想定外の例外ハンドラー
@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger = get_request_logger(request)
    logger.error(f"Unhandled error: {str(exc)}", exc_info=exc)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "success": False,
            "message": "サーバー内部でエラーが発生しました",
            "details": {"error": str(exc)}
        },
    )


# APIルーターの登録
app.include_router(api_router, prefix=settings.API_V1_PREFIX)

# ヘルスチェックはルート直下でも提供
app.include_router(health.router, tags=["ヘルスチェック"])

# 静的ファイル（フロントエンド）の配信
if os.path.isdir(settings.STATIC_DIR):
    app.mount("/static", StaticFiles(directory=settings.STATIC_DIR), name="static")


# ルートエンドポイント
@app.get("/")
async def root():
    index_path = os.path.join(settings.STATIC_DIR, "index.html")
    if os.path.isfile(index_path):
        return FileResponse(index_path)

    return {
        "message": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "docs_url": "/docs"
    }


if __name__ == "__main__":
    import uvicorn

    # アプリケーション起動時のログ
    app_logger.info(
        f"Starting {settings.APP_NAME} in {settings.ENVIRONMENT} mode "
        f"(Log level: {settings.LOG_LEVEL})"
    )

    uvicorn.run(app, host="0.0.0.0", port=8000)
