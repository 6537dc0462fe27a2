from datetime import datetime, timezone

from fastapi import APIRouter

from news_service.core.config import settings
from news_service.schemas import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """ヘルスチェック"""
    return HealthResponse(
        message=f"{settings.APP_NAME} is running",
        timestamp=datetime.now(timezone.utc)
    )
