from sqlalchemy import String, Text, DateTime, Boolean, Integer
from sqlalchemy.orm import Mapped, mapped_column
from datetime import datetime
from typing import Optional

from news_service.db.base import Base


class Article(Base):
    __tablename__ = "articles"

    title: Mapped[str] = mapped_column(String(300))
    content: Mapped[str] = mapped_column(Text)
    author: Mapped[str] = mapped_column(String(100))
    category: Mapped[str] = mapped_column(String(100), index=True)  # 自由入力のカテゴリ名
    featured: Mapped[bool] = mapped_column(Boolean, default=False, index=True)
    image: Mapped[Optional[str]] = mapped_column(String(500))  # 画像パスまたはURL
    published_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), index=True)  # 作成時に一度だけ設定
    views: Mapped[int] = mapped_column(Integer, default=0)
