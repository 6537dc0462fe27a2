from datetime import datetime, timezone

# 空のデータベースに投入するサンプル記事
SAMPLE_ARTICLES = [
    {
        "title": "Microsoft Announces New AI Features",
        "content": (
            "Microsoft today announced revolutionary AI features coming to Windows and Office suite. "
            "The new capabilities include advanced natural language processing, improved productivity "
            "tools, and enhanced security features powered by artificial intelligence."
        ),
        "author": "MSN Tech Team",
        "category": "technology",
        "published_date": datetime(2025, 1, 15, tzinfo=timezone.utc),
        "views": 1250,
        "featured": True,
        "image": "/images/ai-news.jpg",
    },
    {
        "title": "Global Climate Summit Reaches Agreement",
        "content": (
            "World leaders at the climate summit have reached a historic agreement on carbon reduction "
            "targets. The agreement includes commitments from over 195 countries to reduce greenhouse "
            "gas emissions by 50% by 2030."
        ),
        "author": "MSN World News",
        "category": "world",
        "published_date": datetime(2025, 1, 14, tzinfo=timezone.utc),
        "views": 890,
        "featured": False,
        "image": "/images/climate-news.jpg",
    },
    {
        "title": "Stock Markets Hit Record Highs",
        "content": (
            "Major stock indices reached new record highs as investor confidence continues to grow. "
            "The S&P 500, Dow Jones, and NASDAQ all posted significant gains driven by strong quarterly "
            "earnings and positive economic indicators."
        ),
        "author": "MSN Finance",
        "category": "business",
        "published_date": datetime(2025, 1, 13, tzinfo=timezone.utc),
        "views": 2100,
        "featured": True,
        "image": "/images/stock-news.jpg",
    },
    {
        "title": "New COVID Variant Detected",
        "content": (
            "Health officials have identified a new COVID-19 variant with increased transmissibility. "
            "The WHO is monitoring the situation closely and recommends continued vaccination efforts."
        ),
        "author": "MSN Health",
        "category": "health",
        "published_date": datetime(2025, 1, 12, tzinfo=timezone.utc),
        "views": 1800,
        "featured": False,
        "image": "/images/health-news.jpg",
    },
    {
        "title": "Major Sports Trade Shakes Up League",
        "content": (
            "In a surprising move, a major trade has shaken up the professional sports world. "
            "The multi-player deal is expected to significantly impact the upcoming season."
        ),
        "author": "MSN Sports",
        "category": "sports",
        "published_date": datetime(2025, 1, 11, tzinfo=timezone.utc),
        "views": 950,
        "featured": False,
        "image": "/images/sports-news.jpg",
    },
]
