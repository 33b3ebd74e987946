"""Static market headlines served until a real news feed is wired in."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from core.models.reference import NewsArticle

_HEADLINES = (
    (
        "Gold Prices Surge Amid Global Economic Uncertainty",
        "Investors flock to safe-haven assets as market volatility increases.",
        "Market Watch",
    ),
    (
        "Silver Demand Rises with Green Energy Transition",
        "Industrial demand for silver increases due to solar panel production.",
        "Bloomberg",
    ),
    (
        "Central Banks Continue Gold Buying Spree",
        "Global central banks add to gold reserves for the third consecutive quarter.",
        "Reuters",
    ),
)


def market_news(now: datetime | None = None) -> list[NewsArticle]:
    """Demo headlines, newest first, each one hour older than the last."""
    now = now or datetime.now(timezone.utc)
    return [
        NewsArticle(
            id=str(i + 1),
            title=title,
            summary=summary,
            url="#",
            source=source,
            published_at=now - timedelta(hours=i),
        )
        for i, (title, summary, source) in enumerate(_HEADLINES)
    ]
