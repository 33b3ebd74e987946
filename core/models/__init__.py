"""Pydantic data models shared across all components."""

from core.models.events import Event, EventTypes
from core.models.market import (
    METALS,
    TIME_RANGES,
    CurrentPrice,
    Metal,
    PricePoint,
    SeriesSummary,
    TimeRange,
)
from core.models.reference import (
    ConversionResult,
    Currency,
    NewsArticle,
    RatioAnalysis,
    WeightUnit,
)

__all__ = [
    "Event",
    "EventTypes",
    "METALS",
    "TIME_RANGES",
    "Metal",
    "TimeRange",
    "PricePoint",
    "CurrentPrice",
    "SeriesSummary",
    "Currency",
    "WeightUnit",
    "ConversionResult",
    "RatioAnalysis",
    "NewsArticle",
]
